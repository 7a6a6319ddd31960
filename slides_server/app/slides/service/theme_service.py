"""Theme service layer."""

from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from slides_server.app.slides.crud.crud_theme import theme_dao
from slides_server.app.slides.model import Theme
from slides_server.app.slides.schema.theme import CreateThemeParam, UpdateThemeParam
from slides_server.common.exception import errors
from slides_server.common.log import log
from slides_server.core.conf import settings


class ThemeService:
    """Service for managing themes."""

    @staticmethod
    async def get_list(*, db: AsyncSession) -> Sequence[Theme]:
        return await theme_dao.get_list(db)

    @staticmethod
    async def get(*, db: AsyncSession, id_or_name: str) -> Theme:
        """
        Get a theme by id, falling back to its name

        :param db: Database session
        :param id_or_name: Theme ID or unique name
        :return:
        """
        theme = await theme_dao.get(db, id_or_name) or await theme_dao.get_by_name(db, id_or_name)
        if not theme:
            raise errors.NotFoundError(msg='Theme not found')
        return theme

    @staticmethod
    async def create(*, db: AsyncSession, obj: CreateThemeParam) -> Theme:
        if await theme_dao.get_by_name(db, obj.name):
            raise errors.RequestError(msg=f'Theme {obj.name} already exists')
        theme = Theme(
            name=obj.name,
            display_name=obj.display_name,
            css_content=obj.css_content,
            is_default=False,
            center_content=True if obj.center_content is None else obj.center_content,
            user_id=settings.LOCAL_USER_ID,
        )
        theme = await theme_dao.create(db, theme)
        log.info(f'Created theme {theme.name}')
        return theme

    @staticmethod
    async def _get_editable(db: AsyncSession, pk: str, action: str) -> Theme:
        theme = await theme_dao.get(db, pk)
        if not theme:
            raise errors.NotFoundError(msg='Theme not found')
        if theme.is_default:
            raise errors.ForbiddenError(msg=f'Cannot {action} default themes')
        return theme

    @staticmethod
    async def update(*, db: AsyncSession, pk: str, obj: UpdateThemeParam) -> Theme:
        theme = await ThemeService._get_editable(db, pk, 'modify')
        return await theme_dao.update(db, theme, obj.model_dump(exclude_none=True))

    @staticmethod
    async def delete(*, db: AsyncSession, pk: str) -> None:
        theme = await ThemeService._get_editable(db, pk, 'delete')
        await theme_dao.delete(db, theme)
        log.info(f'Deleted theme {theme.name}')


theme_service: ThemeService = ThemeService()
