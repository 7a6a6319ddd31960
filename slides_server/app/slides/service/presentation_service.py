"""Presentation service layer."""

from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from slides_server.app.slides.crud.crud_presentation import presentation_dao
from slides_server.app.slides.model import Presentation
from slides_server.app.slides.schema.presentation import CreatePresentationParam, UpdatePresentationParam
from slides_server.common.exception import errors
from slides_server.common.log import log
from slides_server.core.conf import settings

DEFAULT_THEME = 'default'
SLIDE_SEPARATOR = '\n\n---\n\n'


class PresentationService:
    """Service for managing presentations."""

    @staticmethod
    async def get_list(*, db: AsyncSession) -> Sequence[Presentation]:
        return await presentation_dao.get_list(db)

    @staticmethod
    async def get(*, db: AsyncSession, pk: str) -> Presentation:
        """
        Get a presentation

        :param db: Database session
        :param pk: Presentation ID
        :return:
        """
        presentation = await presentation_dao.get(db, pk)
        if not presentation:
            raise errors.NotFoundError(msg=f'Presentation {pk} not found')
        return presentation

    @staticmethod
    async def create(*, db: AsyncSession, obj: CreatePresentationParam) -> Presentation:
        presentation = await presentation_dao.create(
            db,
            title=obj.title,
            content=obj.content or '',
            theme=obj.theme or DEFAULT_THEME,
            user_id=settings.LOCAL_USER_ID,
        )
        log.info(f'Created presentation {presentation.id}')
        return presentation

    @staticmethod
    async def update(*, db: AsyncSession, pk: str, obj: UpdatePresentationParam) -> Presentation:
        """
        Update a presentation, omitted fields keep their stored value

        :param db: Database session
        :param pk: Presentation ID
        :param obj: Fields to change
        :return:
        """
        presentation = await PresentationService.get(db=db, pk=pk)
        return await presentation_dao.update(
            db, presentation, title=obj.title, content=obj.content, theme=obj.theme
        )

    @staticmethod
    async def add_slides(*, db: AsyncSession, pk: str, slides: str) -> Presentation:
        """Append markdown slides after the existing content"""
        presentation = await PresentationService.get(db=db, pk=pk)
        content = presentation.content.rstrip() + SLIDE_SEPARATOR + slides
        return await presentation_dao.update(db, presentation, content=content)

    @staticmethod
    async def delete(*, db: AsyncSession, pk: str) -> None:
        count = await presentation_dao.delete(db, pk)
        if count == 0:
            raise errors.NotFoundError(msg=f'Presentation {pk} not found')
        log.info(f'Deleted presentation {pk}')


presentation_service: PresentationService = PresentationService()
