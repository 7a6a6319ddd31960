from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy_crud_plus import CRUDPlus

from slides_server.app.slides.model import Presentation
from slides_server.utils.timezone import timezone


class CRUDPresentation(CRUDPlus[Presentation]):
    """CRUD operations for Presentation model."""

    async def get(self, db: AsyncSession, pk: str) -> Presentation | None:
        return await self.select_model(db, pk)

    async def get_list(self, db: AsyncSession) -> Sequence[Presentation]:
        """Every presentation, most recently updated first"""
        result = await db.execute(select(self.model).order_by(self.model.updated_at.desc()))
        return result.scalars().all()

    async def create(self, db: AsyncSession, *, title: str, content: str, theme: str, user_id: str) -> Presentation:
        presentation = self.model(title=title, content=content, theme=theme, user_id=user_id)
        db.add(presentation)
        await db.commit()
        await db.refresh(presentation)
        return presentation

    async def update(
        self,
        db: AsyncSession,
        presentation: Presentation,
        *,
        title: str | None = None,
        content: str | None = None,
        theme: str | None = None,
    ) -> Presentation:
        """
        Update the given fields, ``None`` leaves a field unchanged

        ``updated_at`` is refreshed even when nothing else changes.

        :param db: Database session
        :param presentation: Presentation to update
        :param title: New title
        :param content: New markdown content
        :param theme: New theme name
        :return:
        """
        if title is not None:
            presentation.title = title
        if content is not None:
            presentation.content = content
        if theme is not None:
            presentation.theme = theme
        presentation.updated_at = timezone.now()
        await db.commit()
        await db.refresh(presentation)
        return presentation

    async def delete(self, db: AsyncSession, pk: str) -> int:
        count = await self.delete_model(db, pk)
        await db.commit()
        return count


presentation_dao: CRUDPresentation = CRUDPresentation(Presentation)
