from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy_crud_plus import CRUDPlus

from slides_server.app.slides.model import Media


class CRUDMedia(CRUDPlus[Media]):
    """CRUD operations for Media model."""

    async def get(self, db: AsyncSession, pk: str) -> Media | None:
        return await self.select_model(db, pk)

    async def get_list(self, db: AsyncSession) -> Sequence[Media]:
        """Uploaded media, newest first"""
        result = await db.execute(select(self.model).order_by(self.model.created_at.desc()))
        return result.scalars().all()

    async def create(self, db: AsyncSession, media: Media) -> Media:
        db.add(media)
        await db.commit()
        await db.refresh(media)
        return media

    async def delete(self, db: AsyncSession, media: Media) -> None:
        await db.delete(media)
        await db.commit()


media_dao: CRUDMedia = CRUDMedia(Media)
