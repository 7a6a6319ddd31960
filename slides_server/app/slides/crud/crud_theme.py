from typing import Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy_crud_plus import CRUDPlus

from slides_server.app.slides.model import Theme


class CRUDTheme(CRUDPlus[Theme]):
    """CRUD operations for Theme model."""

    async def get(self, db: AsyncSession, pk: str) -> Theme | None:
        return await self.select_model(db, pk)

    async def get_by_name(self, db: AsyncSession, name: str) -> Theme | None:
        result = await db.execute(select(self.model).where(self.model.name == name))
        return result.scalar_one_or_none()

    async def get_list(self, db: AsyncSession) -> Sequence[Theme]:
        """Built-in themes first, then by name"""
        result = await db.execute(select(self.model).order_by(self.model.is_default.desc(), self.model.name))
        return result.scalars().all()

    async def total(self, db: AsyncSession) -> int:
        return await db.scalar(select(func.count()).select_from(self.model)) or 0

    async def create(self, db: AsyncSession, theme: Theme) -> Theme:
        db.add(theme)
        await db.commit()
        await db.refresh(theme)
        return theme

    async def update(self, db: AsyncSession, theme: Theme, values: dict) -> Theme:
        for key, value in values.items():
            setattr(theme, key, value)
        await db.commit()
        await db.refresh(theme)
        return theme

    async def delete(self, db: AsyncSession, theme: Theme) -> None:
        await db.delete(theme)
        await db.commit()


theme_dao: CRUDTheme = CRUDTheme(Theme)
