from typing import Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy_crud_plus import CRUDPlus

from slides_server.app.slides.model import LayoutRule


class CRUDLayoutRule(CRUDPlus[LayoutRule]):
    """CRUD operations for LayoutRule model."""

    async def get(self, db: AsyncSession, pk: str) -> LayoutRule | None:
        return await self.select_model(db, pk)

    async def get_by_name(self, db: AsyncSession, name: str) -> LayoutRule | None:
        result = await db.execute(select(self.model).where(self.model.name == name))
        return result.scalar_one_or_none()

    async def get_list(self, db: AsyncSession, *, only_enabled: bool = False) -> Sequence[LayoutRule]:
        """
        Rules in matching order

        :param db: Database session
        :param only_enabled: If True, skip disabled rules
        :return:
        """
        query = select(self.model)
        if only_enabled:
            query = query.where(self.model.enabled.is_(True))
        query = query.order_by(self.model.priority, self.model.name, self.model.id)
        result = await db.execute(query)
        return result.scalars().all()

    async def total(self, db: AsyncSession) -> int:
        return await db.scalar(select(func.count()).select_from(self.model)) or 0

    async def create(self, db: AsyncSession, rule: LayoutRule) -> LayoutRule:
        db.add(rule)
        await db.commit()
        await db.refresh(rule)
        return rule

    async def update(self, db: AsyncSession, rule: LayoutRule, values: dict) -> LayoutRule:
        for key, value in values.items():
            setattr(rule, key, value)
        await db.commit()
        await db.refresh(rule)
        return rule

    async def delete(self, db: AsyncSession, rule: LayoutRule) -> None:
        await db.delete(rule)
        await db.commit()


layout_rule_dao: CRUDLayoutRule = CRUDLayoutRule(LayoutRule)
