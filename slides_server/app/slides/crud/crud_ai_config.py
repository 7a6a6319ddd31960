"""CRUD operations for AI provider configurations."""

from typing import Sequence

from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy_crud_plus import CRUDPlus

from slides_server.app.slides.model import AiProviderConfig


class CRUDAiProviderConfig(CRUDPlus[AiProviderConfig]):
    """CRUD operations for AiProviderConfig model."""

    async def get(self, db: AsyncSession, pk: str) -> AiProviderConfig | None:
        return await self.select_model(db, pk)

    async def get_by_user_id(self, db: AsyncSession, user_id: str) -> Sequence[AiProviderConfig]:
        result = await db.execute(
            select(self.model).where(self.model.user_id == user_id).order_by(self.model.provider_name)
        )
        return result.scalars().all()

    async def get_by_user_and_provider(
        self, db: AsyncSession, user_id: str, provider_name: str
    ) -> AiProviderConfig | None:
        """
        Get the configuration of one provider for a user

        :param db: Database session
        :param user_id: User ID
        :param provider_name: anthropic, openai or gemini
        :return:
        """
        result = await db.execute(
            select(self.model).where(
                and_(
                    self.model.user_id == user_id,
                    self.model.provider_name == provider_name,
                )
            )
        )
        return result.scalar_one_or_none()

    async def create_or_update(
        self,
        db: AsyncSession,
        *,
        user_id: str,
        provider_name: str,
        api_key_encrypted: str,
        model: str | None,
        base_url: str | None,
    ) -> AiProviderConfig:
        """
        Create or overwrite the configuration of one provider

        An overwrite keeps the row's id and ``created_at``.

        :param db: Database session
        :param user_id: User ID
        :param provider_name: Provider name
        :param api_key_encrypted: Encrypted API key
        :param model: Model override
        :param base_url: Alternate API base url
        :return:
        """
        existing = await self.get_by_user_and_provider(db, user_id, provider_name)

        if existing:
            existing.api_key_encrypted = api_key_encrypted
            existing.model = model
            existing.base_url = base_url
            await db.commit()
            await db.refresh(existing)
            return existing

        config = self.model(
            user_id=user_id,
            provider_name=provider_name,
            api_key_encrypted=api_key_encrypted,
            model=model,
            base_url=base_url,
        )
        db.add(config)
        await db.commit()
        await db.refresh(config)
        return config

    async def update(self, db: AsyncSession, config: AiProviderConfig, values: dict) -> AiProviderConfig:
        for key, value in values.items():
            setattr(config, key, value)
        await db.commit()
        await db.refresh(config)
        return config

    async def delete(self, db: AsyncSession, pk: str) -> int:
        count = await self.delete_model(db, pk)
        await db.commit()
        return count


ai_config_dao: CRUDAiProviderConfig = CRUDAiProviderConfig(AiProviderConfig)
