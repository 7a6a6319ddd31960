"""AI provider configuration service layer."""

from typing import Sequence, Type

from sqlalchemy.ext.asyncio import AsyncSession

from slides_server.app.slides.crud.crud_ai_config import ai_config_dao
from slides_server.app.slides.llm.base import AIProvider
from slides_server.app.slides.llm.factory import AIProviderFactory
from slides_server.app.slides.model import AiProviderConfig
from slides_server.app.slides.schema.ai_config import (
    CreateAiProviderConfigParam,
    ModelInfo,
    UpdateAiProviderConfigParam,
)
from slides_server.common.exception import errors
from slides_server.common.log import log
from slides_server.common.security.encryption import EncryptionManager
from slides_server.core.conf import settings

# Stored in place of a key for keyless proxies
PLACEHOLDER_API_KEY = 'not-needed'


class AiConfigService:
    """Service for managing AI provider credentials."""

    @staticmethod
    async def get_list(*, db: AsyncSession) -> Sequence[AiProviderConfig]:
        return await ai_config_dao.get_by_user_id(db, settings.LOCAL_USER_ID)

    @staticmethod
    async def save(
        *, db: AsyncSession, encryption: EncryptionManager, obj: CreateAiProviderConfigParam
    ) -> AiProviderConfig:
        """
        Create or overwrite the configuration of one provider

        :param db: Database session
        :param encryption: Encryption manager for the API key
        :param obj: Configuration to store
        :return:
        """
        if not obj.api_key and not obj.base_url:
            raise errors.RequestError(msg='apiKey or baseUrl required')

        config = await ai_config_dao.create_or_update(
            db,
            user_id=settings.LOCAL_USER_ID,
            provider_name=obj.provider_name,
            api_key_encrypted=encryption.encrypt(obj.api_key or PLACEHOLDER_API_KEY),
            model=obj.model,
            base_url=obj.base_url,
        )
        log.info(f'Saved {obj.provider_name} configuration')
        return config

    @staticmethod
    async def update(
        *, db: AsyncSession, encryption: EncryptionManager, pk: str, obj: UpdateAiProviderConfigParam
    ) -> AiProviderConfig:
        config = await ai_config_dao.get(db, pk)
        if not config or config.user_id != settings.LOCAL_USER_ID:
            raise errors.NotFoundError(msg='Configuration not found')

        values = obj.model_dump(exclude_unset=True, exclude={'api_key'})
        if obj.api_key:
            values['api_key_encrypted'] = encryption.encrypt(obj.api_key)
        return await ai_config_dao.update(db, config, values)

    @staticmethod
    async def delete(*, db: AsyncSession, pk: str) -> None:
        await ai_config_dao.delete(db, pk)

    @staticmethod
    async def get_provider(
        *,
        db: AsyncSession,
        encryption: EncryptionManager,
        provider_name: str,
        factory: Type[AIProviderFactory] = AIProviderFactory,
    ) -> AIProvider:
        """
        Build a provider client from the stored configuration

        :param db: Database session
        :param encryption: Encryption manager for the API key
        :param provider_name: anthropic, openai or gemini
        :param factory: Provider factory
        :return:
        """
        config = await ai_config_dao.get_by_user_and_provider(db, settings.LOCAL_USER_ID, provider_name)
        if not config:
            raise errors.RequestError(msg=f'No {provider_name} configuration found. Add your API key in settings.')

        api_key = encryption.decrypt(config.api_key_encrypted)
        return factory.create_provider(provider_name, api_key, config.base_url, config.model)

    @staticmethod
    async def list_models(
        *,
        db: AsyncSession,
        encryption: EncryptionManager,
        provider_name: str,
        factory: Type[AIProviderFactory] = AIProviderFactory,
    ) -> list[ModelInfo]:
        provider = await AiConfigService.get_provider(
            db=db, encryption=encryption, provider_name=provider_name, factory=factory
        )
        return await provider.list_models()


ai_config_service: AiConfigService = AiConfigService()
