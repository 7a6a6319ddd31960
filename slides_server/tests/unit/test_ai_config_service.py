"""Tests for AI provider configuration storage."""

import asyncio

from unittest.mock import MagicMock

import pytest

from slides_server.app.slides.schema.ai_config import CreateAiProviderConfigParam, UpdateAiProviderConfigParam
from slides_server.app.slides.service.ai_config_service import PLACEHOLDER_API_KEY, ai_config_service
from slides_server.common.exception.errors import NotFoundError, RequestError


class TestSaveConfig:
    @pytest.mark.asyncio
    async def test_key_is_stored_encrypted(self, db, context):
        config = await ai_config_service.save(
            db=db,
            encryption=context.encryption,
            obj=CreateAiProviderConfigParam(provider_name='anthropic', api_key='sk-secret'),
        )
        assert config.api_key_encrypted != 'sk-secret'
        assert context.encryption.decrypt(config.api_key_encrypted) == 'sk-secret'

    @pytest.mark.asyncio
    async def test_second_save_overwrites_but_keeps_created_at(self, db, context):
        first = await ai_config_service.save(
            db=db,
            encryption=context.encryption,
            obj=CreateAiProviderConfigParam(provider_name='openai', api_key='key-1', model='gpt-4o'),
        )
        first_id, created_at = first.id, first.created_at
        await asyncio.sleep(0.01)

        second = await ai_config_service.save(
            db=db,
            encryption=context.encryption,
            obj=CreateAiProviderConfigParam(
                provider_name='openai', api_key='key-2', model='gpt-4.1', base_url='http://localhost:8080'
            ),
        )
        assert second.id == first_id
        assert second.created_at == created_at
        assert second.model == 'gpt-4.1'
        assert second.base_url == 'http://localhost:8080'
        assert context.encryption.decrypt(second.api_key_encrypted) == 'key-2'
        assert len(await ai_config_service.get_list(db=db)) == 1

    @pytest.mark.asyncio
    async def test_base_url_without_key_stores_placeholder(self, db, context):
        config = await ai_config_service.save(
            db=db,
            encryption=context.encryption,
            obj=CreateAiProviderConfigParam(provider_name='openai', base_url='http://localhost:11434'),
        )
        assert context.encryption.decrypt(config.api_key_encrypted) == PLACEHOLDER_API_KEY

    @pytest.mark.asyncio
    async def test_key_or_base_url_required(self, db, context):
        with pytest.raises(RequestError) as exc_info:
            await ai_config_service.save(
                db=db, encryption=context.encryption, obj=CreateAiProviderConfigParam(provider_name='gemini')
            )
        assert exc_info.value.msg == 'apiKey or baseUrl required'


class TestUpdateConfig:
    @pytest.mark.asyncio
    async def test_partial_update(self, db, context):
        config = await ai_config_service.save(
            db=db,
            encryption=context.encryption,
            obj=CreateAiProviderConfigParam(provider_name='gemini', api_key='g-key', model='gemini-2.0-flash'),
        )
        updated = await ai_config_service.update(
            db=db,
            encryption=context.encryption,
            pk=config.id,
            obj=UpdateAiProviderConfigParam(model='gemini-2.5-pro'),
        )
        assert updated.model == 'gemini-2.5-pro'
        assert context.encryption.decrypt(updated.api_key_encrypted) == 'g-key'

    @pytest.mark.asyncio
    async def test_missing_config(self, db, context):
        with pytest.raises(NotFoundError):
            await ai_config_service.update(
                db=db, encryption=context.encryption, pk='missing', obj=UpdateAiProviderConfigParam(model='x')
            )

    @pytest.mark.asyncio
    async def test_delete_missing_is_silent(self, db):
        await ai_config_service.delete(db=db, pk='missing')


class TestGetProvider:
    @pytest.mark.asyncio
    async def test_missing_configuration(self, db, context):
        with pytest.raises(RequestError) as exc_info:
            await ai_config_service.get_provider(db=db, encryption=context.encryption, provider_name='anthropic')
        assert exc_info.value.msg == 'No anthropic configuration found. Add your API key in settings.'

    @pytest.mark.asyncio
    async def test_builds_provider_with_decrypted_key(self, db, context):
        await ai_config_service.save(
            db=db,
            encryption=context.encryption,
            obj=CreateAiProviderConfigParam(
                provider_name='anthropic', api_key='sk-ant', model='claude-x', base_url='http://proxy'
            ),
        )
        factory = MagicMock()
        provider = await ai_config_service.get_provider(
            db=db, encryption=context.encryption, provider_name='anthropic', factory=factory
        )
        factory.create_provider.assert_called_once_with('anthropic', 'sk-ant', 'http://proxy', 'claude-x')
        assert provider is factory.create_provider.return_value
