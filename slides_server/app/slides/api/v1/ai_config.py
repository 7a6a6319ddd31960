from typing import Annotated

from fastapi import APIRouter, Path, Response, status

from slides_server.app.slides.model import AiProviderConfig
from slides_server.app.slides.schema.ai_config import (
    CreateAiProviderConfigParam,
    GetAiProviderConfigDetail,
    ModelInfo,
    UpdateAiProviderConfigParam,
)
from slides_server.app.slides.service.ai_config_service import ai_config_service
from slides_server.core.context import CurrentContext
from slides_server.database.db import CurrentSession

router = APIRouter()


def _to_detail(config: AiProviderConfig) -> GetAiProviderConfigDetail:
    """Convert a stored configuration to its response, never exposing the key."""
    return GetAiProviderConfigDetail(
        id=config.id,
        provider_name=config.provider_name,
        model=config.model,
        base_url=config.base_url,
        has_key=True,
    )


@router.get('', summary='List AI provider configurations', response_model=list[GetAiProviderConfigDetail])
async def get_ai_configs(db: CurrentSession):
    configs = await ai_config_service.get_list(db=db)
    return [_to_detail(config) for config in configs]


@router.post('', summary='Create or replace a provider configuration', response_model=GetAiProviderConfigDetail)
async def save_ai_config(db: CurrentSession, context: CurrentContext, obj: CreateAiProviderConfigParam):
    config = await ai_config_service.save(db=db, encryption=context.encryption, obj=obj)
    return _to_detail(config)


@router.put('/{pk}', summary='Update a provider configuration', response_model=GetAiProviderConfigDetail)
async def update_ai_config(
    db: CurrentSession,
    context: CurrentContext,
    pk: Annotated[str, Path(description='Configuration ID')],
    obj: UpdateAiProviderConfigParam,
):
    config = await ai_config_service.update(db=db, encryption=context.encryption, pk=pk, obj=obj)
    return _to_detail(config)


@router.delete('/{pk}', summary='Delete a provider configuration', status_code=status.HTTP_204_NO_CONTENT)
async def delete_ai_config(db: CurrentSession, pk: Annotated[str, Path(description='Configuration ID')]) -> Response:
    await ai_config_service.delete(db=db, pk=pk)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get('/{provider}/models', summary='List the models a provider offers', response_model=list[ModelInfo])
async def get_provider_models(
    db: CurrentSession,
    context: CurrentContext,
    provider: Annotated[str, Path(description='anthropic, openai or gemini')],
):
    return await ai_config_service.list_models(
        db=db, encryption=context.encryption, provider_name=provider, factory=context.providers
    )
