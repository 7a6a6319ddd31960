from typing import Any

from fastapi import APIRouter
from sqlalchemy.ext.asyncio import AsyncSession

from slides_server.app.slides.llm.base import AIProvider
from slides_server.app.slides.schema.ai import (
    AiGenerateDiagramParam,
    AiGenerateParam,
    AiGenerateThemeParam,
    AiImproveParam,
    AiOutlineToSlidesParam,
    AiRewriteParam,
    AiSpeakerNotesParam,
    AiSuggestStyleParam,
    AiVisualImproveParam,
    AiVisualReviewParam,
)
from slides_server.app.slides.service.ai_config_service import ai_config_service
from slides_server.app.slides.service.ai_service import ai_service
from slides_server.core.context import AppContext, CurrentContext
from slides_server.database.db import CurrentSession

router = APIRouter()


async def _provider(db: AsyncSession, context: AppContext, provider_name: str) -> AIProvider:
    return await ai_config_service.get_provider(
        db=db, encryption=context.encryption, provider_name=provider_name, factory=context.providers
    )


@router.post('/generate', summary='Generate slides from a prompt')
async def generate(db: CurrentSession, context: CurrentContext, obj: AiGenerateParam) -> dict[str, str]:
    provider = await _provider(db, context, obj.provider)
    return await ai_service.generate(provider=provider, obj=obj)


@router.post('/improve', summary='Improve one slide')
async def improve(db: CurrentSession, context: CurrentContext, obj: AiImproveParam) -> dict[str, str]:
    provider = await _provider(db, context, obj.provider)
    return await ai_service.improve(provider=provider, obj=obj)


@router.post('/suggest-style', summary='Suggest a theme for the content')
async def suggest_style(db: CurrentSession, context: CurrentContext, obj: AiSuggestStyleParam) -> dict[str, str]:
    provider = await _provider(db, context, obj.provider)
    return await ai_service.suggest_style(provider=provider, obj=obj)


@router.post('/generate-theme', summary='Generate a theme stylesheet')
async def generate_theme(db: CurrentSession, context: CurrentContext, obj: AiGenerateThemeParam) -> dict[str, Any]:
    provider = await _provider(db, context, obj.provider)
    return await ai_service.generate_theme(provider=provider, obj=obj)


@router.post('/speaker-notes', summary='Write speaker notes for a slide')
async def speaker_notes(db: CurrentSession, context: CurrentContext, obj: AiSpeakerNotesParam) -> dict[str, str]:
    provider = await _provider(db, context, obj.provider)
    return await ai_service.speaker_notes(provider=provider, obj=obj)


@router.post('/generate-diagram', summary='Generate a mermaid diagram')
async def generate_diagram(db: CurrentSession, context: CurrentContext, obj: AiGenerateDiagramParam) -> dict[str, str]:
    provider = await _provider(db, context, obj.provider)
    return await ai_service.generate_diagram(provider=provider, obj=obj)


@router.post('/rewrite', summary='Rewrite a slide for an audience')
async def rewrite(db: CurrentSession, context: CurrentContext, obj: AiRewriteParam) -> dict[str, str]:
    provider = await _provider(db, context, obj.provider)
    return await ai_service.rewrite(provider=provider, obj=obj)


@router.post('/outline-to-slides', summary='Expand an outline into slides')
async def outline_to_slides(db: CurrentSession, context: CurrentContext, obj: AiOutlineToSlidesParam) -> dict[str, str]:
    provider = await _provider(db, context, obj.provider)
    return await ai_service.outline_to_slides(provider=provider, obj=obj)


@router.post('/visual-review', summary='Review a rendered slide screenshot')
async def visual_review(db: CurrentSession, context: CurrentContext, obj: AiVisualReviewParam) -> dict[str, str]:
    provider = await _provider(db, context, obj.provider)
    return await ai_service.visual_review(provider=provider, obj=obj)


@router.post('/visual-improve', summary='Improve a slide from its screenshot')
async def visual_improve(db: CurrentSession, context: CurrentContext, obj: AiVisualImproveParam) -> dict[str, str]:
    provider = await _provider(db, context, obj.provider)
    return await ai_service.visual_improve(provider=provider, obj=obj)
