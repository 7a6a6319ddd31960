"""Slide assistant operations.

Each operation composes a fixed prompt for an already configured provider and
shapes the completion into the response body the editor expects.
"""

import json

from typing import Any

from slides_server.app.slides.llm import prompts
from slides_server.app.slides.llm.base import AIProvider, GenerateOptions
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
from slides_server.common.exception import errors
from slides_server.common.log import log

SCREENSHOT_MIME_TYPE = 'image/png'
VISUAL_REVIEW_MAX_TOKENS = 1500
VISUAL_IMPROVE_MAX_TOKENS = 3000


def extract_json_object(text: str) -> dict[str, Any]:
    """Parse the JSON object spanning the first ``{`` to the last ``}`` of a completion"""
    start = text.find('{')
    end = text.rfind('}')
    if start == -1 or end < start:
        raise errors.ServerError(msg='AI returned invalid theme format')
    try:
        parsed = json.loads(text[start : end + 1])
    except json.JSONDecodeError:
        raise errors.ServerError(msg='AI returned invalid theme format')
    if not isinstance(parsed, dict):
        raise errors.ServerError(msg='AI returned invalid theme format')
    return parsed


def strip_code_fences(text: str) -> str:
    text = text.strip()
    text = text.removeprefix('```mermaid').removeprefix('```')
    return text.removesuffix('```').strip()


class AiService:
    """Prompt composition for the AI endpoints."""

    @staticmethod
    async def generate(*, provider: AIProvider, obj: AiGenerateParam) -> dict[str, str]:
        content = await provider.generate_content(
            obj.prompt, GenerateOptions(system_prompt=prompts.generate_system(obj.context))
        )
        return {'content': content}

    @staticmethod
    async def improve(*, provider: AIProvider, obj: AiImproveParam) -> dict[str, str]:
        content = await provider.generate_content(
            prompts.improve_prompt(obj.slide_content, obj.instruction),
            GenerateOptions(system_prompt=prompts.DESIGN_EXPERT_MARKDOWN),
        )
        return {'content': content}

    @staticmethod
    async def suggest_style(*, provider: AIProvider, obj: AiSuggestStyleParam) -> dict[str, str]:
        suggestion = await provider.generate_content(
            prompts.suggest_style_prompt(obj.content),
            GenerateOptions(system_prompt=prompts.DESIGN_EXPERT_CONCISE),
        )
        return {'suggestion': suggestion}

    @staticmethod
    async def generate_theme(*, provider: AIProvider, obj: AiGenerateThemeParam) -> dict[str, Any]:
        """
        Ask for a theme and return the JSON object found in the completion

        :param provider: Configured provider
        :param obj: Theme description and optional reference stylesheet
        :return: the parsed object, typically ``name``, ``displayName`` and ``cssContent``
        """
        result = await provider.generate_content(
            prompts.theme_prompt(obj.description),
            GenerateOptions(system_prompt=prompts.theme_system(obj.existing_css)),
        )
        try:
            return extract_json_object(result)
        except errors.ServerError:
            log.warning(f'Theme completion was not a JSON object ({len(result)} chars)')
            raise

    @staticmethod
    async def speaker_notes(*, provider: AIProvider, obj: AiSpeakerNotesParam) -> dict[str, str]:
        notes = await provider.generate_content(
            prompts.speaker_notes_prompt(obj.slide_content),
            GenerateOptions(system_prompt=prompts.SPEAKER_NOTES_SYSTEM),
        )
        return {'notes': notes}

    @staticmethod
    async def generate_diagram(*, provider: AIProvider, obj: AiGenerateDiagramParam) -> dict[str, str]:
        result = await provider.generate_content(
            prompts.diagram_prompt(obj.description),
            GenerateOptions(system_prompt=prompts.DIAGRAM_SYSTEM),
        )
        return {'mermaid': strip_code_fences(result)}

    @staticmethod
    async def rewrite(*, provider: AIProvider, obj: AiRewriteParam) -> dict[str, str]:
        content = await provider.generate_content(
            prompts.rewrite_prompt(obj.slide_content, obj.audience),
            GenerateOptions(system_prompt=prompts.rewrite_system()),
        )
        return {'content': content}

    @staticmethod
    async def outline_to_slides(*, provider: AIProvider, obj: AiOutlineToSlidesParam) -> dict[str, str]:
        content = await provider.generate_content(
            prompts.outline_prompt(obj.outline),
            GenerateOptions(system_prompt=prompts.outline_system()),
        )
        return {'content': content}

    @staticmethod
    async def visual_review(*, provider: AIProvider, obj: AiVisualReviewParam) -> dict[str, str]:
        review = await provider.generate_content(
            prompts.visual_review_prompt(obj.slide_content),
            GenerateOptions(
                system_prompt=prompts.VISUAL_REVIEW_SYSTEM,
                image_base64=obj.screenshot,
                image_mime_type=SCREENSHOT_MIME_TYPE,
                max_tokens=VISUAL_REVIEW_MAX_TOKENS,
            ),
        )
        return {'review': review}

    @staticmethod
    async def visual_improve(*, provider: AIProvider, obj: AiVisualImproveParam) -> dict[str, str]:
        content = await provider.generate_content(
            prompts.visual_improve_prompt(obj.slide_content, obj.instruction),
            GenerateOptions(
                system_prompt=prompts.VISUAL_IMPROVE_SYSTEM,
                image_base64=obj.screenshot,
                image_mime_type=SCREENSHOT_MIME_TYPE,
                max_tokens=VISUAL_IMPROVE_MAX_TOKENS,
            ),
        )
        return {'content': content}


ai_service: AiService = AiService()
