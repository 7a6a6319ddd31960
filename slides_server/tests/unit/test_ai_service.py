"""Tests for the slide assistant operations with a mocked provider."""

from unittest.mock import AsyncMock

import pytest

from slides_server.app.slides.llm import prompts
from slides_server.app.slides.schema.ai import (
    AiGenerateDiagramParam,
    AiGenerateParam,
    AiGenerateThemeParam,
    AiImproveParam,
    AiRewriteParam,
    AiSpeakerNotesParam,
    AiVisualImproveParam,
    AiVisualReviewParam,
)
from slides_server.app.slides.service.ai_service import ai_service, extract_json_object, strip_code_fences
from slides_server.common.exception.errors import ServerError


def make_provider(reply: str) -> AsyncMock:
    provider = AsyncMock()
    provider.generate_content.return_value = reply
    return provider


class TestExtractJsonObject:
    def test_plain_object(self):
        assert extract_json_object('{"name": "ocean"}') == {'name': 'ocean'}

    def test_object_surrounded_by_prose(self):
        text = 'Here is your theme:\n```json\n{"name": "ocean", "cssContent": ".a { color: red; }"}\n```\nEnjoy!'
        assert extract_json_object(text) == {'name': 'ocean', 'cssContent': '.a { color: red; }'}

    @pytest.mark.parametrize('text', ['no json here', '} backwards {', '{"unterminated": ', '{not: json}'])
    def test_invalid(self, text):
        with pytest.raises(ServerError) as exc_info:
            extract_json_object(text)
        assert exc_info.value.msg == 'AI returned invalid theme format'


class TestStripCodeFences:
    def test_mermaid_fence(self):
        assert strip_code_fences('```mermaid\ngraph TD\n  A-->B\n```') == 'graph TD\n  A-->B'

    def test_bare_fence(self):
        assert strip_code_fences('```\nsequenceDiagram\n```\n') == 'sequenceDiagram'

    def test_unfenced(self):
        assert strip_code_fences('  pie title Pets\n') == 'pie title Pets'


class TestAiOperations:
    @pytest.mark.asyncio
    async def test_generate_includes_context(self):
        provider = make_provider('# Slide')
        result = await ai_service.generate(
            provider=provider, obj=AiGenerateParam(prompt='Intro to Rust', provider='openai', context='For kids')
        )
        assert result == {'content': '# Slide'}
        prompt, options = provider.generate_content.await_args.args
        assert prompt == 'Intro to Rust'
        assert 'For kids' in options.system_prompt
        assert prompts.SLIDE_FORMAT_GUIDE in options.system_prompt

    @pytest.mark.asyncio
    async def test_improve_mentions_instruction(self):
        provider = make_provider('better')
        result = await ai_service.improve(
            provider=provider,
            obj=AiImproveParam(slide_content='# Draft', provider='anthropic', instruction='shorter'),
        )
        assert result == {'content': 'better'}
        prompt, _ = provider.generate_content.await_args.args
        assert prompt.startswith('Improve this slide content (shorter):')

    @pytest.mark.asyncio
    async def test_generate_theme_parses_json(self):
        provider = make_provider('Sure! {"name": "ocean", "displayName": "Ocean", "cssContent": ".x{}"} done')
        result = await ai_service.generate_theme(
            provider=provider, obj=AiGenerateThemeParam(description='calm blue', provider='gemini')
        )
        assert result == {'name': 'ocean', 'displayName': 'Ocean', 'cssContent': '.x{}'}

    @pytest.mark.asyncio
    async def test_generate_theme_rejects_prose(self):
        provider = make_provider('I cannot do that')
        with pytest.raises(ServerError):
            await ai_service.generate_theme(
                provider=provider, obj=AiGenerateThemeParam(description='calm blue', provider='gemini')
            )

    @pytest.mark.asyncio
    async def test_generate_theme_passes_reference_css(self):
        provider = make_provider('{"name": "x"}')
        await ai_service.generate_theme(
            provider=provider,
            obj=AiGenerateThemeParam(description='x', provider='openai', existing_css='.ref { color: red; }'),
        )
        _, options = provider.generate_content.await_args.args
        assert '.ref { color: red; }' in options.system_prompt

    @pytest.mark.asyncio
    async def test_speaker_notes(self):
        provider = make_provider('Say hello')
        result = await ai_service.speaker_notes(
            provider=provider, obj=AiSpeakerNotesParam(slide_content='# Hi', provider='openai')
        )
        assert result == {'notes': 'Say hello'}

    @pytest.mark.asyncio
    async def test_generate_diagram_strips_fences(self):
        provider = make_provider('```mermaid\nflowchart LR\n  A-->B\n```')
        result = await ai_service.generate_diagram(
            provider=provider, obj=AiGenerateDiagramParam(description='a to b', provider='openai')
        )
        assert result == {'mermaid': 'flowchart LR\n  A-->B'}

    @pytest.mark.asyncio
    async def test_rewrite_names_audience(self):
        provider = make_provider('rewritten')
        await ai_service.rewrite(
            provider=provider, obj=AiRewriteParam(slide_content='# Tech', provider='openai', audience='executive')
        )
        prompt, _ = provider.generate_content.await_args.args
        assert 'for a executive audience' in prompt

    @pytest.mark.asyncio
    async def test_visual_review_sends_screenshot(self):
        provider = make_provider('Looks cramped')
        result = await ai_service.visual_review(
            provider=provider,
            obj=AiVisualReviewParam(slide_content='# A', screenshot='iVBORw0KGgo=', provider='anthropic'),
        )
        assert result == {'review': 'Looks cramped'}
        _, options = provider.generate_content.await_args.args
        assert options.image_base64 == 'iVBORw0KGgo='
        assert options.image_mime_type == 'image/png'
        assert options.max_tokens == 1500

    @pytest.mark.asyncio
    async def test_visual_improve_uses_larger_budget(self):
        provider = make_provider('# Fixed')
        result = await ai_service.visual_improve(
            provider=provider,
            obj=AiVisualImproveParam(slide_content='# A', screenshot='iVBORw0KGgo=', provider='openai'),
        )
        assert result == {'content': '# Fixed'}
        _, options = provider.generate_content.await_args.args
        assert options.max_tokens == 3000
