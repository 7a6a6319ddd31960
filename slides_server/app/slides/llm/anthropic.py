"""Anthropic provider using the official SDK."""

import anthropic

from slides_server.app.slides.llm.base import (
    DEFAULT_IMAGE_MIME_TYPE,
    DEFAULT_MAX_TOKENS,
    DEFAULT_SYSTEM_PROMPT,
    AIProvider,
    GenerateOptions,
)
from slides_server.app.slides.schema.ai_config import ModelInfo
from slides_server.common.exception import errors
from slides_server.core.conf import settings


class AnthropicProvider(AIProvider):
    """Provider for Anthropic Claude models."""

    name = 'anthropic'
    default_model = 'claude-sonnet-4-20250514'

    def __init__(self, api_key: str, base_url: str | None = None, model: str | None = None):
        super().__init__(api_key, base_url, model)
        client_kwargs = {'api_key': api_key, 'timeout': settings.AI_REQUEST_TIMEOUT_SECONDS}
        if base_url:
            client_kwargs['base_url'] = base_url
        self.client = anthropic.AsyncAnthropic(**client_kwargs)

    async def generate_content(self, prompt: str, options: GenerateOptions | None = None) -> str:
        options = options or GenerateOptions()
        content = []
        if options.image_base64:
            content.append({
                'type': 'image',
                'source': {
                    'type': 'base64',
                    'media_type': options.image_mime_type or DEFAULT_IMAGE_MIME_TYPE,
                    'data': options.image_base64,
                },
            })
        content.append({'type': 'text', 'text': prompt})

        try:
            response = await self.client.messages.create(
                model=options.model or self.model,
                max_tokens=options.max_tokens or DEFAULT_MAX_TOKENS,
                system=options.system_prompt or DEFAULT_SYSTEM_PROMPT,
                messages=[{'role': 'user', 'content': content}],
            )
        except anthropic.APIStatusError as e:
            raise errors.ServerError(msg=f'Anthropic API error ({e.status_code}): {e.response.text}')
        except anthropic.APIError as e:
            raise errors.ServerError(msg=f'HTTP request failed: {e}')

        return ''.join(block.text for block in response.content if block.type == 'text')

    async def list_models(self) -> list[ModelInfo]:
        models = []
        try:
            async for model in self.client.models.list():
                models.append(
                    ModelInfo(
                        id=model.id,
                        display_name=model.display_name,
                        created_at=model.created_at.isoformat() if model.created_at else None,
                    )
                )
        except anthropic.APIStatusError as e:
            raise errors.ServerError(msg=f'Anthropic API error ({e.status_code}): {e.response.text}')
        except anthropic.APIError as e:
            raise errors.ServerError(msg=f'HTTP request failed: {e}')
        return models
