"""OpenAI provider using the official SDK (Chat Completions API)."""

from datetime import datetime, timezone

import openai

from slides_server.app.slides.llm.base import (
    DEFAULT_IMAGE_MIME_TYPE,
    DEFAULT_MAX_TOKENS,
    DEFAULT_SYSTEM_PROMPT,
    DEFAULT_TEMPERATURE,
    AIProvider,
    GenerateOptions,
)
from slides_server.app.slides.schema.ai_config import ModelInfo
from slides_server.common.exception import errors
from slides_server.core.conf import settings

CHAT_MODEL_PREFIXES = ('gpt-', 'o1', 'o3')


def api_root(base_url: str) -> str:
    """Configured base urls omit the ``/v1`` suffix the SDK expects"""
    base_url = base_url.rstrip('/')
    return base_url if base_url.endswith('/v1') else f'{base_url}/v1'


class OpenAIProvider(AIProvider):
    """Provider for OpenAI and OpenAI compatible endpoints."""

    name = 'openai'
    default_model = 'gpt-4o'

    def __init__(self, api_key: str, base_url: str | None = None, model: str | None = None):
        super().__init__(api_key, base_url, model)
        self.client = openai.AsyncOpenAI(
            api_key=api_key,
            base_url=api_root(base_url) if base_url else None,
            timeout=settings.AI_REQUEST_TIMEOUT_SECONDS,
        )

    async def generate_content(self, prompt: str, options: GenerateOptions | None = None) -> str:
        options = options or GenerateOptions()
        user_content = [{'type': 'text', 'text': prompt}]
        if options.image_base64:
            mime_type = options.image_mime_type or DEFAULT_IMAGE_MIME_TYPE
            user_content.append({
                'type': 'image_url',
                'image_url': {'url': f'data:{mime_type};base64,{options.image_base64}'},
            })

        try:
            response = await self.client.chat.completions.create(
                model=options.model or self.model,
                messages=[
                    {'role': 'system', 'content': options.system_prompt or DEFAULT_SYSTEM_PROMPT},
                    {'role': 'user', 'content': user_content},
                ],
                max_tokens=options.max_tokens or DEFAULT_MAX_TOKENS,
                temperature=DEFAULT_TEMPERATURE if options.temperature is None else options.temperature,
            )
        except openai.APIStatusError as e:
            raise errors.ServerError(msg=f'OpenAI API error ({e.status_code}): {e.response.text}')
        except openai.APIError as e:
            raise errors.ServerError(msg=f'HTTP request failed: {e}')

        if not response.choices:
            return ''
        return response.choices[0].message.content or ''

    async def list_models(self) -> list[ModelInfo]:
        models = []
        try:
            async for model in self.client.models.list():
                if not model.id.startswith(CHAT_MODEL_PREFIXES):
                    continue
                created_at = datetime.fromtimestamp(model.created, tz=timezone.utc).isoformat() if model.created else None
                models.append(ModelInfo(id=model.id, display_name=model.id, created_at=created_at))
        except openai.APIStatusError as e:
            raise errors.ServerError(msg=f'OpenAI API error ({e.status_code}): {e.response.text}')
        except openai.APIError as e:
            raise errors.ServerError(msg=f'HTTP request failed: {e}')
        return models
