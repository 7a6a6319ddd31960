"""Gemini provider using the official Google GenAI SDK."""

import base64
import binascii

from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from slides_server.app.slides.llm.base import (
    DEFAULT_IMAGE_MIME_TYPE,
    DEFAULT_MAX_TOKENS,
    DEFAULT_TEMPERATURE,
    AIProvider,
    GenerateOptions,
)
from slides_server.app.slides.schema.ai_config import ModelInfo
from slides_server.common.exception import errors
from slides_server.core.conf import settings

MODEL_NAME_PREFIX = 'models/'


class GeminiProvider(AIProvider):
    """Provider for Google Gemini models."""

    name = 'gemini'
    default_model = 'gemini-2.0-flash'

    def __init__(self, api_key: str, base_url: str | None = None, model: str | None = None):
        super().__init__(api_key, base_url, model)
        http_options = types.HttpOptions(
            base_url=base_url or None,
            timeout=int(settings.AI_REQUEST_TIMEOUT_SECONDS * 1000),
        )
        self.client = genai.Client(api_key=api_key, http_options=http_options)

    async def generate_content(self, prompt: str, options: GenerateOptions | None = None) -> str:
        options = options or GenerateOptions()
        parts = [types.Part(text=prompt)]
        if options.image_base64:
            try:
                image = base64.b64decode(options.image_base64, validate=True)
            except (binascii.Error, ValueError) as e:
                raise errors.RequestError(msg=f'Invalid image data: {e}')
            parts.append(
                types.Part(
                    inline_data=types.Blob(
                        mime_type=options.image_mime_type or DEFAULT_IMAGE_MIME_TYPE,
                        data=image,
                    )
                )
            )

        config = types.GenerateContentConfig(
            system_instruction=options.system_prompt,
            temperature=DEFAULT_TEMPERATURE if options.temperature is None else options.temperature,
            max_output_tokens=options.max_tokens or DEFAULT_MAX_TOKENS,
        )

        try:
            response = await self.client.aio.models.generate_content(
                model=options.model or self.model,
                contents=[types.Content(role='user', parts=parts)],
                config=config,
            )
        except genai_errors.APIError as e:
            raise errors.ServerError(msg=f'Gemini API error ({e.code}): {e.message}')

        return response.text or ''

    async def list_models(self) -> list[ModelInfo]:
        models = []
        try:
            async for model in await self.client.aio.models.list():
                if not model.name or 'gemini' not in model.name:
                    continue
                model_id = model.name.removeprefix(MODEL_NAME_PREFIX)
                models.append(ModelInfo(id=model_id, display_name=model.display_name or model_id))
        except genai_errors.APIError as e:
            raise errors.ServerError(msg=f'Gemini API error ({e.code}): {e.message}')
        return models
