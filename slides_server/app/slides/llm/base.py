"""Base interface for AI text generation providers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from slides_server.app.slides.schema.ai_config import ModelInfo

DEFAULT_SYSTEM_PROMPT = 'You are a presentation assistant that generates markdown slides separated by ---.'
DEFAULT_MAX_TOKENS = 2000
DEFAULT_TEMPERATURE = 0.7
DEFAULT_IMAGE_MIME_TYPE = 'image/png'


@dataclass
class GenerateOptions:
    """Per call overrides, ``None`` falls back to the provider default"""

    system_prompt: str | None = None
    model: str | None = None
    max_tokens: int | None = None
    temperature: float | None = None
    image_base64: str | None = None
    image_mime_type: str | None = None


class AIProvider(ABC):
    """A single vendor's text generation API.

    Args:
        api_key: Decrypted API key
        base_url: Alternate API root, e.g. a local proxy
        model: Default model used when a call does not name one
    """

    name: str
    default_model: str

    def __init__(self, api_key: str, base_url: str | None = None, model: str | None = None):
        self.api_key = api_key
        self.base_url = base_url
        self.model = model or self.default_model

    @abstractmethod
    async def generate_content(self, prompt: str, options: GenerateOptions | None = None) -> str:
        """Generate a completion for a single user prompt.

        Args:
            prompt: User prompt
            options: Optional overrides, including an inline image

        Returns:
            Concatenated text of the response

        Raises:
            ServerError: If the vendor API fails or cannot be reached
        """

    @abstractmethod
    async def list_models(self) -> list[ModelInfo]:
        """List the chat capable models available to this key."""
