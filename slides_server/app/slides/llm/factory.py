"""Factory for creating AI providers from stored configuration."""

import logging

from typing import Type

from slides_server.app.slides.llm.anthropic import AnthropicProvider
from slides_server.app.slides.llm.base import AIProvider
from slides_server.app.slides.llm.gemini import GeminiProvider
from slides_server.app.slides.llm.openai import OpenAIProvider
from slides_server.common.exception import errors

logger = logging.getLogger(__name__)


class AIProviderFactory:
    """Factory for creating provider clients by name."""

    # Registry mapping provider names to provider classes
    _provider_registry: dict[str, Type[AIProvider]] = {
        AnthropicProvider.name: AnthropicProvider,
        OpenAIProvider.name: OpenAIProvider,
        GeminiProvider.name: GeminiProvider,
    }

    @classmethod
    def create_provider(
        cls,
        provider_name: str,
        api_key: str,
        base_url: str | None = None,
        model: str | None = None,
    ) -> AIProvider:
        """
        Create the provider registered under ``provider_name``.

        Args:
            provider_name: anthropic, openai or gemini
            api_key: Decrypted API key
            base_url: Alternate API root
            model: Default model override

        Returns:
            Provider instance using the vendor SDK

        Raises:
            RequestError: If no provider is registered under that name
        """
        provider_class = cls._provider_registry.get(provider_name)
        if not provider_class:
            raise errors.RequestError(msg=f'Unknown AI provider: {provider_name}')

        logger.debug(f'Creating {provider_class.__name__} (model: {model or provider_class.default_model})')
        return provider_class(api_key, base_url, model)

    @classmethod
    def register_provider(cls, provider_name: str, provider_class: Type[AIProvider]) -> None:
        """
        Register a provider implementation under a new or existing name.

        Args:
            provider_name: Name used in stored configurations
            provider_class: Provider class to register
        """
        logger.info(f'Registering provider {provider_class.__name__} for {provider_name}')
        cls._provider_registry[provider_name] = provider_class

    @classmethod
    def get_supported_providers(cls) -> list[str]:
        return list(cls._provider_registry.keys())
