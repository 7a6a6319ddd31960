from slides_server.app.slides.llm.base import AIProvider, GenerateOptions
from slides_server.app.slides.llm.factory import AIProviderFactory

__all__ = ['AIProvider', 'AIProviderFactory', 'GenerateOptions']
