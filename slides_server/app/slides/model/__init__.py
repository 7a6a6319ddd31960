from slides_server.app.slides.model.ai_provider_config import AiProviderConfig
from slides_server.app.slides.model.layout_rule import LayoutRule
from slides_server.app.slides.model.media import Media
from slides_server.app.slides.model.presentation import Presentation
from slides_server.app.slides.model.theme import Theme

__all__ = ['AiProviderConfig', 'LayoutRule', 'Media', 'Presentation', 'Theme']
