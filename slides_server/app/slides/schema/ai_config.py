from pydantic import Field

from slides_server.common.schema import SchemaBase


class CreateAiProviderConfigParam(SchemaBase):
    """Create or overwrite the configuration of one provider"""

    provider_name: str = Field(..., min_length=1, description='anthropic, openai or gemini')
    api_key: str | None = Field(None, description='Provider API key')
    model: str | None = Field(None, description='Model override')
    base_url: str | None = Field(None, description='Alternate API base url, e.g. a local proxy')


class UpdateAiProviderConfigParam(SchemaBase):
    """Partial update, an empty api key keeps the stored one"""

    api_key: str | None = None
    model: str | None = None
    base_url: str | None = None


class GetAiProviderConfigDetail(SchemaBase):
    """Provider configuration without the credential"""

    id: str
    provider_name: str
    model: str | None = None
    base_url: str | None = None
    has_key: bool = True


class ModelInfo(SchemaBase):
    """Model offered by a provider"""

    id: str
    display_name: str
    created_at: str | None = None
