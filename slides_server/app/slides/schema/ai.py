from pydantic import Field

from slides_server.common.schema import SchemaBase


class AiGenerateParam(SchemaBase):
    prompt: str
    provider: str
    context: str | None = None


class AiImproveParam(SchemaBase):
    slide_content: str
    provider: str
    instruction: str | None = None


class AiSuggestStyleParam(SchemaBase):
    content: str
    provider: str


class AiGenerateThemeParam(SchemaBase):
    description: str
    provider: str
    existing_css: str | None = None


class AiSpeakerNotesParam(SchemaBase):
    slide_content: str
    provider: str


class AiGenerateDiagramParam(SchemaBase):
    description: str
    provider: str


class AiRewriteParam(SchemaBase):
    slide_content: str
    provider: str
    audience: str


class AiOutlineToSlidesParam(SchemaBase):
    outline: str
    provider: str


class AiVisualReviewParam(SchemaBase):
    slide_content: str
    screenshot: str = Field(..., description='Base64 encoded PNG of the rendered slide')
    provider: str


class AiVisualImproveParam(SchemaBase):
    slide_content: str
    screenshot: str = Field(..., description='Base64 encoded PNG of the rendered slide')
    provider: str
    instruction: str | None = None
