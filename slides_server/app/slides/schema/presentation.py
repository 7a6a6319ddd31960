from datetime import datetime

from pydantic import Field

from slides_server.common.schema import SchemaBase


class CreatePresentationParam(SchemaBase):
    """Create presentation parameters"""

    title: str = Field(..., description='Presentation title')
    content: str | None = Field(None, description='Markdown content, slides separated by ---')
    theme: str | None = Field(None, description='Theme name, defaults to "default"')


class UpdatePresentationParam(SchemaBase):
    """Update presentation parameters, omitted fields keep their stored value"""

    title: str | None = Field(None, description='New title')
    content: str | None = Field(None, description='New full markdown content')
    theme: str | None = Field(None, description='New theme name')


class GetPresentationDetail(SchemaBase):
    """Presentation details"""

    id: str
    title: str
    content: str
    theme: str
    user_id: str
    created_at: datetime
    updated_at: datetime
