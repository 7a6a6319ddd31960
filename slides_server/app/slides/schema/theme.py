from datetime import datetime

from pydantic import Field

from slides_server.common.schema import SchemaBase


class CreateThemeParam(SchemaBase):
    """Create theme parameters"""

    name: str = Field(..., min_length=1, description='Unique theme name')
    display_name: str = Field(..., description='Display name')
    css_content: str = Field(..., description='Raw stylesheet')
    center_content: bool | None = Field(None, description='Vertically center slide content, defaults to true')


class UpdateThemeParam(SchemaBase):
    """Update theme parameters"""

    display_name: str | None = None
    css_content: str | None = None
    center_content: bool | None = None


class GetThemeDetail(SchemaBase):
    """Theme details"""

    id: str
    name: str
    display_name: str
    css_content: str
    is_default: bool
    center_content: bool
    user_id: str | None = None
    created_at: datetime
    updated_at: datetime
