from datetime import datetime

from pydantic import Field, model_validator

from slides_server.app.slides.layout.types import (
    ContentFeatures,
    LayoutConditions,
    LayoutTransform,
    decode_conditions,
    decode_transform,
)
from slides_server.app.slides.model import LayoutRule
from slides_server.common.schema import SchemaBase


class CreateLayoutRuleParam(SchemaBase):
    """Create layout rule parameters"""

    name: str = Field(..., min_length=1, description='Unique rule name')
    display_name: str = Field(..., description='Display name')
    description: str | None = Field(None, description='Description')
    priority: int = Field(100, description='Lower is checked first')
    enabled: bool = Field(True, description='Participates in matching')
    conditions: LayoutConditions = Field(..., description='Predicates over the slide structure')
    transform: LayoutTransform = Field(..., description='Rewrite applied on match')
    css_content: str = Field('', description='Raw stylesheet for the produced markup')


class UpdateLayoutRuleParam(SchemaBase):
    """Update layout rule parameters, omitted fields are left unchanged"""

    display_name: str | None = None
    description: str | None = None
    priority: int | None = None
    enabled: bool | None = None
    conditions: LayoutConditions | None = None
    transform: LayoutTransform | None = None
    css_content: str | None = None


class GetLayoutRuleDetail(SchemaBase):
    """Layout rule details, conditions and transform are null when stored JSON is malformed"""

    id: str
    name: str
    display_name: str
    description: str | None = None
    priority: int
    enabled: bool
    is_default: bool
    user_id: str | None = None
    conditions: LayoutConditions | None = None
    transform: LayoutTransform | None = None
    css_content: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, rule: LayoutRule) -> 'GetLayoutRuleDetail':
        return cls(
            id=rule.id,
            name=rule.name,
            display_name=rule.display_name,
            description=rule.description,
            priority=rule.priority,
            enabled=rule.enabled,
            is_default=rule.is_default,
            user_id=rule.user_id,
            conditions=decode_conditions(rule.conditions),
            transform=decode_transform(rule.transform),
            css_content=rule.css_content,
            created_at=rule.created_at,
            updated_at=rule.updated_at,
        )


class MatchLayoutParam(SchemaBase):
    """Either rendered slide HTML or precomputed features"""

    html: str | None = Field(None, description='Rendered slide HTML')
    features: ContentFeatures | None = Field(None, description='Structural summary of the slide')

    @model_validator(mode='after')
    def check_source(self) -> 'MatchLayoutParam':
        if self.html is None and self.features is None:
            raise ValueError('html or features required')
        return self


class MatchLayoutResult(SchemaBase):
    features: ContentFeatures
    rule: GetLayoutRuleDetail | None = None
