from typing import Any

from pydantic import BaseModel, ConfigDict, model_serializer
from pydantic.alias_generators import to_camel


class SchemaBase(BaseModel):
    """Base schema, camelCase on the wire and snake_case in Python"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        use_enum_values=True,
    )


class SparseSchemaBase(SchemaBase):
    """Schema whose unset (``None``) fields are left out when serialized"""

    @model_serializer(mode='wrap')
    def drop_none_fields(self, handler: Any) -> dict[str, Any]:
        return {key: value for key, value in handler(self).items() if value is not None}
