"""Typed layout rule conditions and transforms.

Both are stored as JSON text on the ``layout_rules`` table and decoded here,
once, at the storage boundary. Decoding never raises: malformed data becomes
``None`` so that one corrupt rule cannot break a listing.
"""

import logging

from typing import Annotated, Literal, Union

from pydantic import Field, TypeAdapter, ValidationError

from slides_server.common.schema import SchemaBase, SparseSchemaBase

logger = logging.getLogger(__name__)


class NumericCondition(SparseSchemaBase):
    """Comparators against an integer feature, every one that is set must hold"""

    eq: int | None = None
    gt: int | None = None
    gte: int | None = None
    lte: int | None = None


class LayoutConditions(SparseSchemaBase):
    """Predicate set over :class:`ContentFeatures`, absent fields match anything"""

    has_heading: bool | None = None
    image_count: NumericCondition | None = None
    figure_count: NumericCondition | None = None
    h3_count: NumericCondition | None = None
    text_paragraph_count: NumericCondition | None = None
    has_cards: bool | None = None
    has_list: bool | None = None
    has_code_block: bool | None = None
    has_blockquote: bool | None = None


class ContentFeatures(SchemaBase):
    """Structural summary of one rendered slide"""

    has_heading: bool = False
    image_count: int = 0
    figure_count: int = 0
    h3_count: int = 0
    text_paragraph_count: int = 0
    has_cards: bool = False
    has_list: bool = False
    has_code_block: bool = False
    has_blockquote: bool = False


class WrapOptions(SchemaBase):
    class_name: str


class SplitTwoOptions(SchemaBase):
    class_name: str
    left_selector: Literal['text', 'cards']
    right_selector: Literal['media'] = 'media'
    left_class_name: str
    right_class_name: str


class SplitTopBottomOptions(SchemaBase):
    class_name: str
    bottom_selector: Literal['media'] = 'media'


class GroupByHeadingOptions(SchemaBase):
    heading_level: int = Field(..., ge=1, le=6)
    container_class_name: str
    column_class_name: str


class WrapTransform(SchemaBase):
    """Wrap the whole slide in one container"""

    type: Literal['wrap'] = 'wrap'
    options: WrapOptions


class SplitTwoTransform(SchemaBase):
    """Split into a left and a right region by content selector"""

    type: Literal['split-two'] = 'split-two'
    options: SplitTwoOptions


class SplitTopBottomTransform(SchemaBase):
    """Keep text on top and move media into a grid below"""

    type: Literal['split-top-bottom'] = 'split-top-bottom'
    options: SplitTopBottomOptions


class GroupByHeadingTransform(SchemaBase):
    """One column per heading of the given level"""

    type: Literal['group-by-heading'] = 'group-by-heading'
    options: GroupByHeadingOptions


LayoutTransform = Annotated[
    Union[WrapTransform, SplitTwoTransform, SplitTopBottomTransform, GroupByHeadingTransform],
    Field(discriminator='type'),
]

_transform_adapter: TypeAdapter[LayoutTransform] = TypeAdapter(LayoutTransform)


def decode_conditions(raw: str | None) -> LayoutConditions | None:
    """Decode stored conditions JSON, ``None`` when missing or malformed"""
    if raw is None:
        return None
    try:
        return LayoutConditions.model_validate_json(raw)
    except ValidationError as e:
        logger.warning(f'Ignoring malformed layout conditions: {e.error_count()} error(s)')
        return None


def decode_transform(raw: str | None) -> LayoutTransform | None:
    """Decode stored transform JSON, ``None`` when missing or malformed"""
    if raw is None:
        return None
    try:
        return _transform_adapter.validate_json(raw)
    except ValidationError as e:
        logger.warning(f'Ignoring malformed layout transform: {e.error_count()} error(s)')
        return None


def encode_conditions(conditions: LayoutConditions) -> str:
    return conditions.model_dump_json(by_alias=True)


def encode_transform(transform: LayoutTransform) -> str:
    return _transform_adapter.dump_json(transform, by_alias=True).decode('utf-8')
