"""Layout rule service layer."""

from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from slides_server.app.slides.crud.crud_layout_rule import layout_rule_dao
from slides_server.app.slides.layout.analyzer import analyze_content
from slides_server.app.slides.layout.matcher import select_rule
from slides_server.app.slides.layout.transform import LayoutRuleInput
from slides_server.app.slides.layout.types import (
    ContentFeatures,
    decode_conditions,
    decode_transform,
    encode_conditions,
    encode_transform,
)
from slides_server.app.slides.model import LayoutRule
from slides_server.app.slides.schema.layout_rule import (
    CreateLayoutRuleParam,
    GetLayoutRuleDetail,
    MatchLayoutResult,
    UpdateLayoutRuleParam,
)
from slides_server.common.exception import errors
from slides_server.common.log import log
from slides_server.core.conf import settings


def to_rule_input(rule: LayoutRule) -> LayoutRuleInput:
    return LayoutRuleInput(
        id=rule.id,
        name=rule.name,
        display_name=rule.display_name,
        priority=rule.priority,
        enabled=rule.enabled,
        conditions=decode_conditions(rule.conditions),
        transform=decode_transform(rule.transform),
    )


class LayoutRuleService:
    """Service for managing and matching layout rules."""

    @staticmethod
    async def get_list(*, db: AsyncSession) -> Sequence[LayoutRule]:
        return await layout_rule_dao.get_list(db)

    @staticmethod
    async def get(*, db: AsyncSession, pk: str) -> LayoutRule:
        rule = await layout_rule_dao.get(db, pk)
        if not rule:
            raise errors.NotFoundError(msg='Layout rule not found')
        return rule

    @staticmethod
    async def create(*, db: AsyncSession, obj: CreateLayoutRuleParam) -> LayoutRule:
        if await layout_rule_dao.get_by_name(db, obj.name):
            raise errors.RequestError(msg=f'Layout rule {obj.name} already exists')
        rule = LayoutRule(
            name=obj.name,
            display_name=obj.display_name,
            description=obj.description,
            priority=obj.priority,
            enabled=obj.enabled,
            is_default=False,
            user_id=settings.LOCAL_USER_ID,
            conditions=encode_conditions(obj.conditions),
            transform=encode_transform(obj.transform),
            css_content=obj.css_content,
        )
        rule = await layout_rule_dao.create(db, rule)
        log.info(f'Created layout rule {rule.name}')
        return rule

    @staticmethod
    async def _get_editable(db: AsyncSession, pk: str, action: str) -> LayoutRule:
        rule = await LayoutRuleService.get(db=db, pk=pk)
        if rule.is_default:
            raise errors.ForbiddenError(msg=f'Cannot {action} default layout rules')
        return rule

    @staticmethod
    async def update(*, db: AsyncSession, pk: str, obj: UpdateLayoutRuleParam) -> LayoutRule:
        """
        Partially update a user rule

        :param db: Database session
        :param pk: Layout rule ID
        :param obj: Fields to change
        :return:
        """
        rule = await LayoutRuleService._get_editable(db, pk, 'modify')
        values = obj.model_dump(exclude_none=True, exclude={'conditions', 'transform'})
        if obj.conditions is not None:
            values['conditions'] = encode_conditions(obj.conditions)
        if obj.transform is not None:
            values['transform'] = encode_transform(obj.transform)
        return await layout_rule_dao.update(db, rule, values)

    @staticmethod
    async def delete(*, db: AsyncSession, pk: str) -> None:
        rule = await LayoutRuleService._get_editable(db, pk, 'delete')
        await layout_rule_dao.delete(db, rule)
        log.info(f'Deleted layout rule {rule.name}')

    @staticmethod
    async def match(*, db: AsyncSession, features: ContentFeatures) -> LayoutRule | None:
        """
        Select the layout rule for a slide

        The rule's transform and stylesheet are returned as stored.

        :param db: Database session
        :param features: Structural summary of the slide
        :return: the first matching enabled rule, or None
        """
        rules = await layout_rule_dao.get_list(db, only_enabled=True)
        by_id = {rule.id: rule for rule in rules}
        selected = select_rule(features, [to_rule_input(rule) for rule in rules])
        return by_id[selected.id] if selected else None

    @staticmethod
    async def match_slide(
        *, db: AsyncSession, html: str | None = None, features: ContentFeatures | None = None
    ) -> MatchLayoutResult:
        """Match from rendered HTML or precomputed features"""
        if features is None:
            features = analyze_content(html or '')
        rule = await LayoutRuleService.match(db=db, features=features)
        return MatchLayoutResult(
            features=features,
            rule=GetLayoutRuleDetail.from_model(rule) if rule else None,
        )


layout_rule_service: LayoutRuleService = LayoutRuleService()
