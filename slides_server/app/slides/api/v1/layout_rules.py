from typing import Annotated

from fastapi import APIRouter, Path, Response, status

from slides_server.app.slides.schema.layout_rule import (
    CreateLayoutRuleParam,
    GetLayoutRuleDetail,
    MatchLayoutParam,
    MatchLayoutResult,
    UpdateLayoutRuleParam,
)
from slides_server.app.slides.service.layout_rule_service import layout_rule_service
from slides_server.database.db import CurrentSession

router = APIRouter()


@router.get('', summary='List layout rules in matching order', response_model=list[GetLayoutRuleDetail])
async def get_layout_rules(db: CurrentSession):
    rules = await layout_rule_service.get_list(db=db)
    return [GetLayoutRuleDetail.from_model(rule) for rule in rules]


@router.post('/match', summary='Find the layout rule for a slide', response_model=MatchLayoutResult)
async def match_layout(db: CurrentSession, obj: MatchLayoutParam):
    return await layout_rule_service.match_slide(db=db, html=obj.html, features=obj.features)


@router.get('/{pk}', summary='Get a layout rule', response_model=GetLayoutRuleDetail)
async def get_layout_rule(db: CurrentSession, pk: Annotated[str, Path(description='Layout rule ID')]):
    rule = await layout_rule_service.get(db=db, pk=pk)
    return GetLayoutRuleDetail.from_model(rule)


@router.post(
    '',
    summary='Create a layout rule',
    response_model=GetLayoutRuleDetail,
    status_code=status.HTTP_201_CREATED,
)
async def create_layout_rule(db: CurrentSession, obj: CreateLayoutRuleParam):
    rule = await layout_rule_service.create(db=db, obj=obj)
    return GetLayoutRuleDetail.from_model(rule)


@router.put('/{pk}', summary='Update a layout rule', response_model=GetLayoutRuleDetail)
async def update_layout_rule(
    db: CurrentSession,
    pk: Annotated[str, Path(description='Layout rule ID')],
    obj: UpdateLayoutRuleParam,
):
    rule = await layout_rule_service.update(db=db, pk=pk, obj=obj)
    return GetLayoutRuleDetail.from_model(rule)


@router.delete('/{pk}', summary='Delete a layout rule', status_code=status.HTTP_204_NO_CONTENT)
async def delete_layout_rule(db: CurrentSession, pk: Annotated[str, Path(description='Layout rule ID')]) -> Response:
    await layout_rule_service.delete(db=db, pk=pk)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
