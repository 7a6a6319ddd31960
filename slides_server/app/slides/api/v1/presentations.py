from typing import Annotated

from fastapi import APIRouter, Path, Response, status

from slides_server.app.slides.schema.presentation import (
    CreatePresentationParam,
    GetPresentationDetail,
    UpdatePresentationParam,
)
from slides_server.app.slides.service.presentation_service import presentation_service
from slides_server.database.db import CurrentSession

router = APIRouter()


@router.get('', summary='List presentations', response_model=list[GetPresentationDetail])
async def get_presentations(db: CurrentSession):
    return await presentation_service.get_list(db=db)


@router.get('/{pk}', summary='Get a presentation', response_model=GetPresentationDetail)
async def get_presentation(db: CurrentSession, pk: Annotated[str, Path(description='Presentation ID')]):
    return await presentation_service.get(db=db, pk=pk)


@router.post(
    '',
    summary='Create a presentation',
    response_model=GetPresentationDetail,
    status_code=status.HTTP_201_CREATED,
)
async def create_presentation(db: CurrentSession, obj: CreatePresentationParam):
    return await presentation_service.create(db=db, obj=obj)


@router.put('/{pk}', summary='Update a presentation', response_model=GetPresentationDetail)
async def update_presentation(
    db: CurrentSession,
    pk: Annotated[str, Path(description='Presentation ID')],
    obj: UpdatePresentationParam,
):
    return await presentation_service.update(db=db, pk=pk, obj=obj)


@router.delete('/{pk}', summary='Delete a presentation', status_code=status.HTTP_204_NO_CONTENT)
async def delete_presentation(db: CurrentSession, pk: Annotated[str, Path(description='Presentation ID')]) -> Response:
    await presentation_service.delete(db=db, pk=pk)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
