from typing import Annotated

from fastapi import APIRouter, Path, Response, status

from slides_server.app.slides.schema.theme import CreateThemeParam, GetThemeDetail, UpdateThemeParam
from slides_server.app.slides.service.theme_service import theme_service
from slides_server.database.db import CurrentSession

router = APIRouter()


@router.get('', summary='List themes, built-in first', response_model=list[GetThemeDetail])
async def get_themes(db: CurrentSession):
    return await theme_service.get_list(db=db)


@router.get('/{id_or_name}', summary='Get a theme by id or name', response_model=GetThemeDetail)
async def get_theme(db: CurrentSession, id_or_name: Annotated[str, Path(description='Theme ID or name')]):
    return await theme_service.get(db=db, id_or_name=id_or_name)


@router.post('', summary='Create a theme', response_model=GetThemeDetail, status_code=status.HTTP_201_CREATED)
async def create_theme(db: CurrentSession, obj: CreateThemeParam):
    return await theme_service.create(db=db, obj=obj)


@router.put('/{pk}', summary='Update a theme', response_model=GetThemeDetail)
async def update_theme(db: CurrentSession, pk: Annotated[str, Path(description='Theme ID')], obj: UpdateThemeParam):
    return await theme_service.update(db=db, pk=pk, obj=obj)


@router.delete('/{pk}', summary='Delete a theme', status_code=status.HTTP_204_NO_CONTENT)
async def delete_theme(db: CurrentSession, pk: Annotated[str, Path(description='Theme ID')]) -> Response:
    await theme_service.delete(db=db, pk=pk)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
