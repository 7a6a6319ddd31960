from typing import Annotated

from fastapi import APIRouter, File, Path, Response, UploadFile, status

from slides_server.app.slides.schema.media import GetMediaDetail
from slides_server.app.slides.service.media_service import media_service
from slides_server.common.exception import errors
from slides_server.core.conf import settings
from slides_server.core.context import CurrentContext
from slides_server.database.db import CurrentSession

router = APIRouter()
uploads_router = APIRouter()


@router.get('', summary='List uploaded media, newest first', response_model=list[GetMediaDetail])
async def get_media_list(db: CurrentSession):
    return await media_service.get_list(db=db)


@router.post('', summary='Upload an image, video or audio file', response_model=GetMediaDetail, status_code=201)
async def upload_media(
    db: CurrentSession,
    context: CurrentContext,
    file: Annotated[UploadFile | None, File(description='Media file')] = None,
):
    if file is None:
        raise errors.RequestError(msg='No file provided')
    try:
        data = await file.read()
    finally:
        await file.close()
    return await media_service.upload(
        db=db,
        uploads_dir=context.uploads_dir,
        original_name=file.filename or '',
        mime_type=file.content_type or '',
        data=data,
    )


@router.delete('/{pk}', summary='Delete an uploaded media file', status_code=status.HTTP_204_NO_CONTENT)
async def delete_media(
    db: CurrentSession, context: CurrentContext, pk: Annotated[str, Path(description='Media ID')]
) -> Response:
    await media_service.delete(db=db, uploads_dir=context.uploads_dir, pk=pk)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@uploads_router.get('/{filename}', summary='Serve an uploaded file')
async def serve_upload(context: CurrentContext, filename: Annotated[str, Path(description='Stored filename')]) -> Response:
    data, content_type = await media_service.read(uploads_dir=context.uploads_dir, filename=filename)
    return Response(
        content=data,
        media_type=content_type,
        headers={'Cache-Control': settings.UPLOAD_CACHE_CONTROL},
    )
