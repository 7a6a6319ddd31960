"""Media upload service layer.

Files live flat under the uploads directory; the ``media`` table keeps the
original name, MIME type and public url of each one.
"""

import uuid

from pathlib import Path, PurePosixPath
from typing import Sequence

import anyio

from sqlalchemy.ext.asyncio import AsyncSession

from slides_server.app.slides.crud.crud_media import media_dao
from slides_server.app.slides.model import Media
from slides_server.common.exception import errors
from slides_server.common.log import log
from slides_server.core.conf import settings
from slides_server.utils.timezone import timezone

DEFAULT_EXTENSION = 'bin'
DEFAULT_CONTENT_TYPE = 'application/octet-stream'

CONTENT_TYPES = {
    'png': 'image/png',
    'jpg': 'image/jpeg',
    'jpeg': 'image/jpeg',
    'gif': 'image/gif',
    'webp': 'image/webp',
    'svg': 'image/svg+xml',
    'mp4': 'video/mp4',
    'webm': 'video/webm',
    'mp3': 'audio/mpeg',
    'wav': 'audio/wav',
    'ogg': 'audio/ogg',
}


def build_filename(original_name: str) -> str:
    """``<millis>-<short uuid>.<ext>``, collision free within a directory"""
    ext = PurePosixPath(original_name).suffix.lstrip('.') or DEFAULT_EXTENSION
    return f'{timezone.now_millis()}-{str(uuid.uuid4()).split("-")[0]}.{ext}'


def content_type_for(filename: str) -> str:
    ext = PurePosixPath(filename).suffix.lstrip('.').lower()
    return CONTENT_TYPES.get(ext, DEFAULT_CONTENT_TYPE)


def resolve_upload_path(uploads_dir: Path, filename: str) -> Path | None:
    """Path of an uploaded file, None for names that would escape the uploads directory"""
    if not filename or filename in ('.', '..') or '/' in filename or '\\' in filename:
        return None
    root = uploads_dir.resolve()
    path = (root / filename).resolve()
    if path.parent != root:
        return None
    return path


class MediaService:
    """Service for managing uploaded media."""

    @staticmethod
    async def get_list(*, db: AsyncSession) -> Sequence[Media]:
        return await media_dao.get_list(db)

    @staticmethod
    async def upload(
        *,
        db: AsyncSession,
        uploads_dir: Path,
        original_name: str,
        mime_type: str,
        data: bytes,
    ) -> Media:
        """
        Store an uploaded file and record it

        :param db: Database session
        :param uploads_dir: Directory files are written to
        :param original_name: Client side filename
        :param mime_type: Declared MIME type
        :param data: File content
        :return:
        """
        if not mime_type.startswith(settings.UPLOAD_ALLOWED_MIME_PREFIXES):
            raise errors.UnsupportedMediaTypeError(msg='Only image, video, and audio files are allowed')

        filename = build_filename(original_name)
        upload_dir = anyio.Path(uploads_dir)
        await upload_dir.mkdir(parents=True, exist_ok=True)
        try:
            await (upload_dir / filename).write_bytes(data)
        except OSError as e:
            log.error(f'Failed to write upload {filename}: {e}')
            raise errors.ServerError(msg=f'Failed to store file: {e}')

        media = Media(
            filename=filename,
            original_name=original_name,
            mime_type=mime_type,
            size=len(data),
            url=f'{settings.UPLOAD_URL_PREFIX}/{filename}',
            user_id=settings.LOCAL_USER_ID,
        )
        try:
            media = await media_dao.create(db, media)
        except Exception:
            try:
                await (upload_dir / filename).unlink(missing_ok=True)
            except OSError as e:
                log.warning(f'Failed to remove orphaned upload {filename}: {e}')
            raise
        log.info(f'Stored upload {filename} ({media.size} bytes)')
        return media

    @staticmethod
    async def delete(*, db: AsyncSession, uploads_dir: Path, pk: str) -> None:
        media = await media_dao.get(db, pk)
        if not media:
            raise errors.NotFoundError(msg='Not found')

        path = resolve_upload_path(uploads_dir, media.filename)
        if path is not None:
            try:
                await anyio.Path(path).unlink(missing_ok=True)
            except OSError as e:
                log.warning(f'Failed to remove upload {media.filename}: {e}')

        await media_dao.delete(db, media)
        log.info(f'Deleted media {pk}')

    @staticmethod
    async def read(*, uploads_dir: Path, filename: str) -> tuple[bytes, str]:
        """
        Read an uploaded file

        :param uploads_dir: Directory files are served from
        :param filename: Stored filename
        :return: file content and its content type
        """
        path = resolve_upload_path(uploads_dir, filename)
        if path is None or not await anyio.Path(path).is_file():
            raise errors.NotFoundError(msg='Not found')
        return await anyio.Path(path).read_bytes(), content_type_for(filename)


media_service: MediaService = MediaService()
