import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from slides_server.common.exception.errors import BaseExceptionError

logger = logging.getLogger(__name__)


def _error_response(status_code: int, message: str | None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={'error': message or 'Unknown error'})


def _format_validation_errors(exc: RequestValidationError) -> str:
    messages = []
    for error in exc.errors():
        location = '.'.join(str(part) for part in error.get('loc', ()) if part != 'body')
        message = error.get('msg', 'Invalid value')
        messages.append(f'{location}: {message}' if location else message)
    return '; '.join(messages) or 'Invalid request'


def register_exception(app: FastAPI) -> None:
    """Register the global exception handlers."""

    @app.exception_handler(BaseExceptionError)
    async def custom_exception_handler(request: Request, exc: BaseExceptionError) -> JSONResponse:
        """Application errors raised by services and handlers."""
        if exc.code >= 500:
            logger.error(f'{request.method} {request.url.path} failed: {exc.msg}')
        return _error_response(exc.code, exc.msg)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """Pydantic request validation errors."""
        return _error_response(400, _format_validation_errors(exc))

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return _error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def all_unknown_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Anything not handled above."""
        logger.error(f'Unhandled error on {request.method} {request.url.path}', exc_info=exc)
        return _error_response(500, 'Internal Server Error')
