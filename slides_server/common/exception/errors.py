"""Application error hierarchy.

Every error carries a human readable ``msg`` and the HTTP status ``code`` it is
rendered with. REST handlers turn them into ``{"error": msg}`` bodies; the MCP
dispatcher turns them into JSON-RPC server errors.
"""

from typing import Any

from starlette import status


class BaseExceptionError(Exception):
    """Base class for all application errors"""

    code: int

    def __init__(self, *, msg: str | None = None, data: Any = None) -> None:
        self.msg = msg
        self.data = data
        super().__init__(msg)


class RequestError(BaseExceptionError):
    """Validation failures and malformed input"""

    code = status.HTTP_400_BAD_REQUEST

    def __init__(self, *, msg: str = 'Bad Request', data: Any = None) -> None:
        super().__init__(msg=msg, data=data)


class ForbiddenError(BaseExceptionError):
    code = status.HTTP_403_FORBIDDEN

    def __init__(self, *, msg: str = 'Forbidden', data: Any = None) -> None:
        super().__init__(msg=msg, data=data)


class NotFoundError(BaseExceptionError):
    code = status.HTTP_404_NOT_FOUND

    def __init__(self, *, msg: str = 'Not Found', data: Any = None) -> None:
        super().__init__(msg=msg, data=data)


class UnsupportedMediaTypeError(BaseExceptionError):
    code = status.HTTP_415_UNSUPPORTED_MEDIA_TYPE

    def __init__(self, *, msg: str = 'Unsupported Media Type', data: Any = None) -> None:
        super().__init__(msg=msg, data=data)


class ServerError(BaseExceptionError):
    """Encryption, downstream HTTP, serialization and filesystem failures"""

    code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, *, msg: str = 'Internal Server Error', data: Any = None) -> None:
        super().__init__(msg=msg, data=data)
