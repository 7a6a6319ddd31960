"""JSON-RPC 2.0 envelopes and error codes."""

from typing import Any

JSONRPC_VERSION = '2.0'

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603
SERVER_ERROR = -32000


class RpcError(Exception):
    """Error returned to the client as a JSON-RPC error object"""

    def __init__(self, code: int, message: str, data: Any = None) -> None:
        self.code = code
        self.message = message
        self.data = data
        super().__init__(message)


class InvalidParamsError(RpcError):
    def __init__(self, message: str) -> None:
        super().__init__(INVALID_PARAMS, message)


def jsonrpc_result(request_id: Any, result: Any) -> dict[str, Any]:
    return {'jsonrpc': JSONRPC_VERSION, 'id': request_id, 'result': result}


def jsonrpc_error(request_id: Any, code: int, message: str, data: Any = None) -> dict[str, Any]:
    error: dict[str, Any] = {'code': code, 'message': message}
    if data is not None:
        error['data'] = data
    return {'jsonrpc': JSONRPC_VERSION, 'id': request_id, 'error': error}


def text_content(text: str) -> dict[str, Any]:
    """A tool result made of one text block"""
    return {'content': [{'type': 'text', 'text': text}]}
