"""JSON-RPC 2.0 envelopes for the MCP stdio transport.

One envelope per line. Responses are serialized compactly with every null
field omitted, so an error for an unidentifiable request carries no ``id``.
"""
from __future__ import annotations
import json
from typing import Any, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    StrictFloat,
    StrictInt,
    StrictStr,
    ValidationError,
    model_validator,
)

from unity_lua_mcp.errors import InvalidRequestError, ParseError

JSONRPC_VERSION = "2.0"

# JSON-RPC ids are strings or numbers, echoed back exactly as received
RequestId = Union[StrictInt, StrictFloat, StrictStr]


class JsonRpcRequest(BaseModel):
    """Incoming request or notification."""
    model_config = ConfigDict(extra="ignore")

    jsonrpc: Any = JSONRPC_VERSION
    id: RequestId | None = None
    method: str
    params: dict[str, Any] | None = None

    @property
    def is_notification(self) -> bool:
        """True when the request object had no ``id`` member at all."""
        return "id" not in self.model_fields_set


class JsonRpcError(BaseModel):
    code: int
    message: str
    data: Any = None


class JsonRpcResponse(BaseModel):
    jsonrpc: str = JSONRPC_VERSION
    id: RequestId | None = None
    result: Any = None
    error: JsonRpcError | None = None

    @model_validator(mode="after")
    def check_result_or_error(self) -> JsonRpcResponse:
        if (self.result is None) == (self.error is None):
            raise ValueError("response must carry exactly one of result or error")
        return self


def decode_request(text: str) -> JsonRpcRequest:
    """Parse one wire line into a request.

    Raises:
        ParseError: If the text is not a JSON object
        InvalidRequestError: If the object cannot be read as a request
    """
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError(f"Parse error: {e}") from e

    if not isinstance(raw, dict):
        raise ParseError("Parse error: request must be a JSON object")

    try:
        return JsonRpcRequest.model_validate(raw)
    except ValidationError as e:
        request_id = raw.get("id")
        if isinstance(request_id, bool) or not isinstance(request_id, (int, float, str)):
            request_id = None
        details = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'request'}: {err['msg']}"
            for err in e.errors()
        )
        raise InvalidRequestError(f"Invalid request: {details}", request_id) from e


def success_response(request_id: RequestId | None, result: Any) -> JsonRpcResponse:
    return JsonRpcResponse(id=request_id, result=result)


def error_response(
    request_id: RequestId | None,
    code: int,
    message: str,
    data: Any = None,
) -> JsonRpcResponse:
    return JsonRpcResponse(
        id=request_id,
        error=JsonRpcError(code=code, message=message, data=data),
    )


def drop_none(value: Any) -> Any:
    """Recursively remove None-valued keys from dicts."""
    if isinstance(value, dict):
        return {k: drop_none(v) for k, v in value.items() if v is not None}
    if isinstance(value, list):
        return [drop_none(v) for v in value]
    return value


def encode_response(response: JsonRpcResponse) -> str:
    """Serialize a response as compact single-line JSON."""
    return json.dumps(drop_none(response.model_dump(mode="json")), separators=(",", ":"))
