"""
Response envelope handling.

FIXR reports business failures inside 200 responses, so every decoded body is
checked for an embedded error message instead of relying on the status code.
"""
import json
from typing import Any, Dict, Optional, Protocol

import httpx
from loguru import logger

from .errors import DecodeError, ServerReportedError


class ResponseParams(Protocol):
    """Anything a response body can be decoded into."""

    def load(self, data: Dict[str, Any]) -> None: ...

    def error(self) -> Optional[ServerReportedError]: ...

    def clear_error(self) -> None: ...


def _parse(content: bytes) -> Dict[str, Any]:
    try:
        data = json.loads(content)
    except ValueError as e:
        raise DecodeError(f"JSON decoding failed: {e}") from e
    if not isinstance(data, dict):
        raise DecodeError(f"JSON decoding failed: expected an object, got {type(data).__name__}")
    return data


def decode_json_response(response: httpx.Response, obj: ResponseParams) -> None:
    """
    Decode `response` into `obj`, then surface and clear its embedded error.

    Raises:
        DecodeError: The body is not a JSON object of the expected shape.
        ServerReportedError: The body carried a non-empty error message.
    """
    try:
        try:
            obj.load(_parse(response.content))
        except DecodeError as e:
            logger.debug("undecodable body (HTTP {}): {}", response.status_code, e)
            raise
        except (TypeError, ValueError, KeyError, AttributeError, ArithmeticError) as e:
            logger.debug("unexpected body shape (HTTP {}): {}", response.status_code, e)
            raise DecodeError(f"JSON decoding failed: {e}") from e
        err = obj.error()
        if err is not None:
            logger.debug("server reported error (HTTP {}): {}", response.status_code, err)
            raise err
    finally:
        obj.clear_error()
