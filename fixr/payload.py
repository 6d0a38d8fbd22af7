"""
Request body builders.

`build` produces the JSON bodies sent to FIXR; `build_form` produces the
URL-encoded bodies Stripe expects on its token endpoint.
"""
import json
from decimal import Decimal
from typing import Any, Dict
from urllib.parse import urlencode

from .errors import EncodingError


def _default(obj: Any):
    if isinstance(obj, Decimal):
        return float(obj)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def build(fields: Dict[str, Any]) -> bytes:
    try:
        return json.dumps(fields, default=_default, allow_nan=False).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise EncodingError(f"error encoding payload: {e}") from e


def build_form(fields: Dict[str, Any]) -> bytes:
    for key, value in fields.items():
        if not isinstance(value, (str, int, float, Decimal)) or isinstance(value, bool):
            raise EncodingError(f"error encoding form field {key!r}: unsupported value {value!r}")
    return urlencode([(k, str(v)) for k, v in fields.items()]).encode("ascii")
