"""Response classification and JSON decoding.

WHY: The Echo API reports failures through HTTP status codes with JSON
bodies in several shapes (its own ``error`` envelope and FastAPI's
``detail`` list). Callers should get either the decoded payload or one
specific exception, never a raw response to inspect.

HOW: ResponseInterpreter.interpret() looks at the status code once. 2xx
bodies are decoded strictly. Error bodies are decoded leniently: if they
are not JSON, the raw text becomes the message and the payload is empty.

RULES:
- 2xx: empty body -> {}; malformed JSON -> ResponseDecodeError
- 401 Authentication, 403 Authorization, 400 BadRequest, 422 Validation,
  500 Server, anything else -> GenericApiError
- Message precedence: error.message, detail (string), message, raw text
- 422 field errors come from error.data[] first, then detail[]
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Type

import httpx

from rarus_echo.core.errors import (
    ApiError,
    AuthenticationError,
    AuthorizationError,
    BadRequestError,
    FieldError,
    GenericApiError,
    ResponseDecodeError,
    ServerError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS_ERRORS: Dict[int, Type[ApiError]] = {
    400: BadRequestError,
    401: AuthenticationError,
    403: AuthorizationError,
    500: ServerError,
}


class ResponseInterpreter:
    """Stateless classifier from httpx.Response to payload or exception."""

    def interpret(self, response: httpx.Response) -> Any:
        status = response.status_code
        if 200 <= status < 300:
            return decode_json(response)
        raise self.error_for(response)

    def error_for(self, response: httpx.Response) -> ApiError:
        """Build (but do not raise) the exception for an error response."""
        status = response.status_code
        raw = response.text
        data: Dict[str, Any] = {}
        try:
            decoded = json.loads(raw) if raw.strip() else {}
        except ValueError:
            logger.debug("Error body of HTTP %d is not JSON", status)
        else:
            if isinstance(decoded, dict):
                data = decoded

        message = extract_error_message(data, raw) or "HTTP {} error".format(status)

        if status == 422:
            return ValidationError(message, extract_validation_errors(data), data)
        error_cls = _STATUS_ERRORS.get(status, GenericApiError)
        return error_cls(message, status, data)


def decode_json(response: httpx.Response) -> Any:
    """Decode a successful response body; an empty body decodes to {}."""
    if not response.content.strip():
        return {}
    try:
        return json.loads(response.content)
    except ValueError as exc:
        raise ResponseDecodeError(
            "Failed to decode JSON response (HTTP {}): {}".format(response.status_code, exc)
        ) from exc


def extract_error_message(data: Dict[str, Any], fallback: str) -> str:
    error = data.get("error")
    if isinstance(error, dict) and error.get("message") is not None:
        return str(error["message"])
    if isinstance(data.get("detail"), str):
        return data["detail"]
    if data.get("message") is not None:
        return str(data["message"])
    return fallback


def extract_validation_errors(data: Dict[str, Any]) -> List[FieldError]:
    """Collect field errors from either known 422 body shape."""
    error = data.get("error")
    if isinstance(error, dict) and isinstance(error.get("data"), list):
        return [
            FieldError(
                field=str(item.get("field", "unknown")),
                message=str(item.get("message", "unknown error")),
                type=str(item.get("type", "unknown")),
            )
            for item in error["data"]
            if isinstance(item, dict)
        ]

    detail = data.get("detail")
    if isinstance(detail, list):
        # FastAPI shape: {"loc": [...], "msg": ..., "type": ...}
        return [
            FieldError(
                field=".".join(str(part) for part in item.get("loc", [])),
                message=str(item.get("msg", "unknown error")),
                type=str(item.get("type", "unknown")),
            )
            for item in detail
            if isinstance(item, dict)
        ]
    return []
