"""Exception hierarchy for the Echo client.

WHY: Callers need typed exceptions to tell a rejected API key apart from a
dropped connection, a malformed upload, or a server outage, and to reach
the status code and parsed body when the API answered with an error.

HOW: Everything derives from EchoError. Local failures (files, request
encoding, response decoding) and transport failures are direct subclasses.
HTTP error statuses map to ApiError subclasses, each carrying the status
code and the decoded payload.

RULES:
- 401 -> AuthenticationError, 403 -> AuthorizationError
- 400 -> BadRequestError, 422 -> ValidationError, 500 -> ServerError
- Any other non-2xx -> GenericApiError
- NetworkError is raised only after the retry policy gave up
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional


class EchoError(Exception):
    """Base class for every error raised by the Echo client."""


class NetworkError(EchoError):
    """Raised when the transport failed and retries are exhausted."""


class FileError(EchoError):
    """Raised when a local media file cannot be uploaded.

    Covers missing, unreadable, empty, oversized, and unsupported files.
    Always raised before any request is sent.
    """


class SerializationError(EchoError):
    """Raised when a request body cannot be encoded as JSON."""


class ResponseDecodeError(EchoError):
    """Raised when a successful response body is not the expected JSON."""


class ApiError(EchoError):
    """Raised when the Echo API answers with a non-2xx status.

    WHY: Error responses still carry useful data (messages, field errors).
    Keeping the decoded body lets callers log or inspect it.

    HOW: Subclasses select the error kind; this class holds the shared
    status code and payload.

    RULES:
    - status_code is always the HTTP status of the response
    - payload is the decoded JSON body, or {} when it was not JSON
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        payload: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload: Dict[str, Any] = payload if payload is not None else {}

    def __str__(self) -> str:
        return "Echo API error {}: {}".format(self.status_code, self.message)


class AuthenticationError(ApiError):
    """HTTP 401: the API key or user id was not accepted."""


class AuthorizationError(ApiError):
    """HTTP 403: the credentials are valid but lack access."""


class BadRequestError(ApiError):
    """HTTP 400."""


class ServerError(ApiError):
    """HTTP 500."""


class GenericApiError(ApiError):
    """Any non-2xx status without a dedicated exception."""


@dataclass(frozen=True)
class FieldError:
    """One entry of a 422 validation response."""

    field: str
    message: str
    type: str


class ValidationError(ApiError):
    """HTTP 422 with the list of rejected fields."""

    def __init__(
        self,
        message: str,
        errors: Optional[List[FieldError]] = None,
        payload: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, 422, payload)
        self.errors: List[FieldError] = list(errors or [])

    def errors_as_string(self) -> str:
        """Render the field errors one per line."""
        return "\n".join(
            "Field '{}': {} (type: {})".format(e.field, e.message, e.type)
            for e in self.errors
        )
