"""Rarus Echo: Python client for the Echo asynchronous transcription API.

WHY: The Echo service transcribes uploaded audio/video asynchronously.
Clients need to upload files, poll status, fetch transcripts, and watch
the queue, with sane handling of auth errors and flaky networks.

HOW: Two layers. rarus_echo.core is the HTTP pipeline (request building,
retries, typed error mapping). rarus_echo.api holds the endpoint services
and result models. EchoClient wires both together.

RULES:
- Synchronous, blocking API; one request in flight per call
- Every failure surfaces as an EchoError subclass
"""

from rarus_echo.api import (
    DriveRequest,
    Language,
    PeriodRequest,
    TaskType,
    TranscriptionOptions,
    TranscriptionStatus,
)
from rarus_echo.client import EchoClient
from rarus_echo.core.credentials import Credentials
from rarus_echo.core.errors import (
    ApiError,
    AuthenticationError,
    AuthorizationError,
    BadRequestError,
    EchoError,
    FieldError,
    FileError,
    GenericApiError,
    NetworkError,
    ResponseDecodeError,
    SerializationError,
    ServerError,
    ValidationError,
)
from rarus_echo.core.pagination import Pagination
from rarus_echo.core.retry import RetryPolicy

__version__ = "0.1.0"

__all__ = [
    "ApiError",
    "AuthenticationError",
    "AuthorizationError",
    "BadRequestError",
    "Credentials",
    "DriveRequest",
    "EchoClient",
    "EchoError",
    "FieldError",
    "FileError",
    "GenericApiError",
    "Language",
    "NetworkError",
    "Pagination",
    "PeriodRequest",
    "ResponseDecodeError",
    "RetryPolicy",
    "SerializationError",
    "ServerError",
    "TaskType",
    "TranscriptionOptions",
    "TranscriptionStatus",
    "ValidationError",
]
