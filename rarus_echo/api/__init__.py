"""Echo endpoint services, request options, and result models.

WHY: The remote API exposes transcription, status, queue, and drive
endpoints. This package maps each of them onto a typed method.

HOW: Services in services.py wrap rarus_echo.core.ApiClient. Requests are
described by options.py value objects and answers decoded into models.py
dataclasses.

RULES:
- All HTTP calls go through ApiClient (no direct httpx usage here)
- Result objects are built only via their from_dict() factories
"""

from rarus_echo.api.enums import Language, TaskType, TranscriptionStatus
from rarus_echo.api.models import (
    DriveResultItem,
    DriveSubmitResult,
    QueueInfoResult,
    StatusItemResult,
    StatusListResult,
    TranscriptBatchResult,
    TranscriptItemResult,
    TranscriptSubmitResult,
)
from rarus_echo.api.options import DriveRequest, PeriodRequest, TranscriptionOptions
from rarus_echo.api.services import QueueService, StatusService, TranscriptionService

__all__ = [
    "DriveRequest",
    "DriveResultItem",
    "DriveSubmitResult",
    "Language",
    "PeriodRequest",
    "QueueInfoResult",
    "QueueService",
    "StatusItemResult",
    "StatusListResult",
    "StatusService",
    "TaskType",
    "TranscriptBatchResult",
    "TranscriptItemResult",
    "TranscriptSubmitResult",
    "TranscriptionOptions",
    "TranscriptionService",
    "TranscriptionStatus",
]
