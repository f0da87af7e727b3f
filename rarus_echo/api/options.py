"""Request-side value objects for the endpoint services.

WHY: Submission options travel as custom HTTP headers, date ranges as four
separate query parameters, and drive imports as a JSON body plus a header.
Typed objects keep those encodings in one place instead of in every
caller.

HOW: Frozen dataclasses with to_headers() / to_query_params() /
to_body() methods returning plain dicts for ApiClient.

RULES:
- Boolean headers are sent as "1"/"0"
- Dates are formatted YYYY-MM-DD, times HH:MM:SS
- request-source is only sent when set
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Dict, Optional

from rarus_echo.api.enums import Language, TaskType


def _flag(value: bool) -> str:
    return "1" if value else "0"


@dataclass(frozen=True)
class TranscriptionOptions:
    """Options for POST /v1/async/transcription, sent as headers."""

    task_type: TaskType = TaskType.TRANSCRIPTION
    language: Language = Language.AUTO
    censor: bool = False
    speakers_correction: bool = False
    store_file: bool = True
    low_priority: bool = False
    request_source: Optional[str] = None

    def __post_init__(self) -> None:
        # Accept plain strings ("diarization", "ru") as well as enum members.
        object.__setattr__(self, "task_type", TaskType(self.task_type))
        object.__setattr__(self, "language", Language(self.language))

    def to_headers(self) -> Dict[str, str]:
        headers = {
            "task-type": self.task_type.value,
            "language": self.language.value,
            "censor": _flag(self.censor),
            "speakers-correction": _flag(self.speakers_correction),
            "store-file": _flag(self.store_file),
            "low-priority": _flag(self.low_priority),
        }
        if self.request_source is not None:
            headers["request-source"] = self.request_source
        return headers


@dataclass(frozen=True)
class PeriodRequest:
    """A date-time range for the period listing endpoints."""

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise ValueError("Period end must not be before period start")

    @classmethod
    def today(cls) -> PeriodRequest:
        today = date.today()
        return cls(
            start=datetime.combine(today, time.min),
            end=datetime.combine(today, time(23, 59, 59)),
        )

    @classmethod
    def for_dates(cls, start: date, end: date) -> PeriodRequest:
        """Whole days from the start of ``start`` to the end of ``end``."""
        return cls(
            start=datetime.combine(start, time.min),
            end=datetime.combine(end, time(23, 59, 59)),
        )

    def to_query_params(self) -> Dict[str, str]:
        return {
            "period_start": self.start.strftime("%Y-%m-%d"),
            "period_end": self.end.strftime("%Y-%m-%d"),
            "time_start": self.start.strftime("%H:%M:%S"),
            "time_end": self.end.strftime("%H:%M:%S"),
        }


@dataclass(frozen=True)
class DriveRequest:
    """Transcribe files already stored in the remote drive (WebDAV)."""

    target_path: str = "/"
    is_immediate: bool = False

    def to_body(self) -> Dict[str, str]:
        return {"target_path": self.target_path}

    def to_headers(self) -> Dict[str, str]:
        return {"is-immediate": _flag(self.is_immediate)}
