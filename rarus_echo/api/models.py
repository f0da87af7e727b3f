"""Typed result objects decoded from Echo API responses.

WHY: The API answers with JSON objects wrapping a ``results`` array and,
for list endpoints, a ``pagination`` block. Typed dataclasses make these
shapes explicit and keep the "what if the key is missing" decisions in
one visible place.

HOW: Each dataclass has a from_dict() factory. Required keys raise
ResponseDecodeError when absent; optional keys fall back to the explicit
defaults written in the factory.

RULES:
- file_id is required on transcript items and submit results
- Numeric queue/status fields default to 0.0 when missing
- An empty or missing task_type decodes to None (file still queued)
- A missing pagination block decodes to Pagination.default()
- Unknown status strings are a decode error, not a silent default
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from rarus_echo.api.enums import TaskType, TranscriptionStatus
from rarus_echo.core.errors import ResponseDecodeError
from rarus_echo.core.pagination import Pagination


# ---------------------------------------------------------------------------
# Decoding helpers (module-private)
# ---------------------------------------------------------------------------


def _results(data: Dict[str, Any], key: str = "results") -> List[Dict[str, Any]]:
    if not isinstance(data, dict):
        raise ResponseDecodeError("Expected a JSON object, got {}".format(type(data).__name__))
    results = data.get(key)
    if results is None:
        return []
    if not isinstance(results, list):
        raise ResponseDecodeError("Field '{}' must be a list".format(key))
    return results


def first_result(data: Dict[str, Any]) -> Dict[str, Any]:
    """First item of the ``results`` array, or {} when it is empty."""
    results = _results(data)
    return results[0] if results else {}


def _require(data: Dict[str, Any], key: str) -> Any:
    if key not in data:
        raise ResponseDecodeError("Missing required field: {}".format(key))
    return data[key]


def _float(data: Dict[str, Any], key: str, default: float = 0.0) -> float:
    value = data.get(key)
    if value is None or value == "":
        return default
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ResponseDecodeError("Field '{}' is not a number: {!r}".format(key, value)) from exc


def _status(value: Any) -> TranscriptionStatus:
    try:
        return TranscriptionStatus(value)
    except ValueError as exc:
        raise ResponseDecodeError("Unknown transcription status: {!r}".format(value)) from exc


def _task_type(value: Any) -> Optional[TaskType]:
    if value in (None, ""):
        return None
    try:
        return TaskType(value)
    except ValueError as exc:
        raise ResponseDecodeError("Unknown task type: {!r}".format(value)) from exc


def _pagination(data: Dict[str, Any]) -> Pagination:
    try:
        return Pagination.from_dict(data.get("pagination"))
    except (TypeError, ValueError) as exc:
        raise ResponseDecodeError("Invalid pagination block: {}".format(exc)) from exc


def _timestamp(value: Any) -> Optional[datetime]:
    if value in (None, ""):
        return None
    text = str(value)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError as exc:
        raise ResponseDecodeError("Invalid timestamp: {!r}".format(value)) from exc


# ---------------------------------------------------------------------------
# Transcription results
# ---------------------------------------------------------------------------


@dataclass
class TranscriptSubmitResult:
    """Response of POST /v1/async/transcription: one file_id per uploaded file."""

    file_ids: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> TranscriptSubmitResult:
        if not isinstance(data, dict) or "results" not in data:
            raise ResponseDecodeError("Missing required field: results")
        file_ids = []
        for index, item in enumerate(_results(data)):
            if not isinstance(item, dict) or "file_id" not in item:
                raise ResponseDecodeError(
                    "Invalid result structure at index {}: missing file_id".format(index)
                )
            file_ids.append(str(item["file_id"]))
        return cls(file_ids=file_ids)

    @property
    def first_file_id(self) -> Optional[str]:
        return self.file_ids[0] if self.file_ids else None

    def __len__(self) -> int:
        return len(self.file_ids)


@dataclass
class TranscriptItemResult:
    """One transcript as returned by GET /v1/async/transcription.

    ``result`` holds the transcript text once status is success; task_type
    is None while the file is still waiting in the queue.
    """

    file_id: str
    status: TranscriptionStatus
    task_type: Optional[TaskType] = None
    result: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> TranscriptItemResult:
        return cls(
            file_id=str(_require(data, "file_id")),
            status=_status(_require(data, "status")),
            task_type=_task_type(data.get("task_type")),
            result=data.get("result"),
        )

    @property
    def is_successful(self) -> bool:
        return self.status is TranscriptionStatus.SUCCESS

    @property
    def is_failed(self) -> bool:
        return self.status is TranscriptionStatus.FAILURE

    @property
    def is_in_progress(self) -> bool:
        return self.status.is_in_progress


@dataclass
class TranscriptBatchResult:
    """A page of transcripts from the period and list endpoints."""

    results: List[TranscriptItemResult]
    pagination: Pagination

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> TranscriptBatchResult:
        return cls(
            results=[TranscriptItemResult.from_dict(item) for item in _results(data)],
            pagination=_pagination(data),
        )

    @property
    def first(self) -> Optional[TranscriptItemResult]:
        return self.results[0] if self.results else None

    def __len__(self) -> int:
        return len(self.results)

    def __iter__(self):
        return iter(self.results)


# ---------------------------------------------------------------------------
# Drive (WebDAV) results
# ---------------------------------------------------------------------------


@dataclass
class DriveResultItem:
    """Outcome for one file picked up from the remote drive."""

    file_path: str = ""
    status: str = "failure"
    file_id: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> DriveResultItem:
        return cls(
            file_path=data.get("file_path", ""),
            status=data.get("status", "failure"),
            file_id=data.get("file_id"),
            error=data.get("error"),
        )

    @property
    def is_success(self) -> bool:
        return self.status == "success"

    @property
    def is_failure(self) -> bool:
        return self.status == "failure"

    @property
    def is_warning(self) -> bool:
        return self.status == "warning"


@dataclass
class DriveSubmitResult:
    """Response of POST /v2/webdav."""

    items: List[DriveResultItem] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> DriveSubmitResult:
        # The drive endpoint answers with "result"; accept "results" as well.
        key = "result" if isinstance(data, dict) and "result" in data else "results"
        return cls(items=[DriveResultItem.from_dict(item) for item in _results(data, key)])

    @property
    def successful(self) -> List[DriveResultItem]:
        return [item for item in self.items if item.is_success]

    @property
    def failed(self) -> List[DriveResultItem]:
        return [item for item in self.items if item.is_failure]

    def __len__(self) -> int:
        return len(self.items)


# ---------------------------------------------------------------------------
# Status results
# ---------------------------------------------------------------------------


@dataclass
class StatusItemResult:
    """Processing status of one file (GET /v1/async/transcription/fileid)."""

    file_id: str
    status: TranscriptionStatus = TranscriptionStatus.WAITING
    file_size: float = 0.0
    file_duration: float = 0.0
    timestamp_arrival: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> StatusItemResult:
        return cls(
            file_id=str(_require(data, "file_id")),
            status=_status(data.get("status") or TranscriptionStatus.WAITING.value),
            file_size=_float(data, "file_size"),
            file_duration=_float(data, "file_duration"),
            timestamp_arrival=_timestamp(data.get("timestamp_arrival")),
        )

    @property
    def is_completed(self) -> bool:
        return self.status.is_final

    @property
    def is_successful(self) -> bool:
        return self.status is TranscriptionStatus.SUCCESS


@dataclass
class StatusListResult:
    """A page of file statuses."""

    results: List[StatusItemResult]
    pagination: Pagination

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> StatusListResult:
        return cls(
            results=[StatusItemResult.from_dict(item) for item in _results(data)],
            pagination=_pagination(data),
        )

    def __len__(self) -> int:
        return len(self.results)

    def __iter__(self):
        return iter(self.results)


# ---------------------------------------------------------------------------
# Queue results
# ---------------------------------------------------------------------------


@dataclass
class QueueInfoResult:
    """Aggregate queue statistics for the user.

    files_size is in megabytes and files_duration in minutes, as reported
    by the API.
    """

    files_count: float = 0.0
    files_size: float = 0.0
    files_duration: float = 0.0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> QueueInfoResult:
        first = first_result(data)
        return cls(
            files_count=_float(first, "files_count"),
            files_size=_float(first, "files_size"),
            files_duration=_float(first, "files_duration"),
        )

    @property
    def is_empty(self) -> bool:
        return self.files_count == 0

    def __str__(self) -> str:
        return "Queue: {} files, {:.2f} MB, {:.2f} minutes".format(
            int(self.files_count), self.files_size, self.files_duration
        )
