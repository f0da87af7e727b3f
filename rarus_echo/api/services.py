"""Endpoint services for transcription, status, and queue operations.

WHY: Each Echo endpoint is a fixed combination of HTTP verb, path, query
or body shape, and response shape. Services name those combinations so
callers write ``client.status.get_by_file_id(fid)`` instead of building
requests by hand.

HOW: Every method is one ApiClient call followed by a from_dict() decode.
Uploads validate and open local files via open_media_files(), which
closes every stream whether the call succeeds or fails.

RULES:
- No HTTP details here beyond paths, query keys, and headers
- Local file validation happens before any request is sent
- Pagination goes in the query string for GET listings and in headers for
  the POST list endpoints
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from rarus_echo.api.models import (
    DriveSubmitResult,
    QueueInfoResult,
    StatusItemResult,
    StatusListResult,
    TranscriptBatchResult,
    TranscriptItemResult,
    TranscriptSubmitResult,
    first_result,
)
from rarus_echo.api.options import DriveRequest, PeriodRequest, TranscriptionOptions
from rarus_echo.core.files import PathLike, open_media_files
from rarus_echo.core.pagination import Pagination
from rarus_echo.core.pipeline import ApiClient

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Endpoint paths
# ---------------------------------------------------------------------------

TRANSCRIPTION_PATH = "/v1/async/transcription"
TRANSCRIPTION_PERIOD_PATH = "/v1/async/transcription/period"
TRANSCRIPTION_LIST_PATH = "/v2/async/transcription/list"
STATUS_FILE_PATH = "/v1/async/transcription/fileid"
STATUS_PERIOD_PATH = "/v1/async/transcription/userid"
STATUS_LIST_PATH = "/v2/async/transcription/fileid/list"
QUEUE_PATH = "/v1/async/transcription/queue"
DRIVE_PATH = "/v2/webdav"


def _file_id_body(file_ids: Sequence[str]) -> List[dict]:
    return [{"file_id": str(file_id)} for file_id in file_ids]


class TranscriptionService:
    """Submit media and fetch transcripts."""

    def __init__(self, api: ApiClient) -> None:
        self._api = api

    def submit(
        self,
        paths: Sequence[PathLike],
        options: Optional[TranscriptionOptions] = None,
    ) -> TranscriptSubmitResult:
        """Upload local media files for transcription.

        WHY: This is the entry point of the async workflow; the returned
        file ids are used to poll status and fetch transcripts.

        HOW: Validates and opens all files, sends them as repeated "files"
        multipart parts with the options encoded as headers.

        RULES:
        - Raises FileError before any request when a file is invalid
        - Streams are closed on every exit path
        - options defaults to TranscriptionOptions()

        Args:
            paths: Paths to audio/video files.
            options: Processing options (task type, language, flags).

        Returns:
            TranscriptSubmitResult with one file_id per uploaded file.
        """
        options = options or TranscriptionOptions()
        logger.info(
            "Submitting %d file(s) for %s (language=%s)",
            len(paths),
            options.task_type.value,
            options.language.value,
        )
        with open_media_files(paths) as parts:
            data = self._api.post_multipart(TRANSCRIPTION_PATH, parts, options.to_headers())

        result = TranscriptSubmitResult.from_dict(data)
        logger.info("Files submitted: %s", ", ".join(result.file_ids))
        return result

    def submit_from_drive(self, request: DriveRequest) -> DriveSubmitResult:
        """Transcribe files already stored in the remote drive."""
        logger.info("Submitting drive path %s", request.target_path)
        data = self._api.post(DRIVE_PATH, request.to_body(), request.to_headers())
        return DriveSubmitResult.from_dict(data)

    def get_transcript(self, file_id: str) -> TranscriptItemResult:
        logger.debug("Getting transcript for %s", file_id)
        data = self._api.get(TRANSCRIPTION_PATH, {"file_id": str(file_id)})
        return TranscriptItemResult.from_dict(first_result(data))

    def get_by_period(
        self,
        period: PeriodRequest,
        pagination: Optional[Pagination] = None,
    ) -> TranscriptBatchResult:
        pagination = pagination or Pagination.default()
        query = {**period.to_query_params(), **pagination.to_query_params()}
        logger.debug("Getting transcripts for period %s", query)
        data = self._api.get(TRANSCRIPTION_PERIOD_PATH, query)
        return TranscriptBatchResult.from_dict(data)

    def get_list(
        self,
        file_ids: Sequence[str],
        pagination: Optional[Pagination] = None,
    ) -> TranscriptBatchResult:
        pagination = pagination or Pagination.default()
        logger.debug("Getting %d transcript(s) by id", len(file_ids))
        data = self._api.post(
            TRANSCRIPTION_LIST_PATH,
            _file_id_body(file_ids),
            pagination.to_headers(),
        )
        return TranscriptBatchResult.from_dict(data)


class StatusService:
    """Query processing status of submitted files."""

    def __init__(self, api: ApiClient) -> None:
        self._api = api

    def get_by_file_id(self, file_id: str) -> StatusItemResult:
        logger.debug("Getting status for %s", file_id)
        data = self._api.get(STATUS_FILE_PATH, {"file_id": str(file_id)})
        return StatusItemResult.from_dict(first_result(data))

    def get_by_period(
        self,
        period: PeriodRequest,
        pagination: Optional[Pagination] = None,
    ) -> StatusListResult:
        pagination = pagination or Pagination.default()
        query = {**period.to_query_params(), **pagination.to_query_params()}
        data = self._api.get(STATUS_PERIOD_PATH, query)
        return StatusListResult.from_dict(data)

    def get_list(
        self,
        file_ids: Sequence[str],
        pagination: Optional[Pagination] = None,
    ) -> StatusListResult:
        pagination = pagination or Pagination.default()
        data = self._api.post(
            STATUS_LIST_PATH,
            _file_id_body(file_ids),
            pagination.to_headers(),
        )
        return StatusListResult.from_dict(data)


class QueueService:
    """Report how much work is waiting in the user's queue."""

    def __init__(self, api: ApiClient) -> None:
        self._api = api

    def get_info(self) -> QueueInfoResult:
        data = self._api.get(QUEUE_PATH)
        info = QueueInfoResult.from_dict(data)
        logger.debug("Queue info: %s", info)
        return info
