"""Wire enums of the Echo transcription API.

All inherit from str so values serialize cleanly into headers and JSON.
"""

from __future__ import annotations

import enum
from typing import List


class TaskType(str, enum.Enum):
    """Kind of processing requested for an uploaded file."""

    TRANSCRIPTION = "transcription"
    TIMESTAMPS = "timestamps"
    DIARIZATION = "diarization"
    RAW_TRANSCRIPTION = "raw_transcription"

    @classmethod
    def values(cls) -> List[str]:
        return [member.value for member in cls]

    @property
    def description(self) -> str:
        return _TASK_DESCRIPTIONS[self]


_TASK_DESCRIPTIONS = {
    TaskType.TRANSCRIPTION: "Standard transcription",
    TaskType.TIMESTAMPS: "Transcription with timestamps",
    TaskType.DIARIZATION: "Transcription with speaker diarization",
    TaskType.RAW_TRANSCRIPTION: "Raw transcription text",
}


class Language(str, enum.Enum):
    """Spoken language of the media; AUTO lets the service detect it."""

    AUTO = "auto"
    RU = "ru"
    EN = "en"
    DE = "de"
    FR = "fr"
    ES = "es"
    PT = "pt"
    HY = "hy"
    JA = "ja"
    TR = "tr"
    AR = "ar"
    ZH = "zh"
    HE = "he"
    VI = "vi"

    @classmethod
    def values(cls) -> List[str]:
        return [member.value for member in cls]


class TranscriptionStatus(str, enum.Enum):
    """Processing state of one file.

    waiting and processing are in progress; success and failure are final.
    """

    WAITING = "waiting"
    PROCESSING = "processing"
    SUCCESS = "success"
    FAILURE = "failure"

    @property
    def is_final(self) -> bool:
        return self in (TranscriptionStatus.SUCCESS, TranscriptionStatus.FAILURE)

    @property
    def is_in_progress(self) -> bool:
        return self in (TranscriptionStatus.WAITING, TranscriptionStatus.PROCESSING)
