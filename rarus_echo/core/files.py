"""Local media file validation and scoped upload streams.

WHY: Uploading a 2 GB file only to have it rejected, or failing halfway
through opening a batch and leaking descriptors, are both avoidable. Files
are validated before any request is built, and opened inside one scope
that always closes them.

HOW: validate_media_file() checks existence, type, size, and MIME type.
open_media_files() validates every path first, then opens them with a
contextlib.ExitStack and yields MultipartFilePart objects.

RULES:
- Validation runs for ALL files before ANY file is opened
- Size cap is MAX_FILE_SIZE_BYTES (500 MB); empty files are rejected
- MIME type is guessed from the extension and checked against
  ALLOWED_MIME_TYPES
- Every opened stream is closed on every exit path
"""

from __future__ import annotations

import contextlib
import logging
import mimetypes
import os
from pathlib import Path
from typing import Iterator, List, Sequence, Union

from rarus_echo.config import ALLOWED_MIME_TYPES, EXTRA_MIME_TYPES, MAX_FILE_SIZE_BYTES
from rarus_echo.core.errors import FileError
from rarus_echo.core.request import MultipartFilePart

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


def guess_mime_type(path: PathLike) -> str:
    """Guess a file's MIME type from its extension."""
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix in EXTRA_MIME_TYPES:
        return EXTRA_MIME_TYPES[suffix]
    mime_type, _ = mimetypes.guess_type(path.name)
    return mime_type or "application/octet-stream"


def format_bytes(size: int, precision: int = 2) -> str:
    if size <= 0:
        return "0 B"
    units = ["B", "KB", "MB", "GB", "TB"]
    value = float(size)
    index = 0
    while value >= 1024 and index < len(units) - 1:
        value /= 1024
        index += 1
    return "{:.{}f} {}".format(value, precision, units[index])


def validate_media_file(path: PathLike) -> Path:
    """Check that a file can be uploaded for transcription.

    Raises:
        FileError: If the file is missing, not a regular file, unreadable,
            empty, larger than 500 MB, or of an unsupported type.

    Returns:
        The path as a Path object.
    """
    path = Path(path)
    if not path.exists():
        raise FileError("File does not exist: {}".format(path))
    if not path.is_file():
        raise FileError("Not a regular file: {}".format(path))
    if not os.access(path, os.R_OK):
        raise FileError("File is not readable: {}".format(path))

    size = path.stat().st_size
    if size == 0:
        raise FileError("File is empty: {}".format(path))
    if size > MAX_FILE_SIZE_BYTES:
        raise FileError(
            "File size ({}) exceeds maximum allowed size ({}): {}".format(
                format_bytes(size), format_bytes(MAX_FILE_SIZE_BYTES), path
            )
        )

    mime_type = guess_mime_type(path)
    if mime_type not in ALLOWED_MIME_TYPES:
        raise FileError(
            "File MIME type '{}' is not supported: {}".format(mime_type, path)
        )
    return path


def validate_media_files(paths: Sequence[PathLike]) -> List[Path]:
    if not paths:
        raise FileError("No files provided for upload")
    return [validate_media_file(p) for p in paths]


@contextlib.contextmanager
def open_media_files(paths: Sequence[PathLike]) -> Iterator[List[MultipartFilePart]]:
    """Validate, open, and yield upload parts; close them all on exit.

    Usage::

        with open_media_files(["a.mp3", "b.wav"]) as parts:
            api.post_multipart("/v1/async/transcription", parts)
    """
    validated = validate_media_files(paths)
    with contextlib.ExitStack() as stack:
        parts: List[MultipartFilePart] = []
        for path in validated:
            try:
                stream = stack.enter_context(open(path, "rb"))
            except OSError as exc:
                raise FileError("Unable to open file for reading: {}".format(path)) from exc
            parts.append(MultipartFilePart(
                filename=path.name,
                content_type=guess_mime_type(path),
                stream=stream,
            ))
        logger.debug("Opened %d file(s) for upload", len(parts))
        yield parts
