"""Configuration constants, upload limits, and .env loading.

WHY: Centralizes every configurable value of the client so it is easy to
find, update, and override. Environment variable names, the default API
host, retry defaults, and the upload allow-list are plain data structures,
not buried in the pipeline.

HOW: python-dotenv loads the .env file on import. Constants are defined as
module-level values; the ones that may vary per deployment read an
environment variable with a fallback. Credentials themselves are NOT read
here: Credentials.from_environment() reads them once, explicitly.

RULES:
- ENV_* names are the only place environment variable names are spelled
- MAX_FILE_SIZE_BYTES is the hard upload cap (500 MB)
- ALLOWED_MIME_TYPES lists the audio/video types the service accepts
- Retry defaults can be overridden via environment variables
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

# Load .env from the working directory (where the script is run from)
load_dotenv()

# ---------------------------------------------------------------------------
# Environment variable names
# ---------------------------------------------------------------------------

ENV_API_KEY = "RARUS_ECHO_API_KEY"
ENV_USER_ID = "RARUS_ECHO_USER_ID"
ENV_BASE_URL = "RARUS_ECHO_BASE_URL"
ENV_MAX_RETRIES = "RARUS_ECHO_MAX_RETRIES"
ENV_RETRY_DELAY_MS = "RARUS_ECHO_RETRY_DELAY_MS"

# ---------------------------------------------------------------------------
# API defaults
# ---------------------------------------------------------------------------

DEFAULT_BASE_URL = "https://production-ai-ui-api.ai.rarus-cloud.ru"
"""Production host of the Echo transcription API."""

DEFAULT_TIMEOUT_S = 300.0
DEFAULT_CONNECT_TIMEOUT_S = 30.0


def env_int(name: str, default: int) -> int:
    """Read an integer environment variable, or default when unset or blank.

    Raises:
        ValueError: If the variable is set but is not an integer.
    """
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(
            "{} must be an integer, got {!r}. "
            "Fix it in the environment or the .env file.".format(name, raw)
        ) from None


DEFAULT_MAX_RETRIES = env_int(ENV_MAX_RETRIES, 3)
DEFAULT_RETRY_DELAY_MS = env_int(ENV_RETRY_DELAY_MS, 1000)

DEFAULT_PAGE = 1
DEFAULT_PER_PAGE = 10

# ---------------------------------------------------------------------------
# Upload limits
# ---------------------------------------------------------------------------

MAX_FILE_SIZE_BYTES = 500 * 1024 * 1024

ALLOWED_MIME_TYPES: frozenset[str] = frozenset({
    # Audio
    "audio/mpeg", "audio/mp3", "audio/wav", "audio/x-wav", "audio/wave",
    "audio/x-pn-wav", "audio/ogg", "audio/flac", "audio/x-flac", "audio/aac",
    "audio/m4a", "audio/x-m4a", "audio/mp4", "audio/webm",
    # Video
    "video/mp4", "video/mpeg", "video/x-msvideo", "video/avi",
    "video/quicktime", "video/x-matroska", "video/webm",
})
"""MIME types accepted for transcription uploads."""

EXTRA_MIME_TYPES: dict[str, str] = {
    ".aac": "audio/aac",
    ".flac": "audio/flac",
    ".m4a": "audio/x-m4a",
    ".mkv": "video/x-matroska",
    ".mp3": "audio/mpeg",
    ".mp4": "video/mp4",
    ".ogg": "audio/ogg",
    ".opus": "audio/ogg",
    ".wav": "audio/wav",
    ".webm": "video/webm",
}
"""Extensions resolved without consulting the platform mime.types database."""
