"""API credentials for the Echo service.

WHY: Every request carries the API key and user id as headers and is sent
to one base URL. Holding the three together in an immutable, validated
object means a bad configuration fails at startup, not on the first call.

HOW: A frozen dataclass validated in __post_init__. from_environment()
reads the RARUS_ECHO_* variables (populated by python-dotenv) once.

RULES:
- api_key and user_id must be non-empty
- base_url must be an absolute http(s) URL with a host
- base_url never ends with "/" (trailing slashes are stripped)
- api_key is excluded from repr()
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional

import httpx

from rarus_echo.config import DEFAULT_BASE_URL, ENV_API_KEY, ENV_BASE_URL, ENV_USER_ID


@dataclass(frozen=True)
class Credentials:
    """Immutable API key, user id and base URL."""

    api_key: str = field(repr=False)
    user_id: str
    base_url: str = DEFAULT_BASE_URL

    def __post_init__(self) -> None:
        if not self.api_key or not self.api_key.strip():
            raise ValueError("API key cannot be empty")
        if not self.user_id or not self.user_id.strip():
            raise ValueError("User ID cannot be empty")
        if not self.base_url:
            raise ValueError("Base URL cannot be empty")
        _validate_url(self.base_url)
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    @classmethod
    def create(
        cls,
        api_key: str,
        user_id: str,
        base_url: Optional[str] = None,
    ) -> Credentials:
        """Build credentials, falling back to the production base URL."""
        return cls(api_key=api_key, user_id=user_id, base_url=base_url or DEFAULT_BASE_URL)

    @classmethod
    def from_environment(cls) -> Credentials:
        """Read credentials from RARUS_ECHO_* environment variables.

        Raises:
            ValueError: If the API key or user id variable is missing or empty.
        """
        api_key = os.getenv(ENV_API_KEY, "").strip()
        user_id = os.getenv(ENV_USER_ID, "").strip()
        base_url = os.getenv(ENV_BASE_URL, "").strip() or DEFAULT_BASE_URL

        if not api_key:
            raise ValueError(
                "{} environment variable is not set. "
                "Add it to the environment or the .env file.".format(ENV_API_KEY)
            )
        if not user_id:
            raise ValueError(
                "{} environment variable is not set. "
                "Add it to the environment or the .env file.".format(ENV_USER_ID)
            )
        return cls(api_key=api_key, user_id=user_id, base_url=base_url)


def _validate_url(value: str) -> None:
    try:
        url = httpx.URL(value)
    except httpx.InvalidURL as exc:
        raise ValueError("Base URL must be a valid URL: {!r}".format(value)) from exc
    if url.scheme not in ("http", "https") or not url.host:
        raise ValueError("Base URL must be a valid URL: {!r}".format(value))
