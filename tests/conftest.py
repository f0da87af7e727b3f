"""Shared test fixtures for the rarus_echo test suite.

WHY: Most tests need credentials, a client wired to a fake transport, and
small media files on disk. Centralizing them keeps every test module
focused on behavior.

HOW: httpx.MockTransport stands in for the network. make_api() builds an
ApiClient around a handler function and a RetryPolicy whose sleep only
records the requested delays.

RULES:
- No test talks to the real API
- Retry delays are recorded, never slept
- Media files are written under pytest's tmp_path
"""

from __future__ import annotations

from typing import Callable, List

import httpx
import pytest

from rarus_echo.client import EchoClient
from rarus_echo.core.credentials import Credentials
from rarus_echo.core.pipeline import ApiClient
from rarus_echo.core.retry import RetryPolicy

BASE_URL = "https://echo.test"
API_KEY = "test-api-key"
USER_ID = "00000000-0000-0000-0000-000000000001"


class SleepRecorder:
    """Drop-in for time.sleep that records delays in seconds."""

    def __init__(self) -> None:
        self.calls: List[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep developer RARUS_ECHO_* variables out of the tests."""
    for name in ("RARUS_ECHO_API_KEY", "RARUS_ECHO_USER_ID", "RARUS_ECHO_BASE_URL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(api_key=API_KEY, user_id=USER_ID, base_url=BASE_URL)


@pytest.fixture
def sleeper() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def make_api(credentials, sleeper) -> Callable[..., ApiClient]:
    """Factory: ApiClient whose transport calls the given handler."""
    clients: List[ApiClient] = []

    def _make(handler: Callable[[httpx.Request], httpx.Response], max_retries: int = 3) -> ApiClient:
        api = ApiClient(
            credentials,
            transport=httpx.MockTransport(handler),
            retry_policy=RetryPolicy(max_retries=max_retries, base_delay_ms=1000, sleep=sleeper),
        )
        clients.append(api)
        return api

    yield _make
    for api in clients:
        api.close()


@pytest.fixture
def make_client(credentials, sleeper) -> Callable[..., EchoClient]:
    """Factory: EchoClient whose transport calls the given handler."""
    clients: List[EchoClient] = []

    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> EchoClient:
        client = EchoClient(
            credentials,
            transport=httpx.MockTransport(handler),
            retry_policy=RetryPolicy(max_retries=3, base_delay_ms=10, sleep=sleeper),
        )
        clients.append(client)
        return client

    yield _make
    for client in clients:
        client.close()


@pytest.fixture
def audio_file(tmp_path):
    """A small non-empty .mp3 file."""
    path = tmp_path / "interview.mp3"
    path.write_bytes(b"ID3 fake mp3 payload")
    return path


@pytest.fixture
def video_file(tmp_path):
    """A small non-empty .mp4 file."""
    path = tmp_path / "meeting.mp4"
    path.write_bytes(b"fake mp4 payload")
    return path
