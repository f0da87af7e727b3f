"""High-level client tying credentials, pipeline and services together.

WHY: Most callers want one object to create from credentials (or the
environment) and then call ``client.transcription.submit(...)``. The
facade builds the ApiClient once and shares it between services.

HOW: EchoClient owns an ApiClient and exposes one instance of each
service. It is a context manager that closes the underlying httpx client.

RULES:
- Use as: with EchoClient(credentials) as client: ...
- from_environment() reads RARUS_ECHO_* variables once
- http_client / transport / retry_policy are passed through to ApiClient
"""

from __future__ import annotations

from typing import Optional

import httpx

from rarus_echo.api.services import QueueService, StatusService, TranscriptionService
from rarus_echo.core.credentials import Credentials
from rarus_echo.core.pipeline import ApiClient
from rarus_echo.core.retry import RetryPolicy


class EchoClient:
    """Entry point to the Echo transcription API."""

    def __init__(
        self,
        credentials: Credentials,
        http_client: Optional[httpx.Client] = None,
        transport: Optional[httpx.BaseTransport] = None,
        retry_policy: Optional[RetryPolicy] = None,
    ) -> None:
        self.api = ApiClient(
            credentials,
            http_client=http_client,
            transport=transport,
            retry_policy=retry_policy,
        )
        self.transcription = TranscriptionService(self.api)
        self.status = StatusService(self.api)
        self.queue = QueueService(self.api)

    @classmethod
    def from_environment(cls, **kwargs) -> EchoClient:
        return cls(Credentials.from_environment(), **kwargs)

    def __enter__(self) -> EchoClient:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        self.close()

    def close(self) -> None:
        self.api.close()
