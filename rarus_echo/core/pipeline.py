"""Synchronous API client: request building, retries, response handling.

WHY: Every Echo endpoint is one of three call shapes: GET with query
parameters, POST with a JSON body, or POST with uploaded files. This
module composes the request builder, the retry policy, and the response
interpreter into those three operations so the endpoint services only
deal with paths and result types.

HOW: ApiClient owns (or borrows) an httpx.Client used as the transport.
Each call builds a fresh httpx.Request inside the retried function, so
multipart streams are rewound on every attempt. Transport errors that
outlive the retry policy are wrapped in NetworkError; a body that fails
content decoding (bad gzip) becomes ResponseDecodeError. Responses of any
status go to the ResponseInterpreter.

RULES:
- Use as a context manager (with ApiClient(...) as api:) or call close()
- An injected http_client is never closed by ApiClient
- HTTP error statuses are raised immediately, never retried
- Returns the decoded JSON payload ({} for an empty body)
- No raw httpx exception escapes send()
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

import httpx

from rarus_echo.config import DEFAULT_CONNECT_TIMEOUT_S, DEFAULT_TIMEOUT_S
from rarus_echo.core.credentials import Credentials
from rarus_echo.core.errors import NetworkError, ResponseDecodeError
from rarus_echo.core.request import MultipartFilePart, QueryValue, RequestBuilder, RequestSpec
from rarus_echo.core.response import ResponseInterpreter
from rarus_echo.core.retry import RetryPolicy

logger = logging.getLogger(__name__)


class ApiClient:
    """Low-level client exposing get, post and post_multipart.

    WHY: Services need one dependable way to talk to the API that already
    handles auth, transient network failures, and error mapping.

    HOW: Wraps an httpx.Client. Pass ``http_client`` to reuse a configured
    client, or ``transport`` (e.g. httpx.MockTransport) to let ApiClient
    build its own client around it.

    RULES:
    - credentials are immutable and shared read-only across calls
    - retry_policy defaults to RetryPolicy() (3 attempts, 1000 ms base)
    - Not bound to a thread; holds no per-call state
    """

    def __init__(
        self,
        credentials: Credentials,
        http_client: Optional[httpx.Client] = None,
        transport: Optional[httpx.BaseTransport] = None,
        retry_policy: Optional[RetryPolicy] = None,
        timeout: Optional[httpx.Timeout] = None,
    ) -> None:
        if http_client is not None and transport is not None:
            raise ValueError("Pass either http_client or transport, not both")
        self._credentials = credentials
        self._builder = RequestBuilder(credentials)
        self._retry = retry_policy or RetryPolicy()
        self._interpreter = ResponseInterpreter()
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(
            transport=transport,
            timeout=timeout or httpx.Timeout(DEFAULT_TIMEOUT_S, connect=DEFAULT_CONNECT_TIMEOUT_S),
        )

    def __enter__(self) -> ApiClient:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    @property
    def credentials(self) -> Credentials:
        return self._credentials

    @property
    def retry_policy(self) -> RetryPolicy:
        return self._retry

    # ------------------------------------------------------------------
    # Verbs
    # ------------------------------------------------------------------

    def get(
        self,
        endpoint: str,
        query: Optional[Mapping[str, QueryValue]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Any:
        return self.send(RequestSpec(
            method="GET",
            path=endpoint,
            query=dict(query or {}),
            headers=dict(headers or {}),
        ))

    def post(
        self,
        endpoint: str,
        body: Any = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Any:
        return self.send(RequestSpec(
            method="POST",
            path=endpoint,
            headers=dict(headers or {}),
            body=body,
        ))

    def post_multipart(
        self,
        endpoint: str,
        files: List[MultipartFilePart],
        headers: Optional[Mapping[str, str]] = None,
    ) -> Any:
        return self.send(RequestSpec(
            method="POST",
            path=endpoint,
            headers=dict(headers or {}),
            files=list(files),
        ))

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    def send(self, spec: RequestSpec) -> Any:
        """Build, send (with retries) and interpret one request."""
        def attempt() -> httpx.Response:
            # Rebuilt per attempt: multipart streams must be rewound.
            request = self._builder.build(spec)
            logger.debug(
                "Sending %s %s headers=%s",
                request.method,
                request.url,
                summarize_headers(request.headers),
            )
            return self._client.send(request)

        description = "{} {}".format(spec.method, spec.path)
        try:
            response = self._retry.call(attempt, description=description)
        except httpx.DecodingError as exc:
            raise ResponseDecodeError("Failed to decode response body: {}".format(exc)) from exc
        except httpx.RequestError as exc:
            raise NetworkError("HTTP request failed: {}".format(exc)) from exc

        logger.debug("Received HTTP %d for %s", response.status_code, description)
        return self._interpreter.interpret(response)


def summarize_headers(headers: Mapping[str, str]) -> Dict[str, str]:
    """Copy of headers with the Authorization value masked, for logging."""
    return {
        name: ("***" if name.lower() == "authorization" else value)
        for name, value in headers.items()
    }
