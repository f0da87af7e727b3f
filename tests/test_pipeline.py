"""End-to-end tests for ApiClient over httpx.MockTransport.

WHY: The pipeline is where building, retrying and interpreting meet. These
tests check the composed behavior: what goes over the wire, which
failures are retried, and which exception the caller finally sees.
"""

from __future__ import annotations

import io
import json

import httpx
import pytest

from rarus_echo.core.errors import NetworkError, ResponseDecodeError, SerializationError, ServerError
from rarus_echo.core.pipeline import ApiClient, summarize_headers
from rarus_echo.core.request import MultipartFilePart


class Recorder:
    """MockTransport handler that records requests and replays responses."""

    def __init__(self, *outcomes) -> None:
        self.outcomes = list(outcomes)
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class TestVerbs:

    def test_get_sends_query_and_auth(self, make_api, credentials):
        """GET sends the query and auth headers and returns JSON."""
        handler = Recorder(httpx.Response(200, json={"results": []}))
        api = make_api(handler)
        assert api.get("/v1/async/transcription", {"file_id": "abc"}) == {"results": []}
        request = handler.requests[0]
        assert request.method == "GET"
        assert request.url.path == "/v1/async/transcription"
        assert request.url.params["file_id"] == "abc"
        assert request.headers["Authorization"] == credentials.api_key
        assert request.headers["user-id"] == credentials.user_id

    def test_post_sends_json(self, make_api):
        """POST sends a JSON body with the caller headers."""
        handler = Recorder(httpx.Response(200, json={"ok": True}))
        api = make_api(handler)
        api.post("/v2/async/transcription/list", [{"file_id": "a"}], {"page": "1"})
        request = handler.requests[0]
        assert json.loads(request.content) == [{"file_id": "a"}]
        assert request.headers["page"] == "1"
        assert request.headers["Content-Type"] == "application/json"

    def test_post_multipart(self, make_api):
        """post_multipart sends the files as "files" parts."""
        handler = Recorder(httpx.Response(200, json={"results": [{"file_id": "x"}]}))
        api = make_api(handler)
        part = MultipartFilePart("a.mp3", "audio/mpeg", io.BytesIO(b"AUDIO"))
        api.post_multipart("/v1/async/transcription", [part], {"task-type": "transcription"})
        request = handler.requests[0]
        assert b'name="files"; filename="a.mp3"' in request.content
        assert request.headers["task-type"] == "transcription"

    def test_empty_success_body(self, make_api):
        """A 204 decodes to {}."""
        api = make_api(Recorder(httpx.Response(204)))
        assert api.get("/v1/anything") == {}


class TestRetries:

    def test_transport_failures_retried_then_success(self, make_api, sleeper):
        """Transport failures are retried until a response arrives."""
        handler = Recorder(
            httpx.ConnectError("refused"),
            httpx.ReadTimeout("slow"),
            httpx.Response(200, json={"ok": True}),
        )
        api = make_api(handler)
        assert api.get("/v1/queue") == {"ok": True}
        assert len(handler.requests) == 3
        assert sleeper.calls == [1.0, 2.0]

    def test_exhausted_retries_raise_network_error(self, make_api):
        """Exhausted retries raise NetworkError chained to the original."""
        original = httpx.ConnectError("refused")
        handler = Recorder(original)
        api = make_api(handler, max_retries=3)
        with pytest.raises(NetworkError) as excinfo:
            api.get("/v1/queue")
        assert excinfo.value.__cause__ is original
        assert len(handler.requests) == 3

    def test_http_500_not_retried(self, make_api, sleeper):
        """HTTP 500 raises ServerError without retrying."""
        handler = Recorder(httpx.Response(500, json={"message": "boom"}))
        api = make_api(handler)
        with pytest.raises(ServerError):
            api.get("/v1/queue")
        assert len(handler.requests) == 1
        assert sleeper.calls == []

    def test_retry_resends_whole_file(self, make_api):
        """A retried upload resends the full file content."""
        handler = Recorder(
            httpx.WriteError("reset"),
            httpx.Response(200, json={"results": []}),
        )
        api = make_api(handler)
        part = MultipartFilePart("a.mp3", "audio/mpeg", io.BytesIO(b"COMPLETE-AUDIO"))
        api.post_multipart("/v1/async/transcription", [part])
        assert b"COMPLETE-AUDIO" in handler.requests[-1].content


class TestLocalFailures:

    def test_serialization_error_before_network(self, make_api):
        """An unencodable body fails before anything is sent."""
        handler = Recorder(httpx.Response(200))
        api = make_api(handler)
        with pytest.raises(SerializationError):
            api.post("/v2/list", {"when": object()})
        assert handler.requests == []


class TestRequestErrors:

    def test_bad_content_encoding_raises_decode_error(self, make_api, sleeper):
        """A gzip-labelled body that is not gzip surfaces as ResponseDecodeError."""
        def handler(request):
            return httpx.Response(200, headers={"Content-Encoding": "gzip"}, content=b"not-gzip")

        api = make_api(handler)
        with pytest.raises(ResponseDecodeError) as exc_info:
            api.get("/v1/queue")
        assert isinstance(exc_info.value.__cause__, httpx.DecodingError)
        assert sleeper.calls == []

    def test_non_transport_request_error_wrapped(self, make_api, sleeper):
        """Request errors outside TransportError become NetworkError without retries."""
        handler = Recorder(httpx.TooManyRedirects("Exceeded maximum allowed redirects."))
        api = make_api(handler)
        with pytest.raises(NetworkError) as exc_info:
            api.get("/v1/queue")
        assert isinstance(exc_info.value.__cause__, httpx.TooManyRedirects)
        assert len(handler.requests) == 1
        assert sleeper.calls == []


class TestLifecycle:

    def test_injected_client_not_closed(self, credentials):
        """A caller-provided httpx.Client stays open."""
        http_client = httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
        with ApiClient(credentials, http_client=http_client):
            pass
        assert not http_client.is_closed
        http_client.close()

    def test_rejects_client_and_transport(self, credentials):
        """http_client and transport are mutually exclusive."""
        with pytest.raises(ValueError):
            ApiClient(
                credentials,
                http_client=httpx.Client(),
                transport=httpx.MockTransport(lambda r: httpx.Response(200)),
            )

    def test_authorization_masked_in_log_headers(self):
        """Logged headers hide the Authorization value."""
        masked = summarize_headers({"Authorization": "secret", "user-id": "u"})
        assert masked == {"Authorization": "***", "user-id": "u"}
