"""Outgoing request construction.

WHY: Every call to the Echo API needs the same auth headers, the same URI
joining rules, and one of three body encodings (none, JSON, multipart).
Building requests in one place keeps the endpoint services free of HTTP
details and makes the wire format testable without a network.

HOW: A RequestSpec describes one call in plain Python types. The
RequestBuilder turns it into an httpx.Request: it joins the URI, merges
headers, encodes query parameters, and either serializes the JSON body
itself or hands the file streams to httpx's multipart encoder.

RULES:
- URI is always "{base_url}/{endpoint without leading slash}"
- Authorization, user-id and Accept are always sent; caller headers win
- JSON bodies set Content-Type: application/json; encoding failures raise
  SerializationError, never a network error
- Every multipart part is named "files" (repeated field, no [0]/[1] index)
- File streams are rewound before each build so a retry resends the
  whole file
- Query booleans are sent as "1"/"0"
- The builder never opens or closes file streams
"""

from __future__ import annotations

import io
import json
from dataclasses import dataclass, field
from typing import Any, BinaryIO, Dict, List, Mapping, Optional, Union

import httpx

from rarus_echo.core.credentials import Credentials
from rarus_echo.core.errors import FileError, SerializationError

QueryValue = Union[str, int, float, bool]

MULTIPART_FIELD_NAME = "files"


@dataclass
class MultipartFilePart:
    """One file of a multipart upload.

    The stream is owned by the caller: it must be opened in binary mode and
    stay open until the request has been sent.
    """

    filename: str
    content_type: str
    stream: BinaryIO
    field_name: str = MULTIPART_FIELD_NAME


@dataclass
class RequestSpec:
    """A single API call before it is turned into an httpx.Request."""

    method: str
    path: str
    query: Dict[str, QueryValue] = field(default_factory=dict)
    headers: Dict[str, str] = field(default_factory=dict)
    body: Any = None
    files: Optional[List[MultipartFilePart]] = None

    def __post_init__(self) -> None:
        self.method = self.method.upper()
        if self.method not in ("GET", "POST"):
            raise ValueError("Unsupported HTTP method: {}".format(self.method))
        if self.body is not None and self.files is not None:
            raise ValueError("A request cannot carry both a JSON body and files")


class RequestBuilder:
    """Build transport-ready httpx requests for one set of credentials."""

    def __init__(self, credentials: Credentials) -> None:
        self._credentials = credentials

    @property
    def credentials(self) -> Credentials:
        return self._credentials

    @staticmethod
    def build_uri(base_url: str, endpoint: str) -> str:
        return "{}/{}".format(base_url.rstrip("/"), endpoint.lstrip("/"))

    def build_headers(self, extra: Optional[Mapping[str, str]] = None) -> httpx.Headers:
        headers = httpx.Headers({
            "Authorization": self._credentials.api_key,
            "user-id": self._credentials.user_id,
            "Accept": "application/json",
        })
        for name, value in (extra or {}).items():
            headers[name] = value
        return headers

    def build(self, spec: RequestSpec) -> httpx.Request:
        """Turn a RequestSpec into an httpx.Request.

        Raises:
            SerializationError: If the JSON body cannot be encoded.
            FileError: If a file stream cannot be rewound.
        """
        url = httpx.URL(self.build_uri(self._credentials.base_url, spec.path))
        if spec.query:
            # Merged into any query string already present on the path.
            url = url.copy_merge_params(encode_query(spec.query))
        headers = self.build_headers(spec.headers)

        if spec.files is not None:
            return httpx.Request(
                spec.method,
                url,
                headers=headers,
                files=self._multipart_fields(spec.files),
            )

        content = None
        if spec.body is not None:
            content = encode_json(spec.body)
            headers["Content-Type"] = "application/json"

        return httpx.Request(
            spec.method,
            url,
            headers=headers,
            content=content,
        )

    @staticmethod
    def _multipart_fields(parts: List[MultipartFilePart]) -> List[tuple]:
        fields = []
        for part in parts:
            try:
                part.stream.seek(0)
            except (OSError, ValueError, io.UnsupportedOperation) as exc:
                raise FileError(
                    "Cannot rewind upload stream for {}: {}".format(part.filename, exc)
                ) from exc
            fields.append(
                (part.field_name, (part.filename, part.stream, part.content_type))
            )
        return fields


def encode_json(body: Any) -> bytes:
    """Serialize a request body to UTF-8 JSON bytes."""
    try:
        return json.dumps(body, ensure_ascii=False).encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise SerializationError("Failed to encode request body as JSON: {}".format(exc)) from exc


def encode_query(query: Mapping[str, QueryValue]) -> Dict[str, str]:
    """Stringify query values; booleans become "1"/"0", None values are dropped."""
    encoded: Dict[str, str] = {}
    for key, value in query.items():
        if value is None:
            continue
        if isinstance(value, bool):
            encoded[key] = "1" if value else "0"
        else:
            encoded[key] = str(value)
    return encoded
