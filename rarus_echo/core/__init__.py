"""Core HTTP pipeline: credentials, request building, retries, responses.

WHY: Every Echo endpoint shares the same transport concerns. Keeping them
in one package lets the endpoint services stay thin data-shaping code.

HOW: ApiClient (pipeline.py) composes RequestBuilder, RetryPolicy and
ResponseInterpreter around an httpx.Client.

RULES:
- No endpoint paths live in this package
- All HTTP traffic goes through ApiClient
"""

from rarus_echo.core.credentials import Credentials
from rarus_echo.core.pagination import Pagination
from rarus_echo.core.pipeline import ApiClient
from rarus_echo.core.request import MultipartFilePart, RequestBuilder, RequestSpec
from rarus_echo.core.response import ResponseInterpreter
from rarus_echo.core.retry import RetryPolicy

__all__ = [
    "ApiClient",
    "Credentials",
    "MultipartFilePart",
    "Pagination",
    "RequestBuilder",
    "RequestSpec",
    "ResponseInterpreter",
    "RetryPolicy",
]
