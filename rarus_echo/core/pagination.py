"""Immutable pagination value object.

WHY: Listing endpoints take page/per_page either as query parameters or as
headers, and return a pagination block with the total page count. One
validated type covers both directions.

HOW: A frozen dataclass checked in __post_init__. The API's
``{"page", "per_page", "total_pages"}`` block is decoded by from_dict(),
with ``total_pages`` stored as ``total``.

RULES:
- page >= 1 and per_page >= 1, enforced at construction
- total >= 0 (0 means unknown)
- Missing response keys default to page 1, 10 per page, total 0
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from rarus_echo.config import DEFAULT_PAGE, DEFAULT_PER_PAGE


@dataclass(frozen=True)
class Pagination:
    """Page number, page size and total page count."""

    page: int
    per_page: int
    total: int = 0

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError("Page must be greater than or equal to 1")
        if self.per_page < 1:
            raise ValueError("Per page must be greater than or equal to 1")
        if self.total < 0:
            raise ValueError("Total must be greater than or equal to 0")

    @classmethod
    def default(cls) -> Pagination:
        return cls(page=DEFAULT_PAGE, per_page=DEFAULT_PER_PAGE)

    @classmethod
    def first_page(cls, per_page: int = DEFAULT_PER_PAGE) -> Pagination:
        return cls(page=1, per_page=per_page)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Pagination:
        """Decode the ``pagination`` block of a list response."""
        data = data or {}
        return cls(
            page=int(data.get("page", DEFAULT_PAGE)),
            per_page=int(data.get("per_page", DEFAULT_PER_PAGE)),
            total=int(data.get("total_pages", 0)),
        )

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page

    @property
    def limit(self) -> int:
        return self.per_page

    @property
    def has_next(self) -> bool:
        return self.page < self.total

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    def next(self) -> Pagination:
        return Pagination(page=self.page + 1, per_page=self.per_page, total=self.total)

    def previous(self) -> Pagination:
        if self.page == 1:
            raise ValueError("Cannot go to previous page, already on page 1")
        return Pagination(page=self.page - 1, per_page=self.per_page, total=self.total)

    def to_query_params(self) -> Dict[str, int]:
        return {"page": self.page, "per_page": self.per_page}

    def to_headers(self) -> Dict[str, str]:
        return {"page": str(self.page), "per_page": str(self.per_page)}
