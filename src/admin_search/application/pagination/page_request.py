"""Application pagination – PageRequest."""
from __future__ import annotations

import dataclasses
from typing import Any

DEFAULT_PAGE = 1
DEFAULT_PER_PAGE = 10
MAX_PER_PAGE = 100


def _to_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        if isinstance(value, float):
            return int(value)
        return int(str(value).strip())
    except (ValueError, OverflowError):
        return None


@dataclasses.dataclass(frozen=True)
class PageRequest:
    """Offset-based pagination parameters."""
    page: int = DEFAULT_PAGE
    per_page: int = DEFAULT_PER_PAGE

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError("page must be >= 1")
        if self.per_page < 1:
            raise ValueError("per_page must be >= 1")

    @classmethod
    def coerce(
        cls,
        page: Any = None,
        per_page: Any = None,
        *,
        default_per_page: int = DEFAULT_PER_PAGE,
        max_per_page: int = MAX_PER_PAGE,
    ) -> "PageRequest":
        """Build a request from untrusted input without raising.

        ``page`` falls back to 1 when missing, unparseable or below 1.
        ``per_page`` falls back to *default_per_page* when missing,
        unparseable or below 1, and is capped at *max_per_page*.
        """
        page_no = _to_int(page)
        if page_no is None or page_no < 1:
            page_no = DEFAULT_PAGE

        size = _to_int(per_page)
        if size is None or size < 1:
            size = default_per_page
        size = min(size, max_per_page)
        return cls(page=page_no, per_page=size)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page


__all__ = ["DEFAULT_PAGE", "DEFAULT_PER_PAGE", "MAX_PER_PAGE", "PageRequest"]
