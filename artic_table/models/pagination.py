"""Pagination metadata and the page-of-rows container."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Generic, Sequence, TypeVar

from ..errors import ParseError

T = TypeVar("T")


def _wire_int(meta: Dict[str, Any], key: str) -> int:
    value = meta[key]
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ParseError(f"'{key}' is not an integer: {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError) as e:
        raise ParseError(f"'{key}' is not an integer: {value!r}") from e


@dataclass(frozen=True, slots=True)
class Pagination:
    """Shape of the whole remote dataset as reported with each page."""

    total: int           # total rows across all pages
    limit: int           # page size
    total_pages: int

    @classmethod
    def from_api(cls, meta: Dict[str, Any]) -> "Pagination":
        """Parse the wire ``pagination`` object (extra keys are ignored)."""
        if not isinstance(meta, dict):
            raise ParseError("'pagination' is not an object")
        try:
            total = _wire_int(meta, "total")
            limit = _wire_int(meta, "limit")
        except KeyError as e:
            raise ParseError(f"'pagination' is missing {e.args[0]!r}") from e
        if total < 0 or limit <= 0:
            raise ParseError(f"Invalid pagination values: total={total}, limit={limit}")

        if meta.get("total_pages") is None:
            total_pages = math.ceil(total / limit)
        else:
            total_pages = _wire_int(meta, "total_pages")
        return cls(total=total, limit=limit, total_pages=max(total_pages, 0))

    @classmethod
    def empty(cls, limit: int = 12) -> "Pagination":
        return cls(total=0, limit=limit, total_pages=0)


@dataclass(frozen=True, slots=True)
class Page(Generic[T]):
    """A single fetched page of rows plus metadata."""

    items: Sequence[T]
    pagination: Pagination
    number: int          # page index (1-based) this page was fetched for
