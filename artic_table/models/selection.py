"""Value objects for a cross-page selection request and its result."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Sequence

from .artwork import Artwork


class SelectionOutcome(Enum):
    COMPLETE = "complete"    # reached the requested count
    PARTIAL = "partial"      # dataset exhausted first; still a success


def resolve_requested_count(requested: Any, page_size: int) -> int:
    """
    Turn raw user input into the row count to select.

    Absent, zero, negative and non-numeric input all fall back to
    ``page_size``. Zero means "unset" here, not "select nothing".
    """
    fallback = max(int(page_size), 1)
    if requested is None or isinstance(requested, bool):
        return fallback
    if isinstance(requested, str):
        requested = requested.strip()
        if not requested:
            return fallback
    try:
        count = int(requested)
    except (TypeError, ValueError, OverflowError):
        return fallback
    # Reject 12.5 but accept 12.0
    if isinstance(requested, float) and requested != count:
        return fallback
    return count if count >= 1 else fallback


@dataclass(frozen=True, slots=True)
class SelectionRequest:
    current_rows: Sequence[Artwork]
    current_page_index: int      # 0-based
    total_pages: int
    requested_count: Optional[Any] = None
    page_size: Optional[int] = None

    def resolved_count(self) -> int:
        page_size = self.page_size if self.page_size else len(self.current_rows)
        return resolve_requested_count(self.requested_count, page_size)


@dataclass(frozen=True, slots=True)
class SelectionResult:
    rows: tuple[Artwork, ...]
    requested_count: int
    outcome: SelectionOutcome
    pages_fetched: int = 0
    start_page_index: int = field(default=0)

    def __len__(self) -> int:
        return len(self.rows)

    @property
    def is_partial(self) -> bool:
        return self.outcome is SelectionOutcome.PARTIAL
