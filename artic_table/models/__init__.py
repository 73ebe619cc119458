"""artic_table data models."""

from .artwork import Artwork, DISPLAY_COLUMNS
from .pagination import Page, Pagination
from .selection import (
    SelectionOutcome,
    SelectionRequest,
    SelectionResult,
    resolve_requested_count,
)

__all__ = [
    "Artwork",
    "DISPLAY_COLUMNS",
    "Page",
    "Pagination",
    "SelectionOutcome",
    "SelectionRequest",
    "SelectionResult",
    "resolve_requested_count",
]
