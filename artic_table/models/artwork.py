"""Domain model for one artwork row of the table."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..errors import ParseError

# Wire field -> table column header, in display order
DISPLAY_COLUMNS = {
    "title": "Title",
    "place_of_origin": "Place of Origin",
    "artist_display": "Artist Display",
    "inscriptions": "Inscriptions",
    "date_start": "Date Start",
    "date_end": "Date End",
}


def _optional_int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return None


def _row_id(value: Any) -> int:
    """Row ids must be exact integers: 1.7, inf and true are rejected."""
    if isinstance(value, bool):
        raise ParseError(f"Row id {value!r} is not an integer")
    if isinstance(value, float) and not value.is_integer():
        raise ParseError(f"Row id {value!r} is not an integer")
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError) as e:
        raise ParseError(f"Row id {value!r} is not an integer") from e


@dataclass(frozen=True, slots=True)
class Artwork:
    id: int
    title: Optional[str] = None
    place_of_origin: Optional[str] = None
    artist_display: Optional[str] = None
    inscriptions: Optional[str] = None
    date_start: Optional[int] = None
    date_end: Optional[int] = None

    # ---------- mappings ----------
    @classmethod
    def from_api(cls, row: Dict[str, Any]) -> "Artwork":
        """Build an `Artwork` from one element of the API's ``data`` array."""
        if not isinstance(row, dict):
            raise ParseError(f"Expected an object for a row, got {type(row).__name__}")
        if row.get("id") is None:
            raise ParseError("Row is missing its 'id' field")
        row_id = _row_id(row["id"])

        return cls(
            id=row_id,
            title=row.get("title"),
            place_of_origin=row.get("place_of_origin"),
            artist_display=row.get("artist_display"),
            inscriptions=row.get("inscriptions"),
            date_start=_optional_int(row.get("date_start")),
            date_end=_optional_int(row.get("date_end")),
        )

    def display_values(self) -> tuple[str, ...]:
        """Cell texts in `DISPLAY_COLUMNS` order; missing values render empty."""
        values = []
        for field_name in DISPLAY_COLUMNS:
            value = getattr(self, field_name)
            values.append("" if value is None else str(value))
        return tuple(values)
