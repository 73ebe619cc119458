# artic_table/ui/controllers/status_bar.py
"""Formats and updates the status bar."""

from __future__ import annotations

from typing import Optional

from rich.text import Text
from textual.widgets import Static

from artic_table.services.table_controller import (
    ERROR_PREFIX,
    SELECTION_ACCUMULATING,
    TableState,
)


class StatusBarController:
    """Builds the human-readable status text and writes it to the bar."""

    SELECTION_LABELS = {
        "idle": "",
        SELECTION_ACCUMULATING: "collecting...",
        "complete": "complete",
        "partial": "partial",
    }

    def __init__(self, status_bar: Static) -> None:
        self._bar = status_bar
        self._progress: Optional[str] = None

    # ------------------------------------------------------------------ #
    # public helpers
    # ------------------------------------------------------------------ #

    def update(self, state: TableState) -> None:
        """Refresh the whole status line from a table state snapshot."""
        self._bar.update(Text(self.render_text(state), style=self._style_for(state)))

    def render_text(self, state: TableState) -> str:
        pagination = state.pagination
        parts: list[str] = [
            f"Artworks: {pagination.total}",
            f"Page: {state.page_index + 1}/{max(pagination.total_pages, 1)}",
        ]
        if not state.is_ready:
            parts.append("Loading..." if state.error_message is None else "Page error")

        parts.append(self._selection_text(state))
        if self._progress and state.selection_status == SELECTION_ACCUMULATING:
            parts.append(self._progress)
        return " | ".join(parts)

    def set_progress(self, accumulated: int, requested: int) -> None:
        """Remember accumulation progress for the next `update`."""
        self._progress = f"{min(accumulated, requested)}/{requested} rows"

    def clear_progress(self) -> None:
        self._progress = None

    # ------------------------------------------------------------------ #
    # internals
    # ------------------------------------------------------------------ #

    @staticmethod
    def _style_for(state: TableState) -> str:
        if state.error_message is not None or state.selection_status.startswith(ERROR_PREFIX):
            return "bold red"
        if state.selection_status == "partial":
            return "yellow"
        return ""

    def _selection_text(self, state: TableState) -> str:
        text = f"Selected: {len(state.selection)}"
        status = state.selection_status
        if status.startswith(ERROR_PREFIX):
            return f"{text} (last request failed)"

        label = self.SELECTION_LABELS.get(status, status)
        last = state.last_selection
        if status == "partial" and last is not None:
            label = f"partial, {len(last.rows)} of {last.requested_count} available"
        return f"{text} ({label})" if label else text
