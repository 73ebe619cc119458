"""
Overlay asking how many rows to select, starting at the current page.
"""

from __future__ import annotations

from typing import Any, Optional

from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.message import Message
from textual.widgets import Button, Input, Label

from artic_table.interfaces.selection_trigger import SelectionTriggerInterface


class SelectionOverlay(Container, SelectionTriggerInterface):
    """Hidden panel with a count input and a Submit button."""

    DEFAULT_CSS = """
    SelectionOverlay {
        display: none;
        height: auto;
        width: 48;
        border: round $accent;
        padding: 0 1;
    }

    SelectionOverlay > #selection-title {
        text-style: bold;
    }

    SelectionOverlay Horizontal {
        height: auto;
    }

    SelectionOverlay Input {
        width: 1fr;
    }
    """

    class Submitted(Message):
        """The user submitted a requested row count (raw input)"""
        def __init__(self, count: Any) -> None:
            super().__init__()
            self.count = count

    def __init__(
        self,
        default_count: int = 12,
        *,
        id: Optional[str] = None,
        classes: Optional[str] = None,
    ) -> None:
        super().__init__(id=id, classes=classes)
        self.default_count = default_count
        self._busy = False

    def compose(self) -> ComposeResult:
        yield Label("Select Rows", id="selection-title")
        with Horizontal():
            yield Input(
                placeholder=str(self.default_count),
                type="integer",
                id="selection-count",
            )
            yield Button("Submit", variant="primary", id="selection-submit")
        yield Label("", id="selection-progress")

    # ---------- SelectionTriggerInterface ----------
    @property
    def is_open(self) -> bool:
        return bool(self.display)

    def open(self) -> None:
        self.display = True
        self.query_one("#selection-count", Input).focus()

    def close(self) -> None:
        self.display = False

    def submit(self, count: Any) -> None:
        if self._busy:
            return
        self.post_message(self.Submitted(count))

    def set_busy(self, busy: bool) -> None:
        self._busy = busy
        self.query_one("#selection-submit", Button).disabled = busy
        if not busy:
            self.show_progress("")

    # ---------- helpers ----------
    def show_progress(self, text: str) -> None:
        self.query_one("#selection-progress", Label).update(text)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "selection-submit":
            event.stop()
            self.submit(self.query_one("#selection-count", Input).value)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.submit(event.value)
