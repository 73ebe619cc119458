"""
Inline loading / error display shown in place of the table.
"""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container
from textual.reactive import reactive
from textual.widgets import Static, LoadingIndicator


class TableStatus(Container):
    """Spinner while a page loads, error text when it failed."""

    DEFAULT_CSS = """
    TableStatus {
        height: auto;
        padding: 1 2;
    }

    TableStatus.error #table-status-message {
        color: $error;
    }

    TableStatus > LoadingIndicator {
        height: 1;
    }
    """

    is_loading = reactive(False)
    message = reactive("Loading...")

    def __init__(
        self,
        message: str = "Loading...",
        *,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ):
        super().__init__(name=name, id=id, classes=classes)
        self.message = message

    def compose(self) -> ComposeResult:
        yield LoadingIndicator()
        yield Static(self.message, id="table-status-message", markup=False)

    def watch_is_loading(self, is_loading: bool) -> None:
        if self.is_mounted:
            self.query_one(LoadingIndicator).display = is_loading

    def watch_message(self, message: str) -> None:
        if self.is_mounted:
            self.query_one("#table-status-message", Static).update(message)

    def start(self, message: str | None = None) -> None:
        """Show the spinner with an optional new message."""
        self.remove_class("error")
        if message:
            self.message = message
        self.is_loading = True
        self.display = True

    def fail(self, message: str) -> None:
        """Show an error message instead of the spinner."""
        self.add_class("error")
        self.message = f"Error: {message}"
        self.is_loading = False
        self.display = True

    def stop(self) -> None:
        """Hide the whole widget."""
        self.is_loading = False
        self.display = False
