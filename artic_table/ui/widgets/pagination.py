"""
Pagination widget for navigating through artwork pages
"""

from typing import Optional

from textual.app import ComposeResult
from textual.containers import Container
from textual.widgets import Button, Label
from textual.message import Message


class Pagination(Container):
    """
    Pagination widget with first, prev, next, last buttons

    Pages are shown 1-based; `PageChanged` carries the 0-based index the
    table controller works with.
    """

    DEFAULT_CSS = """
    Pagination {
        layout: horizontal;
        height: 3;
        content-align: center middle;
    }

    Pagination > Button {
        min-width: 5;
        margin: 0 1;
    }

    Pagination > #page-indicator {
        min-width: 24;
        height: 3;
        content-align: center middle;
    }
    """

    class PageChanged(Message):
        """Page changed message"""
        def __init__(self, page_index: int) -> None:
            super().__init__()
            self.page_index = page_index

    def __init__(
        self,
        *,
        id: Optional[str] = None,
        classes: Optional[str] = None,
    ) -> None:
        super().__init__(id=id, classes=classes)
        self.current_page = 1
        self.total_pages = 0

    def compose(self) -> ComposeResult:
        """Create child widgets"""
        yield Button("« First", id="first-page", classes="page-button")
        yield Button("< Prev", id="prev-page", classes="page-button")
        yield Label("Page [b]1[/b] of [b]1[/b]", id="page-indicator", classes="page-indicator")
        yield Button("Next >", id="next-page", classes="page-button")
        yield Button("Last »", id="last-page", classes="page-button")

    def on_mount(self) -> None:
        self.update_pages(self.current_page, self.total_pages)

    def update_pages(self, current: int, total: int) -> None:
        """
        Update pagination with new page information

        Args:
            current: Current page number (1-based)
            total: Total pages (0 while nothing is loaded)
        """
        self.current_page = current
        self.total_pages = total
        if not self.is_mounted:
            return

        page_indicator = self.query_one("#page-indicator", Label)
        page_indicator.update(f"Page [b]{current}[/b] of [b]{max(total, 1)}[/b]")

        first_btn = self.query_one("#first-page", Button)
        prev_btn = self.query_one("#prev-page", Button)
        next_btn = self.query_one("#next-page", Button)
        last_btn = self.query_one("#last-page", Button)

        first_btn.disabled = prev_btn.disabled = (current <= 1)
        next_btn.disabled = last_btn.disabled = (current >= total)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle pagination button presses"""
        button_id = event.button.id
        new_page = self.current_page

        if button_id == "first-page":
            new_page = 1
        elif button_id == "last-page":
            new_page = self.total_pages
        elif button_id == "prev-page" and self.current_page > 1:
            new_page = self.current_page - 1
        elif button_id == "next-page" and self.current_page < self.total_pages:
            new_page = self.current_page + 1

        event.stop()
        if new_page != self.current_page and new_page >= 1:
            self.update_pages(new_page, self.total_pages)
            self.post_message(self.PageChanged(new_page - 1))
