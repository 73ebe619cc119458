# artic_table/ui/screens/artworks_screen.py
"""
Main screen: one page of artworks, pagination and cross-page selection.
"""

from __future__ import annotations

from typing import Any

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container, Vertical
from textual.screen import Screen
from textual.widgets import Footer, Header, Static

from artic_table.core.event_bus import EventBus
from artic_table.errors import PageNotReadyError, SelectionFailure, SelectionInProgressError
from artic_table.events import EventType
from artic_table.services.table_controller import TableController, TableState
from artic_table.ui.controllers.status_bar import StatusBarController
from artic_table.ui.widgets.artwork_table import ArtworkTable
from artic_table.ui.widgets.loading_indicator import TableStatus
from artic_table.ui.widgets.pagination import Pagination
from artic_table.ui.widgets.selection_overlay import SelectionOverlay
from simple_logger import Slogger


class ArtworksScreen(Screen):
    """Artworks table with a selection overlay."""

    BINDINGS = [
        Binding("s", "open_selection", "Select Rows", show=True),
        Binding("space", "toggle_row", "Toggle Row", show=True),
        Binding("c", "clear_selection", "Clear Selection", show=True),
        Binding("r", "reload", "Reload", show=True),
        Binding("escape", "close_selection", "Close", show=False),
    ]

    # ------------------------------------------------------------------ #

    def __init__(
        self,
        controller: TableController,
        event_bus: EventBus,
        *,
        start_page: int = 0,
        default_selection: int = 12,
        id: str = "artworks_screen",
    ) -> None:
        super().__init__(id=id)
        self.controller = controller
        self.event_bus = event_bus
        self.start_page = start_page
        self.default_selection = default_selection

    # ------------------------------------------------------------------ #
    # Compose & mount
    # ------------------------------------------------------------------ #

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)

        with Container(id="main-container"):
            with Vertical(id="content-area"):
                yield SelectionOverlay(self.default_selection, id="selection-overlay")
                yield TableStatus(id="table-status")
                yield ArtworkTable(id="artworks-table")
                yield Pagination(id="pagination")

        yield Static(id="status-bar", markup=False)
        yield Footer()

    def on_mount(self) -> None:
        self.query_one(ArtworkTable).styles.height = "1fr"
        self.status_controller = StatusBarController(self.query_one("#status-bar", Static))

        self.event_bus.subscribe(EventType.SELECTION_PAGE_FETCHED, self._on_selection_progress)
        self.event_bus.subscribe(EventType.PAGE_LOAD_ERROR, self._on_page_error)

        self.load_page(self.start_page)

    def on_unmount(self) -> None:
        self.event_bus.unsubscribe(EventType.SELECTION_PAGE_FETCHED, self._on_selection_progress)
        self.event_bus.unsubscribe(EventType.PAGE_LOAD_ERROR, self._on_page_error)

    # ------------------------------------------------------------------ #
    # page navigation
    # ------------------------------------------------------------------ #

    def load_page(self, page_index: int) -> None:
        """Start loading a page; a newer call cancels an older one."""
        Slogger.info(f"Loading page index {page_index}")
        self._show_loading(page_index)
        self.run_worker(self._load_page(page_index), group="page_load", exclusive=True)

    async def _load_page(self, page_index: int) -> None:
        await self.controller.on_page_change(page_index)
        self.render_state(self.controller.state)

    def on_pagination_page_changed(self, event: Pagination.PageChanged) -> None:
        self.load_page(event.page_index)

    def action_reload(self) -> None:
        page_index = self.controller.state.page_index
        Slogger.info(f"Reloading page index {page_index}")
        self._show_loading(page_index)
        self.run_worker(self._reload(), group="page_load", exclusive=True)

    async def _reload(self) -> None:
        await self.controller.reload()
        self.render_state(self.controller.state)

    def _show_loading(self, page_index: int) -> None:
        self.query_one(TableStatus).start(f"Loading page {page_index + 1}...")
        self.query_one(ArtworkTable).display = False

    # ------------------------------------------------------------------ #
    # rendering
    # ------------------------------------------------------------------ #

    def render_state(self, state: TableState) -> None:
        table = self.query_one(ArtworkTable)
        status = self.query_one(TableStatus)

        if state.is_ready:
            status.stop()
            table.show_rows(state.rows, state.selected_ids)
            table.display = True
            if not self.query_one(SelectionOverlay).is_open:
                table.focus()
            self.query_one(Pagination).update_pages(
                state.page_index + 1, state.pagination.total_pages
            )
        elif state.error_message is not None:
            table.display = False
            status.fail(state.error_message)
        else:
            table.display = False
            status.start(f"Loading page {state.page_index + 1}...")

        self.status_controller.update(state)

    # ------------------------------------------------------------------ #
    # selection
    # ------------------------------------------------------------------ #

    def action_open_selection(self) -> None:
        self.query_one(SelectionOverlay).open()

    def action_close_selection(self) -> None:
        if self.query_one(SelectionOverlay).is_open:
            self._close_overlay()

    def _close_overlay(self) -> None:
        self.query_one(SelectionOverlay).close()
        self.query_one(ArtworkTable).focus()

    def on_selection_overlay_submitted(self, event: SelectionOverlay.Submitted) -> None:
        if self.controller.selection_pending:
            self.notify("A selection is already in progress.", title="Busy", severity="warning")
            return
        self.query_one(SelectionOverlay).set_busy(True)
        self.run_worker(self._select(event.count), group="selection")

    async def _select(self, count: Any) -> None:
        overlay = self.query_one(SelectionOverlay)
        try:
            result = await self.controller.on_request_selection(count)
        except SelectionFailure as e:
            Slogger.exception(e, "Selection request failed", {"requested": count})
            self._close_overlay()
            self.notify(
                f"Could not collect the rows: {e.fetch_error}. The previous selection was kept.",
                title="Selection Failed",
                severity="error",
            )
        except (SelectionInProgressError, PageNotReadyError) as e:
            Slogger.warning(f"Selection rejected: {e}")
            self.notify(str(e), title="Selection", severity="warning")
        else:
            self._close_overlay()
            Slogger.info(
                f"Selected {len(result.rows)} rows",
                {"requested": result.requested_count, "pages_fetched": result.pages_fetched},
            )
            if result.is_partial:
                self.notify(
                    f"Only {len(result.rows)} of {result.requested_count} rows exist from this page on.",
                    title="Partial Selection",
                    severity="warning",
                )
            else:
                self.notify(f"Selected {len(result.rows)} rows.", title="Selection")
        finally:
            overlay.set_busy(False)
            self.status_controller.clear_progress()
            self._refresh_selection()

    def action_toggle_row(self) -> None:
        row_id = self.query_one(ArtworkTable).cursor_row_id()
        if row_id is not None:
            self._toggle(row_id)

    def on_artwork_table_row_toggled(self, event: ArtworkTable.RowToggled) -> None:
        self._toggle(event.row_id)

    def _toggle(self, row_id: int) -> None:
        try:
            self.controller.toggle_row(row_id)
        except KeyError as e:
            Slogger.warning(f"Toggle ignored: {e}")
            return
        self._refresh_selection()

    def action_clear_selection(self) -> None:
        self.controller.clear_selection()
        self._refresh_selection()

    def _refresh_selection(self) -> None:
        state = self.controller.state
        if state.is_ready:
            self.query_one(ArtworkTable).refresh_marks(state.selected_ids)
        self.status_controller.update(state)

    # ------------------------------------------------------------------ #
    # event bus handlers
    # ------------------------------------------------------------------ #

    def _on_selection_progress(self, event_type: EventType, **data: Any) -> None:
        accumulated = data.get("accumulated", 0)
        requested = data.get("requested", 0)
        self.query_one(SelectionOverlay).show_progress(
            f"Fetched page {data.get('page')}: {min(accumulated, requested)}/{requested} rows"
        )
        self.status_controller.set_progress(accumulated, requested)
        self.status_controller.update(self.controller.state)

    def _on_page_error(self, event_type: EventType, **data: Any) -> None:
        Slogger.error(f"Page index {data.get('page_index')} failed to load: {data.get('error')}")
