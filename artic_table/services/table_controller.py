# artic_table/services/table_controller.py
"""
State holder between the terminal UI and the paging services.

All table state lives in one frozen `TableState` snapshot that is replaced,
never mutated, on every change.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field, replace
from typing import Any, Optional

from ..core.event_bus import EventBus
from ..errors import FetchError, PageNotReadyError, SelectionFailure, SelectionInProgressError
from ..events import EventType
from ..interfaces.page_fetcher import PageFetcherInterface
from ..models.artwork import Artwork
from ..models.pagination import Pagination
from ..models.selection import SelectionRequest, SelectionResult
from .selection_service import SelectionService

logger = logging.getLogger(__name__)

# page load status values
STATUS_LOADING = "loading"
STATUS_READY = "ready"
ERROR_PREFIX = "error:"

# selection status values (plus "error:<message>")
SELECTION_IDLE = "idle"
SELECTION_ACCUMULATING = "accumulating"


def error_status(message: str) -> str:
    return f"{ERROR_PREFIX}{message}"


@dataclass(frozen=True, slots=True)
class TableState:
    page_index: int = 0                                   # 0-based
    rows: tuple[Artwork, ...] = ()
    pagination: Pagination = field(default_factory=Pagination.empty)
    status: str = STATUS_LOADING
    selection: tuple[Artwork, ...] = ()
    selection_status: str = SELECTION_IDLE
    last_selection: Optional[SelectionResult] = None

    # ------------- helpers -------------
    @property
    def is_ready(self) -> bool:
        return self.status == STATUS_READY

    @property
    def error_message(self) -> Optional[str]:
        if self.status.startswith(ERROR_PREFIX):
            return self.status[len(ERROR_PREFIX):]
        return None

    @property
    def selected_ids(self) -> frozenset[int]:
        return frozenset(row.id for row in self.selection)


class TableController:
    """
    Drives page navigation and cross-page selection for one table.

    Navigation is last-request-wins: a page fetch that completes after a newer
    navigation started is thrown away. Only one selection may run at a time.
    """

    def __init__(
        self,
        fetcher: PageFetcherInterface,
        selection_service: Optional[SelectionService] = None,
        event_bus: Optional[EventBus] = None,
        *,
        default_page_size: int = 12,
    ) -> None:
        self._fetcher = fetcher
        self._events = event_bus
        self._selections = selection_service or SelectionService(fetcher, event_bus)
        self._state = TableState(pagination=Pagination.empty(default_page_size))
        self._generation = 0
        self._selection_pending = False

    # ------------------------------------------------------------------ #
    # read side
    # ------------------------------------------------------------------ #

    @property
    def state(self) -> TableState:
        return self._state

    @property
    def selection_pending(self) -> bool:
        return self._selection_pending

    # ------------------------------------------------------------------ #
    # navigation
    # ------------------------------------------------------------------ #

    async def on_page_change(self, new_page_index: int) -> TableState:
        """
        Load one page and make it the current page.

        A failed load is not raised: the state status becomes
        ``error:<message>`` so the UI can show it in place of the table.
        """
        if new_page_index < 0:
            raise ValueError(f"Page index must be >= 0, got {new_page_index}")
        total_pages = self._state.pagination.total_pages
        if total_pages and new_page_index >= total_pages:
            raise ValueError(f"Page index {new_page_index} is beyond the last page ({total_pages - 1})")

        self._generation += 1
        generation = self._generation
        self._set_state(page_index=new_page_index, status=STATUS_LOADING)
        self._publish(EventType.PAGE_LOAD_STARTED, page_index=new_page_index)

        try:
            page = await self._fetcher.fetch(new_page_index + 1)
        except FetchError as e:
            if generation != self._generation:
                self._discard(new_page_index)
                return self._state
            logger.error(f"Loading page index {new_page_index} failed: {e}")
            self._set_state(status=error_status(str(e)))
            self._publish(EventType.PAGE_LOAD_ERROR, page_index=new_page_index, error=str(e))
            return self._state

        if generation != self._generation:
            self._discard(new_page_index)
            return self._state

        self._set_state(rows=tuple(page.items), pagination=page.pagination, status=STATUS_READY)
        self._publish(
            EventType.PAGE_LOADED,
            page_index=new_page_index,
            rows=len(page.items),
            total_pages=page.pagination.total_pages,
        )
        return self._state

    async def reload(self) -> TableState:
        return await self.on_page_change(self._state.page_index)

    # ------------------------------------------------------------------ #
    # selection
    # ------------------------------------------------------------------ #

    async def on_request_selection(self, requested_count: Any = None) -> SelectionResult:
        """
        Select the first N rows from the current page onward.

        On success the result replaces the previous selection. On
        SelectionFailure the previous selection is kept and the error is
        re-raised for the caller to report.
        """
        if self._selection_pending:
            raise SelectionInProgressError("A selection is already being collected")
        state = self._state
        if not state.is_ready:
            raise PageNotReadyError(f"Page index {state.page_index} is not loaded ({state.status})")

        request = SelectionRequest(
            current_rows=state.rows,
            current_page_index=state.page_index,
            total_pages=state.pagination.total_pages,
            requested_count=requested_count,
            page_size=state.pagination.limit,
        )

        self._selection_pending = True
        self._set_state(selection_status=SELECTION_ACCUMULATING)
        try:
            result = await self._selections.select(request)
        except SelectionFailure as e:
            self._set_state(selection_status=error_status(str(e.fetch_error)))
            raise
        except asyncio.CancelledError:
            self._set_state(selection_status=SELECTION_IDLE)
            raise
        except Exception as e:
            logger.exception(f"Selection stopped by an unexpected error: {e}")
            self._set_state(selection_status=error_status(str(e)))
            raise
        finally:
            self._selection_pending = False

        self._set_state(
            selection=result.rows,
            selection_status=result.outcome.value,
            last_selection=result,
        )
        self._publish(EventType.SELECTION_CHANGED, selected=len(result.rows), outcome=result.outcome.value)
        return result

    def toggle_row(self, row_id: int) -> tuple[Artwork, ...]:
        """Select or unselect one row of the current page."""
        state = self._state
        if row_id in state.selected_ids:
            selection = tuple(row for row in state.selection if row.id != row_id)
        else:
            row = next((row for row in state.rows if row.id == row_id), None)
            if row is None:
                raise KeyError(f"Row {row_id} is not on the current page")
            selection = state.selection + (row,)

        # a hand-edited selection no longer matches the last bulk request
        self._set_state(selection=selection, selection_status=SELECTION_IDLE, last_selection=None)
        self._publish(EventType.SELECTION_CHANGED, selected=len(selection), outcome="manual")
        return selection

    def clear_selection(self) -> None:
        self._set_state(selection=(), selection_status=SELECTION_IDLE, last_selection=None)
        self._publish(EventType.SELECTION_CHANGED, selected=0, outcome="cleared")

    # ------------------------------------------------------------------ #
    # internals
    # ------------------------------------------------------------------ #

    def _set_state(self, **changes: Any) -> None:
        self._state = replace(self._state, **changes)

    def _discard(self, page_index: int) -> None:
        logger.debug(f"Discarding stale result for page index {page_index}")
        self._publish(EventType.PAGE_LOAD_DISCARDED, page_index=page_index)

    def _publish(self, event_type: EventType, **data: Any) -> None:
        if self._events is not None:
            self._events.publish(event_type, **data)
