# artic_table/services/selection_service.py
"""
Cross-page row selection.

Starting from the rows already loaded for the current page, successive pages
are fetched in order until enough rows are collected or the dataset runs out.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from ..core.event_bus import EventBus
from ..errors import FetchError, SelectionFailure
from ..events import EventType
from ..interfaces.page_fetcher import PageFetcherInterface
from ..models.artwork import Artwork
from ..models.selection import SelectionOutcome, SelectionRequest, SelectionResult

logger = logging.getLogger(__name__)


class SelectionService:
    """Runs selection requests against a page fetcher."""

    def __init__(
        self,
        fetcher: PageFetcherInterface,
        event_bus: Optional[EventBus] = None,
    ) -> None:
        self._fetcher = fetcher
        self._events = event_bus

    def _publish(self, event_type: EventType, **data: Any) -> None:
        if self._events is not None:
            self._events.publish(event_type, **data)

    async def select(self, request: SelectionRequest) -> SelectionResult:
        """
        Collect the first N rows from the current page onward.

        Pages are fetched one at a time in increasing order. A fetch error
        aborts the whole request with SelectionFailure; rows gathered so far
        are dropped.
        """
        count = request.resolved_count()
        accumulated: list[Artwork] = list(request.current_rows)
        next_page = request.current_page_index + 1   # 0-based
        pages_fetched = 0

        logger.info(
            f"Selecting {count} rows from page index {request.current_page_index} "
            f"({len(accumulated)} loaded, {request.total_pages} pages)"
        )
        self._publish(
            EventType.SELECTION_STARTED,
            requested=count,
            page_index=request.current_page_index,
        )

        while len(accumulated) < count and next_page < request.total_pages:
            page_number = next_page + 1
            try:
                page = await self._fetcher.fetch(page_number)
            except FetchError as e:
                logger.error(f"Selection aborted at page {page_number}: {e}")
                self._publish(EventType.SELECTION_FAILED, error=str(e), page=page_number)
                raise SelectionFailure(e) from e

            accumulated.extend(page.items)
            pages_fetched += 1
            next_page += 1
            self._publish(
                EventType.SELECTION_PAGE_FETCHED,
                page=page_number,
                accumulated=len(accumulated),
                requested=count,
            )

        rows = tuple(accumulated[:count])
        if len(rows) == count:
            outcome = SelectionOutcome.COMPLETE
            self._publish(EventType.SELECTION_COMPLETED, selected=len(rows), requested=count)
        else:
            outcome = SelectionOutcome.PARTIAL
            logger.info(f"Dataset exhausted: selected {len(rows)} of {count} requested rows")
            self._publish(EventType.SELECTION_PARTIAL, selected=len(rows), requested=count)

        return SelectionResult(
            rows=rows,
            requested_count=count,
            outcome=outcome,
            pages_fetched=pages_fetched,
            start_page_index=request.current_page_index,
        )


async def select_rows(
    fetcher: PageFetcherInterface,
    current_rows: Sequence[Artwork],
    current_page_index: int,
    total_pages: int,
    requested_count: Any = None,
    *,
    page_size: Optional[int] = None,
    event_bus: Optional[EventBus] = None,
) -> SelectionResult:
    """Functional shortcut for a one-off `SelectionService.select` call."""
    request = SelectionRequest(
        current_rows=tuple(current_rows),
        current_page_index=current_page_index,
        total_pages=total_pages,
        requested_count=requested_count,
        page_size=page_size,
    )
    return await SelectionService(fetcher, event_bus).select(request)
