# artic_table/di.py
"""
Very small dependency-injection helper.
"""

from __future__ import annotations

from typing import Dict, Any

from artic_table.core.event_bus import EventBus
from artic_table.interfaces.page_fetcher import FetchOptions, PageFetcherInterface
from artic_table.services.page_fetcher import ArticPageFetcher
from artic_table.services.selection_service import SelectionService
from artic_table.services.table_controller import TableController


class Container:
    """Holds lazily-created singletons."""

    def __init__(self, config: Dict[str, Any], *, fetcher: PageFetcherInterface | None = None) -> None:
        self._cfg = config
        self._event_bus: EventBus | None = None
        self._fetcher: PageFetcherInterface | None = fetcher
        self._selection_service: SelectionService | None = None
        self._table_controller: TableController | None = None

    # ---------- infra ----------
    @property
    def event_bus(self) -> EventBus:
        if self._event_bus is None:
            debug = self._cfg.get("logging", {}).get("level", "INFO").upper() == "DEBUG"
            self._event_bus = EventBus(debug_logging=debug)
        return self._event_bus

    @property
    def fetch_options(self) -> FetchOptions:
        api = self._cfg.get("api", {})
        defaults = FetchOptions()
        return FetchOptions(
            url=api.get("url") or defaults.url,
            timeout=float(api.get("timeout") or defaults.timeout),
            impersonate=api.get("impersonate", defaults.impersonate),
            limit=api.get("limit"),
            fields=api.get("fields"),
        )

    @property
    def fetcher(self) -> PageFetcherInterface:
        if self._fetcher is None:
            self._fetcher = ArticPageFetcher(self.fetch_options)
        return self._fetcher

    # ---------- services ----------
    @property
    def selection_service(self) -> SelectionService:
        if self._selection_service is None:
            self._selection_service = SelectionService(self.fetcher, self.event_bus)
        return self._selection_service

    @property
    def table_controller(self) -> TableController:
        if self._table_controller is None:
            self._table_controller = TableController(
                self.fetcher,
                self.selection_service,
                self.event_bus,
                default_page_size=self._cfg.get("ui", {}).get("default_selection", 12),
            )
        return self._table_controller

    async def aclose(self) -> None:
        """Close network resources and drop subscriptions."""
        if self._fetcher is not None:
            await self._fetcher.close()
        if self._event_bus is not None:
            self._event_bus.clear_all_subscriptions()


# convenience factory
def build_container(config: Dict[str, Any], **overrides: Any) -> Container:
    """Create a container for the given config."""
    return Container(config, **overrides)
