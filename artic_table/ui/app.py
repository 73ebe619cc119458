"""
Main Textual application class for the artworks table
"""

from __future__ import annotations

from typing import Dict, Any, Optional

from textual.app import App
from textual.binding import Binding

from artic_table.di import build_container, Container
from artic_table.ui.screens.artworks_screen import ArtworksScreen
from simple_logger import Slogger


class ArticTableApp(App):
    """Browse Art Institute of Chicago artworks page by page."""

    TITLE = "Artworks"
    SUB_TITLE = "Art Institute of Chicago"

    CSS = """
    #main-container {
        height: 1fr;
    }

    #content-area {
        height: 1fr;
    }

    #status-bar {
        height: 1;
        background: $panel;
        padding: 0 1;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit", show=True),
    ]

    def __init__(self, config: Dict[str, Any], container: Optional[Container] = None) -> None:
        super().__init__()
        self.config = config
        self.container: Container = container or build_container(config)

    def on_mount(self) -> None:
        ui = self.config.get("ui", {})
        Slogger.info("Mounting artworks screen", {"start_page": ui.get("start_page", 0)})
        self.push_screen(
            ArtworksScreen(
                controller=self.container.table_controller,
                event_bus=self.container.event_bus,
                start_page=ui.get("start_page", 0),
                default_selection=ui.get("default_selection", 12),
            )
        )

    async def on_unmount(self) -> None:
        """Close the HTTP session however the app exits."""
        Slogger.info("Shutting down, closing HTTP session")
        await self.container.aclose()
