import copy
import unittest
from unittest.mock import patch

from textual.widgets import Input

from simple_logger import Slogger

from ..config import DEFAULT_CONFIG
from ..di import build_container
from ..ui.app import ArticTableApp
from ..ui.widgets.artwork_table import ArtworkTable, SELECTED_MARK, MARK_COLUMN
from ..ui.widgets.loading_indicator import TableStatus
from ..ui.widgets.selection_overlay import SelectionOverlay
from .fakes import FakeFetcher


class TestArtworksScreen(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        patcher = patch.object(Slogger, "_write")
        patcher.start()
        self.addCleanup(patcher.stop)

        self.config = copy.deepcopy(DEFAULT_CONFIG)
        self.fetcher = FakeFetcher(total_rows=56, page_size=12)
        self.app = ArticTableApp(self.config, container=build_container(self.config, fetcher=self.fetcher))

    async def _settle(self, pilot):
        await pilot.pause()
        await self.app.workers.wait_for_complete()
        await pilot.pause()

    async def test_first_page_is_shown(self):
        async with self.app.run_test() as pilot:
            await self._settle(pilot)

            table = self.app.screen.query_one(ArtworkTable)
            self.assertEqual(table.row_count, 12)
            self.assertTrue(table.display)
            self.assertFalse(self.app.screen.query_one(TableStatus).display)
            self.assertEqual(self.fetcher.calls, [1])

    async def test_table_has_focus_once_loaded(self):
        async with self.app.run_test() as pilot:
            await self._settle(pilot)

            self.assertIsInstance(self.app.focused, ArtworkTable)
            self.assertFalse(self.app.screen.query_one(SelectionOverlay).is_open)

    async def test_keyboard_selection_flow(self):
        """s opens the overlay, the typed count is submitted with enter"""
        async with self.app.run_test() as pilot:
            await self._settle(pilot)
            screen = self.app.screen

            await pilot.press("s")
            self.assertTrue(screen.query_one(SelectionOverlay).is_open)
            self.assertIsInstance(self.app.focused, Input)

            await pilot.press("1", "5", "enter")
            await self._settle(pilot)

            self.assertEqual(len(screen.controller.state.selection), 15)
            self.assertFalse(screen.query_one(SelectionOverlay).is_open)
            self.assertIsInstance(self.app.focused, ArtworkTable)

    async def test_space_and_c_edit_selection(self):
        async with self.app.run_test() as pilot:
            await self._settle(pilot)
            screen = self.app.screen

            await pilot.press("space")
            self.assertEqual(screen.controller.state.selected_ids, frozenset({1}))

            await pilot.press("c")
            self.assertEqual(screen.controller.state.selection, ())

    async def test_reload_key_refetches_page(self):
        async with self.app.run_test() as pilot:
            await self._settle(pilot)

            await pilot.press("r")
            await self._settle(pilot)

            self.assertEqual(self.fetcher.calls, [1, 1])
            self.assertTrue(self.app.screen.controller.state.is_ready)

    async def test_exit_closes_fetcher(self):
        async with self.app.run_test() as pilot:
            await self._settle(pilot)
            self.assertFalse(self.fetcher.closed)

        self.assertTrue(self.fetcher.closed)

    async def test_overlay_selects_across_pages(self):
        async with self.app.run_test() as pilot:
            await self._settle(pilot)
            screen = self.app.screen
            overlay = screen.query_one(SelectionOverlay)

            await pilot.press("s")
            self.assertTrue(overlay.is_open)

            overlay.submit("20")
            await self._settle(pilot)

            state = screen.controller.state
            self.assertEqual(len(state.selection), 20)
            self.assertEqual(self.fetcher.calls, [1, 2])
            self.assertFalse(overlay.is_open)
            table = screen.query_one(ArtworkTable)
            self.assertEqual(table.get_cell("1", MARK_COLUMN), SELECTED_MARK)

    async def test_failed_selection_keeps_previous(self):
        async with self.app.run_test() as pilot:
            await self._settle(pilot)
            screen = self.app.screen
            overlay = screen.query_one(SelectionOverlay)

            overlay.submit("3")
            await self._settle(pilot)
            self.fetcher.fail_pages = {2}
            overlay.open()
            overlay.submit("30")
            await self._settle(pilot)

            state = screen.controller.state
            self.assertEqual([row.id for row in state.selection], [1, 2, 3])
            self.assertTrue(state.selection_status.startswith("error:"))
            self.assertFalse(overlay.is_open)

    async def test_page_error_is_shown_inline(self):
        self.fetcher.fail_pages = {1}

        async with self.app.run_test() as pilot:
            await self._settle(pilot)

            status = self.app.screen.query_one(TableStatus)
            self.assertTrue(status.display)
            self.assertTrue(status.has_class("error"))
            self.assertFalse(self.app.screen.query_one(ArtworkTable).display)


if __name__ == "__main__":
    unittest.main()
