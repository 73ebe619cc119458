import asyncio
import unittest
from unittest.mock import AsyncMock, Mock

from ..core.event_bus import EventBus
from ..errors import PageNotReadyError, SelectionFailure, SelectionInProgressError
from ..events import EventType
from ..services.table_controller import TableController, TableState
from .fakes import FakeFetcher, GatedFetcher


class TestTableControllerNavigation(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.fetcher = FakeFetcher(total_rows=56, page_size=12)
        self.event_bus = Mock(spec=EventBus)
        self.controller = TableController(self.fetcher, event_bus=self.event_bus)

    def test_initial_state(self):
        state = self.controller.state
        self.assertEqual(state.status, "loading")
        self.assertEqual(state.selection, ())
        self.assertEqual(state.selection_status, "idle")
        self.assertEqual(state.pagination.limit, 12)

    async def test_page_change_loads_page(self):
        """Index 1 is requested from the API as page 2"""
        state = await self.controller.on_page_change(1)

        self.assertEqual(self.fetcher.calls, [2])
        self.assertTrue(state.is_ready)
        self.assertEqual(state.page_index, 1)
        self.assertEqual([row.id for row in state.rows], list(range(13, 25)))
        self.assertEqual(state.pagination.total_pages, 5)
        self.event_bus.publish.assert_any_call(
            EventType.PAGE_LOADED, page_index=1, rows=12, total_pages=5
        )

    async def test_page_load_error_becomes_status(self):
        self.fetcher.fail_pages = {1}

        state = await self.controller.on_page_change(0)

        self.assertFalse(state.is_ready)
        self.assertTrue(state.status.startswith("error:"))
        self.assertIn("connection reset", state.error_message)

    async def test_rejects_out_of_range_index(self):
        await self.controller.on_page_change(0)
        with self.assertRaises(ValueError):
            await self.controller.on_page_change(5)
        with self.assertRaises(ValueError):
            await self.controller.on_page_change(-1)

    async def test_last_navigation_wins(self):
        """A slow response for an older page never replaces a newer page"""
        gated = GatedFetcher(self.fetcher)
        controller = TableController(gated, event_bus=self.event_bus)

        older = asyncio.create_task(controller.on_page_change(1))
        await asyncio.sleep(0)
        newer = asyncio.create_task(controller.on_page_change(2))
        await asyncio.sleep(0)

        gated.release(3)
        await newer
        gated.release(2)
        await older

        state = controller.state
        self.assertEqual(state.page_index, 2)
        self.assertEqual(state.rows[0].id, 25)
        self.event_bus.publish.assert_any_call(EventType.PAGE_LOAD_DISCARDED, page_index=1)

    async def test_reload_refetches_current_page(self):
        await self.controller.on_page_change(3)
        self.fetcher.fail_pages = {4}
        await self.controller.on_page_change(3)
        self.fetcher.fail_pages = set()

        state = await self.controller.reload()

        self.assertEqual(self.fetcher.calls, [4, 4, 4])
        self.assertTrue(state.is_ready)
        self.assertEqual(state.page_index, 3)

    async def test_selection_survives_navigation(self):
        await self.controller.on_page_change(0)
        await self.controller.on_request_selection(3)
        state = await self.controller.on_page_change(1)
        self.assertEqual([row.id for row in state.selection], [1, 2, 3])


class TestTableControllerSelection(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self):
        self.fetcher = FakeFetcher(total_rows=56, page_size=12)
        self.event_bus = EventBus()
        self.controller = TableController(self.fetcher, event_bus=self.event_bus)
        await self.controller.on_page_change(0)
        self.fetcher.calls.clear()

    async def test_selection_replaces_previous(self):
        await self.controller.on_request_selection(20)
        result = await self.controller.on_request_selection(3)

        state = self.controller.state
        self.assertEqual([row.id for row in state.selection], [1, 2, 3])
        self.assertEqual(state.selection_status, "complete")
        self.assertIs(state.last_selection, result)

    async def test_partial_selection_status(self):
        await self.controller.on_page_change(4)

        result = await self.controller.on_request_selection(50)

        self.assertEqual(len(result.rows), 8)
        self.assertEqual(self.controller.state.selection_status, "partial")

    async def test_default_count_is_page_limit(self):
        result = await self.controller.on_request_selection(None)
        self.assertEqual(result.requested_count, 12)
        self.assertEqual(self.fetcher.calls, [])

    async def test_failed_selection_keeps_previous(self):
        """A failing fetch leaves the earlier selection untouched"""
        await self.controller.on_request_selection(5)
        self.fetcher.fail_pages = {2}

        with self.assertRaises(SelectionFailure):
            await self.controller.on_request_selection(20)

        state = self.controller.state
        self.assertEqual([row.id for row in state.selection], [1, 2, 3, 4, 5])
        self.assertTrue(state.selection_status.startswith("error:"))
        self.assertFalse(self.controller.selection_pending)

    async def test_second_selection_is_rejected_while_running(self):
        gated = GatedFetcher(self.fetcher)
        gated.release(1)
        controller = TableController(gated)
        await controller.on_page_change(0)

        running = asyncio.create_task(controller.on_request_selection(20))
        await asyncio.sleep(0)
        self.assertTrue(controller.selection_pending)
        self.assertEqual(controller.state.selection_status, "accumulating")

        with self.assertRaises(SelectionInProgressError):
            await controller.on_request_selection(5)

        gated.release(2)
        result = await running
        self.assertEqual(len(result.rows), 20)
        self.assertFalse(controller.selection_pending)

    async def test_unexpected_error_does_not_leave_selection_accumulating(self):
        await self.controller.on_request_selection(5)
        self.fetcher.fetch = AsyncMock(side_effect=OverflowError("cannot convert float infinity to integer"))

        with self.assertRaises(OverflowError):
            await self.controller.on_request_selection(20)

        state = self.controller.state
        self.assertTrue(state.selection_status.startswith("error:"))
        self.assertEqual([row.id for row in state.selection], [1, 2, 3, 4, 5])
        self.assertFalse(self.controller.selection_pending)

    async def test_selection_needs_a_loaded_page(self):
        self.fetcher.fail_pages = {2}
        await self.controller.on_page_change(1)

        with self.assertRaises(PageNotReadyError):
            await self.controller.on_request_selection(5)

    async def test_toggle_row(self):
        self.controller.toggle_row(4)
        self.controller.toggle_row(2)
        self.assertEqual([row.id for row in self.controller.state.selection], [4, 2])

        self.controller.toggle_row(4)
        self.assertEqual(self.controller.state.selected_ids, frozenset({2}))

    async def test_toggle_resets_bulk_selection_status(self):
        await self.controller.on_request_selection(5)
        self.assertEqual(self.controller.state.selection_status, "complete")

        self.controller.toggle_row(7)

        state = self.controller.state
        self.assertEqual(state.selection_status, "idle")
        self.assertIsNone(state.last_selection)
        self.assertEqual(len(state.selection), 6)

    async def test_toggle_unknown_row(self):
        with self.assertRaises(KeyError):
            self.controller.toggle_row(999)

    async def test_toggle_removes_rows_from_other_pages(self):
        await self.controller.on_request_selection(20)
        await self.controller.on_page_change(1)

        self.controller.toggle_row(15)

        self.assertNotIn(15, self.controller.state.selected_ids)
        self.assertEqual(len(self.controller.state.selection), 19)

    async def test_clear_selection(self):
        changes = []
        self.event_bus.subscribe(EventType.SELECTION_CHANGED, lambda **data: changes.append(data))
        await self.controller.on_request_selection(5)

        self.controller.clear_selection()

        self.assertEqual(self.controller.state.selection, ())
        self.assertEqual(self.controller.state.selection_status, "idle")
        self.assertEqual([change["selected"] for change in changes], [5, 0])

    def test_state_is_frozen(self):
        with self.assertRaises(AttributeError):
            self.controller.state.page_index = 3
        self.assertIsInstance(self.controller.state, TableState)


if __name__ == "__main__":
    unittest.main()
