import unittest
from unittest.mock import Mock

from ..core.event_bus import EventBus
from ..events import EventType


class TestEventBus(unittest.TestCase):
    def setUp(self):
        self.bus = EventBus()

    def test_publish_reaches_subscribers(self):
        callback = Mock()
        self.bus.subscribe(EventType.PAGE_LOADED, callback)

        self.bus.publish(EventType.PAGE_LOADED, page_index=3)

        callback.assert_called_once_with(event_type=EventType.PAGE_LOADED, page_index=3)

    def test_duplicate_subscription_is_ignored(self):
        callback = Mock()
        self.bus.subscribe(EventType.PAGE_LOADED, callback)
        self.bus.subscribe(EventType.PAGE_LOADED, callback)

        self.bus.publish(EventType.PAGE_LOADED)

        self.assertEqual(callback.call_count, 1)
        self.assertEqual(self.bus.get_subscriber_count(EventType.PAGE_LOADED), 1)

    def test_unsubscribe(self):
        callback = Mock()
        self.bus.subscribe(EventType.SELECTION_STARTED, callback)

        self.assertTrue(self.bus.unsubscribe(EventType.SELECTION_STARTED, callback))
        self.assertFalse(self.bus.unsubscribe(EventType.SELECTION_STARTED, callback))
        self.bus.publish(EventType.SELECTION_STARTED)

        callback.assert_not_called()
        self.assertFalse(self.bus.has_subscribers(EventType.SELECTION_STARTED))

    def test_failing_handler_does_not_stop_others(self):
        """One broken subscriber must not hide the event from the rest"""
        broken = Mock(side_effect=RuntimeError("handler bug"))
        healthy = Mock()
        self.bus.subscribe(EventType.SELECTION_FAILED, broken)
        self.bus.subscribe(EventType.SELECTION_FAILED, healthy)

        self.bus.publish(EventType.SELECTION_FAILED, error="boom")

        healthy.assert_called_once_with(event_type=EventType.SELECTION_FAILED, error="boom")

    def test_clear_all_subscriptions(self):
        callback = Mock()
        for event_type in EventType:
            self.bus.subscribe(event_type, callback)

        self.assertTrue(self.bus.has_subscribers(EventType.PAGE_LOADED))
        self.bus.clear_all_subscriptions()
        self.bus.publish(EventType.PAGE_LOADED)
        callback.assert_not_called()


if __name__ == "__main__":
    unittest.main()
