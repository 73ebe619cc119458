# artic_table/core/event_bus.py

import logging
from typing import Callable, Dict, Any, List

from ..events import EventType

logger = logging.getLogger(__name__)

class EventBus:
    """
    In-process publish/subscribe hub.

    The table controller and the selection accumulator publish progress here;
    the UI subscribes to refresh itself without the services knowing about
    any widget.
    """

    def __init__(self, debug_logging: bool = False):
        """
        Args:
            debug_logging: Whether to log every published event
        """
        self.listeners: Dict[EventType, List[Callable[..., Any]]] = {}
        self.debug_logging = debug_logging

    def subscribe(self, event_type: EventType, callback: Callable[..., Any]) -> None:
        """
        Subscribe to an event type.

        Callbacks are invoked as ``callback(event_type=..., **data)``.
        Subscribing the same callback twice is a no-op.
        """
        callbacks = self.listeners.setdefault(event_type, [])
        if callback not in callbacks:
            callbacks.append(callback)
            logger.debug(f"Subscribed to event '{event_type.name}'")

    def unsubscribe(self, event_type: EventType, callback: Callable[..., Any]) -> bool:
        """
        Unsubscribe from an event type.

        Returns:
            True if the callback was subscribed, False otherwise
        """
        if callback in self.listeners.get(event_type, []):
            self.listeners[event_type].remove(callback)
            logger.debug(f"Unsubscribed from event '{event_type.name}'")
            return True
        return False

    def publish(self, event_type: EventType, **data: Any) -> None:
        """
        Publish an event to every subscriber of ``event_type``.

        A failing handler is logged and skipped; it never reaches the publisher.
        """
        if self.debug_logging:
            logger.debug(f"Event published: {event_type.name} - {data}")

        # Copy so handlers may unsubscribe themselves while being called
        for callback in list(self.listeners.get(event_type, [])):
            try:
                callback(event_type=event_type, **data)
            except Exception as e:
                logger.error(f"Error in event handler for '{event_type.name}': {e}")

    def get_subscriber_count(self, event_type: EventType) -> int:
        return len(self.listeners.get(event_type, []))

    def has_subscribers(self, event_type: EventType) -> bool:
        return self.get_subscriber_count(event_type) > 0

    def clear_all_subscriptions(self) -> None:
        """Drop every subscription (used on shutdown and in tests)."""
        self.listeners.clear()
        logger.debug("All event subscriptions cleared")
