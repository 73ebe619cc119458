# artic_table/interfaces/selection_trigger.py

from typing import Any

class SelectionTriggerInterface:
    """
    Capability of whatever widget lets the user ask for N selected rows.

    Keeps the table controller independent of the concrete overlay.
    """

    @property
    def is_open(self) -> bool:
        raise NotImplementedError("Subclasses must implement this property")

    def open(self) -> None:
        """Show the trigger and focus its count input."""
        raise NotImplementedError("Subclasses must implement this method")

    def close(self) -> None:
        """Hide the trigger. A run already started keeps going."""
        raise NotImplementedError("Subclasses must implement this method")

    def submit(self, count: Any) -> None:
        """Deliver the raw requested count to whoever handles the request."""
        raise NotImplementedError("Subclasses must implement this method")

    def set_busy(self, busy: bool) -> None:
        """Disable submitting while a selection run is pending."""
        raise NotImplementedError("Subclasses must implement this method")
