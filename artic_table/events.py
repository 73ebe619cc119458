# artic_table/events.py

from enum import Enum

class EventType(Enum):
    # Page navigation events
    PAGE_LOAD_STARTED = "page_load_started"
    PAGE_LOADED = "page_loaded"
    PAGE_LOAD_ERROR = "page_load_error"
    PAGE_LOAD_DISCARDED = "page_load_discarded"

    # Selection events
    SELECTION_STARTED = "selection_started"
    SELECTION_PAGE_FETCHED = "selection_page_fetched"
    SELECTION_COMPLETED = "selection_completed"
    SELECTION_PARTIAL = "selection_partial"
    SELECTION_FAILED = "selection_failed"
    SELECTION_CHANGED = "selection_changed"
