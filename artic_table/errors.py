# artic_table/errors.py

class ArticTableError(Exception):
    """Base class for all artic_table errors."""
    pass


class FetchError(ArticTableError):
    """A single page request failed."""

    def __init__(self, message: str, page_number: int | None = None):
        super().__init__(message)
        self.page_number = page_number


class NetworkError(FetchError):
    """Transport failure, timeout or non-success HTTP status."""
    pass


class ParseError(FetchError):
    """Response body did not have the expected shape."""
    pass


class SelectionFailure(ArticTableError):
    """
    A page fetch failed while accumulating a selection.

    The wrapped FetchError is kept as ``__cause__`` and on ``fetch_error``.
    """

    def __init__(self, fetch_error: FetchError):
        super().__init__(f"Selection failed: {fetch_error}")
        self.fetch_error = fetch_error
        self.page_number = fetch_error.page_number


class SelectionInProgressError(ArticTableError):
    """A selection was requested while another one is still running."""
    pass


class ConfigError(ArticTableError):
    """Error related to configuration."""
    pass


class PageNotReadyError(ArticTableError):
    """A selection was requested before the current page finished loading."""
    pass
