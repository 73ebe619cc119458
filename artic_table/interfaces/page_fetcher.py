# artic_table/interfaces/page_fetcher.py

from dataclasses import dataclass
from typing import Optional, Sequence

from ..models.artwork import Artwork
from ..models.pagination import Page

@dataclass
class FetchOptions:
    """Configuration options for page fetching."""
    url: str = "https://api.artic.edu/api/v1/artworks"
    timeout: float = 30.0
    impersonate: Optional[str] = "chrome110"
    limit: Optional[int] = None          # None lets the server choose (12)
    fields: Optional[Sequence[str]] = None

class PageFetcherInterface:
    """Interface for fetching one page of the remote dataset."""

    async def fetch(self, page_number: int) -> Page[Artwork]:
        """
        Fetch one page.

        Args:
            page_number: 1-based page index

        Returns:
            The page's rows plus refreshed pagination metadata

        Raises:
            ValueError: If page_number is below 1
            NetworkError: Transport failure, timeout or non-2xx status
            ParseError: Response body is not the expected shape
        """
        raise NotImplementedError("Subclasses must implement this method")

    async def close(self) -> None:
        """Release any network resources held by the fetcher."""
        raise NotImplementedError("Subclasses must implement this method")
