# File: artic_table/services/page_fetcher.py

import logging
from typing import Any, Dict, Optional

from curl_cffi import CurlError
from curl_cffi.requests import AsyncSession

from ..errors import NetworkError, ParseError
from ..interfaces.page_fetcher import PageFetcherInterface, FetchOptions
from ..models.artwork import Artwork
from ..models.pagination import Page, Pagination

logger = logging.getLogger(__name__)


def parse_page(body: Any, page_number: int) -> Page[Artwork]:
    """
    Validate a decoded API body and turn it into a `Page`.

    Expected shape: ``{"data": [...], "pagination": {"total", "limit", "total_pages"}}``.
    """
    if not isinstance(body, dict):
        raise ParseError(f"Page {page_number}: response body is not an object", page_number)
    if "data" not in body or "pagination" not in body:
        missing = [key for key in ("data", "pagination") if key not in body]
        raise ParseError(f"Page {page_number}: response is missing {', '.join(missing)}", page_number)
    if not isinstance(body["data"], list):
        raise ParseError(f"Page {page_number}: 'data' is not a list", page_number)

    try:
        rows = tuple(Artwork.from_api(row) for row in body["data"])
        pagination = Pagination.from_api(body["pagination"])
    except ParseError as e:
        raise ParseError(f"Page {page_number}: {e}", page_number) from e

    return Page(items=rows, pagination=pagination, number=page_number)


class ArticPageFetcher(PageFetcherInterface):
    """
    Fetches pages of the Art Institute of Chicago artworks API.

    One request per call, no retries: a failure is reported to the caller
    as a NetworkError or ParseError.
    """

    def __init__(self, options: Optional[FetchOptions] = None, session: Optional[AsyncSession] = None):
        self.options = options or FetchOptions()
        self._session = session
        self._owns_session = session is None
        logger.info(f"ArticPageFetcher initialized for {self.options.url}")

    async def __aenter__(self) -> "ArticPageFetcher":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    def _get_session(self) -> AsyncSession:
        if self._session is None:
            self._session = AsyncSession()
        return self._session

    def build_params(self, page_number: int) -> Dict[str, Any]:
        """Query parameters for one page request."""
        params: Dict[str, Any] = {"page": page_number}
        if self.options.limit:
            params["limit"] = self.options.limit
        if self.options.fields:
            params["fields"] = ",".join(self.options.fields)
        return params

    async def fetch(self, page_number: int) -> Page[Artwork]:
        if page_number < 1:
            raise ValueError(f"page_number is 1-based, got {page_number}")

        url = self.options.url
        params = self.build_params(page_number)
        logger.info(f"Fetching page {page_number} from {url}")

        try:
            response = await self._get_session().get(
                url,
                params=params,
                timeout=self.options.timeout,
                impersonate=self.options.impersonate,
                allow_redirects=True,
            )
        except CurlError as e:
            logger.warning(f"Request for page {page_number} failed: {e}")
            raise NetworkError(f"Request for page {page_number} failed: {e}", page_number) from e

        if not 200 <= response.status_code < 300:
            logger.error(f"Page {page_number} returned status {response.status_code}: {response.text[:200]}")
            raise NetworkError(
                f"Page {page_number} returned HTTP {response.status_code}", page_number
            )

        try:
            body = response.json()
        except ValueError as e:
            logger.error(f"Page {page_number} returned a non-JSON body: {response.text[:200]}")
            raise ParseError(f"Page {page_number}: response is not valid JSON", page_number) from e

        page = parse_page(body, page_number)
        logger.info(
            f"Fetched page {page_number}/{page.pagination.total_pages}: {len(page.items)} rows"
        )
        return page

    async def close(self) -> None:
        if self._session is not None and self._owns_session:
            await self._session.close()
            self._session = None
