"""
Restartable pagination over Qiita list endpoints.

A Paginator walks one endpoint page by page, either by counting `page`
numbers or by following the `rel="next"` entry of the Link header.
"""

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Generic, Literal, TypeVar, cast

from qiita_client.core.errors import ValidationError

if TYPE_CHECKING:
    from qiita_client.core.client import APIClient, APIResponse

logger = logging.getLogger(__name__)

T = TypeVar("T")

PaginationMode = Literal["link", "page"]

PAGINATION_MODES = ("link", "page")


class Paginator(Generic[T]):
    """
    Lazy sequence of pages from one list endpoint.

    Each step returns a whole page (a list). Callers flatten across pages
    themselves, or use collect().

    Example:
        paginator = client.paginate("/items", {"per_page": 20})
        async for page in paginator:
            ...

        first_page = await paginator.restart()

    """

    def __init__(
        self,
        client: "APIClient",
        path: str,
        params: dict[str, Any] | None = None,
        parser: Callable[[dict[str, Any]], T] | None = None,
        mode: PaginationMode = "link",
        max_page: int | None = 100,
        stop_on_empty: bool = True,
    ):
        """
        Create a paginator.

        Args:
            client: APIClient used for every page request
            path: API path of the list endpoint
            params: Query parameters; in "page" mode `page` is the start page
            parser: Optional function to parse each item
            mode: "page" to count pages, "link" to follow Link headers
            max_page: Highest page number requested in "page" mode (None for no cap)
            stop_on_empty: End "page" mode at the first empty page

        """
        if mode not in PAGINATION_MODES:
            raise ValueError(f"Unknown pagination mode: {mode!r}")

        self._client = client
        self.path = path
        self.params = dict(params or {})
        self.parser = parser
        self.mode = mode
        self.max_page = max_page
        self.stop_on_empty = stop_on_empty

        self._initial_cursor: int | str
        if mode == "page":
            self._initial_cursor = int(self.params.pop("page", None) or 1)
        else:
            self._initial_cursor = path
        self._cursor = self._initial_cursor
        self._exhausted = False

    @property
    def cursor(self) -> int | str:
        """Page number or URL of the next request."""
        return self._cursor

    @property
    def exhausted(self) -> bool:
        return self._exhausted

    def reset(self) -> None:
        """Return to the first page without sending a request."""
        logger.debug("Resetting pagination of %s", self.path)
        self._cursor = self._initial_cursor
        self._exhausted = False

    async def restart(self) -> list[T] | None:
        """Return to the first page and fetch it."""
        self.reset()
        return await self.advance()

    async def advance(self) -> list[T] | None:
        """
        Fetch the page at the current cursor and move the cursor forward.

        Returns:
            The page's items, or None once the endpoint is exhausted

        Raises:
            APIError: Propagated from the request; the paginator is exhausted afterwards
            ValidationError: If the page body is not a JSON array

        """
        if self._exhausted:
            return None
        if self.mode == "page":
            return await self._advance_page()
        return await self._advance_link()

    async def _advance_page(self) -> list[T] | None:
        page = cast(int, self._cursor)
        if self.max_page is not None and page > self.max_page:
            logger.debug("Stopping %s at page limit %d", self.path, self.max_page)
            self._exhausted = True
            return None

        # Stays exhausted unless the page decodes, so errors end the sequence
        self._exhausted = True
        response = await self._client.get(self.path, {**self.params, "page": page})
        items = self._decode(response)

        if not items and self.stop_on_empty:
            logger.debug("Page %d of %s is empty", page, self.path)
            return None

        self._cursor = page + 1
        self._exhausted = False
        return items

    async def _advance_link(self) -> list[T] | None:
        url = cast(str, self._cursor)
        # Query parameters only apply to the first URL; next links carry their own
        params = self.params if url == self._initial_cursor else None

        self._exhausted = True
        response = await self._client.get(url, params)
        items = self._decode(response)

        next_url = response.next_url
        if next_url:
            self._cursor = next_url
            self._exhausted = False
        else:
            logger.debug("No next link after %s", url)
        return items

    def _decode(self, response: "APIResponse") -> list[T]:
        data = response.data
        if not isinstance(data, list):
            raise ValidationError(
                f"Expected a JSON array from {self.path}",
                details={"status": response.status, "body": data},
            )
        if self.parser:
            return [self.parser(item) for item in data]
        return data

    async def collect(self) -> list[T]:
        """
        Fetch all remaining pages.

        Returns:
            Items from all pages, in order

        """
        items: list[T] = []
        async for page in self:
            items.extend(page)
        return items

    def __aiter__(self) -> "Paginator[T]":
        return self

    async def __anext__(self) -> list[T]:
        page = await self.advance()
        if page is None:
            raise StopAsyncIteration
        return page
