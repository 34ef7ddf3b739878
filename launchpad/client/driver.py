from typing import Awaitable, Callable, Generic, List, TypeVar

from launchpad.client.cache import QueryCache, QueryKey
from launchpad.core.config import settings
from launchpad.core.logging import LogContext, log_duration
from launchpad.models.pagination import Page

logger = LogContext(__name__)

T = TypeVar("T")

PageFetcher = Callable[[str | None, int], Awaitable[Page[T]]]


class PaginationDriver(Generic[T]):
    """
    Grows one accumulated list of items across repeated page fetches

    The driver owns a single slot of a QueryCache. At most one fetch is in
    flight at a time: a load triggered while another is pending returns
    False without fetching. A failed fetch leaves the cursor, the has_more
    flag and the slot exactly as they were.
    """

    def __init__(
        self,
        fetch: PageFetcher,
        cache: QueryCache,
        key: QueryKey,
        page_size: int = settings.DEFAULT_PAGE_SIZE,
    ):
        self.fetch = fetch
        self.cache = cache
        self.key = key
        self.page_size = page_size

        self._busy = False
        self._loaded = False
        self._last_cursor: str | None = None
        self._has_more = False
        self._generation = 0

    @property
    def busy(self) -> bool:
        return self._busy

    @property
    def has_more(self) -> bool:
        return self._has_more

    @property
    def last_cursor(self) -> str | None:
        return self._last_cursor

    @property
    def items(self) -> List[T]:
        page = self.cache.read(self.key)
        return list(page.items) if page is not None else []

    async def load_first(self) -> bool:
        """
        Fetch the first page, replacing anything accumulated so far

        Returns:
            True if a page was applied, False if another fetch was in flight
            or the driver was closed before the page arrived
        """
        if self._busy:
            logger.debug("Fetch already in flight, ignoring load_first")
            return False

        generation = self._generation
        self._busy = True
        try:
            with log_duration(logger, "load_first_page"):
                page = await self.fetch(None, self.page_size)
            if self._closed_since(generation):
                return False
            self.cache.replace(self.key, page)
            self._apply(page)
        finally:
            self._busy = False

        return True

    async def load_more(self) -> bool:
        """
        Fetch the page after the last cursor and merge it into the slot

        Returns:
            True if a page was merged, False if the call was a no-op
        """
        if self._busy:
            logger.debug(
                "Fetch already in flight, ignoring load_more",
                extra={"after": self._last_cursor},
            )
            return False

        if self._loaded and not self._has_more:
            logger.debug("No more pages to load")
            return False

        generation = self._generation
        self._busy = True
        try:
            with log_duration(logger, "load_more_page"):
                page = await self.fetch(self._last_cursor, self.page_size)
            if self._closed_since(generation):
                return False
            merged = self.cache.write(self.key, page)
            self._apply(merged)
        finally:
            self._busy = False

        logger.debug(
            "Page merged",
            extra={
                "item_count": len(merged.items),
                "has_more": merged.has_more,
                "last_cursor": merged.cursor,
            },
        )
        return True

    def _apply(self, page: Page[T]) -> None:
        self._loaded = True
        self._last_cursor = page.cursor
        self._has_more = page.has_more

    def _closed_since(self, generation: int) -> bool:
        if generation == self._generation:
            return False
        logger.debug("Query closed while fetching, dropping page")
        return True

    def close(self) -> None:
        """Discard the accumulated list, including any page still in flight"""
        self._generation += 1
        self.cache.evict(self.key)
        self._loaded = False
        self._last_cursor = None
        self._has_more = False
