from typing import List, Sequence

from launchpad.clients.launch_api import LaunchProvider
from launchpad.core.config import settings
from launchpad.core.logging import LogContext, bind_context, log_duration
from launchpad.core.metrics import pages_served
from launchpad.models.launch import Launch
from launchpad.models.pagination import Page
from launchpad.services.cache_service import CacheService
from launchpad.utils.pagination import paginate

logger = LogContext(__name__)


class LaunchService:
    def __init__(
        self, provider: LaunchProvider, cache_service: CacheService | None = None
    ):
        self.provider = provider
        self.cache_service = cache_service

        logger.debug(
            "LaunchService initialized",
            extra={"has_cache_service": cache_service is not None},
        )

    async def _get_all_launches(self) -> List[Launch]:
        """Get the full upstream collection, from cache when possible"""
        if self.cache_service:
            cached = await self.cache_service.get_launches()
            if cached is not None:
                logger.debug(
                    "Cache hit for launch collection",
                    extra={"launch_count": len(cached)},
                )
                return cached

        with log_duration(logger, "fetch_all_launches"):
            launches = await self.provider.fetch_all()

        if self.cache_service:
            await self.cache_service.set_launches(launches)

        return launches

    async def get_launches(
        self, after: str | None = None, page_size: int = settings.DEFAULT_PAGE_SIZE
    ) -> Page[Launch]:
        """
        Get one page of launches, newest first

        Args:
            after: Cursor of the last launch the caller has already seen
            page_size: Maximum number of launches to return

        Returns:
            The page of launches following the cursor
        """
        bind_context(operation="get_launches", after=after, page_size=page_size)

        launches = list(reversed(await self._get_all_launches()))

        with log_duration(logger, "paginate_launches"):
            page = paginate(launches, after=after, page_size=page_size)

        pages_served.labels(
            first_page=str(after is None).lower(), has_more=str(page.has_more).lower()
        ).inc()

        logger.info(
            "Launch page served",
            extra={
                "after": after,
                "page_size": page_size,
                "item_count": len(page.items),
                "has_more": page.has_more,
                "next_cursor": page.cursor,
            },
        )

        return Page[Launch](
            items=page.items, cursor=page.cursor, has_more=page.has_more
        )

    async def get_launch(self, launch_id: int) -> Launch:
        return await self.provider.get_launch_by_id(launch_id)

    async def get_launches_by_ids(self, launch_ids: Sequence[int]) -> List[Launch]:
        return await self.provider.get_launches_by_ids(launch_ids)

