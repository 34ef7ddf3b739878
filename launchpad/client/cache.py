from typing import Any, Dict, Hashable, Iterable, Mapping, Tuple

from launchpad.core.logging import LogContext
from launchpad.models.pagination import Page
from launchpad.utils.pagination import merge_pages

logger = LogContext(__name__)

QueryKey = Tuple[str, Tuple[Tuple[str, Hashable], ...]]

PAGINATION_ARGS = frozenset({"after"})


def query_key(
    field: str,
    variables: Mapping[str, Any] | None = None,
    exclude: Iterable[str] = PAGINATION_ARGS,
) -> QueryKey:
    """
    Build the identity of a paginated query

    Pagination arguments are left out so that every page of the same
    logical query lands in the same slot.
    """
    excluded = frozenset(exclude)
    filters = tuple(
        sorted(
            (name, value)
            for name, value in (variables or {}).items()
            if name not in excluded
        )
    )
    return field, filters


class QueryCache:
    """Keyed store of accumulated pages, one slot per query identity"""

    def __init__(self) -> None:
        self._slots: Dict[QueryKey, Page] = {}

    def read(self, key: QueryKey) -> Page | None:
        return self._slots.get(key)

    def write(self, key: QueryKey, incoming: Page) -> Page:
        """Merge an incoming page into the slot and replace it with the result"""
        merged = merge_pages(self._slots.get(key), incoming)
        self._slots[key] = merged

        logger.debug(
            "Query cache slot updated",
            extra={
                "query_field": key[0],
                "item_count": len(merged.items),
                "has_more": merged.has_more,
            },
        )
        return merged

    def replace(self, key: QueryKey, page: Page) -> Page:
        self._slots[key] = page
        return page

    def evict(self, key: QueryKey) -> bool:
        return self._slots.pop(key, None) is not None

    def __contains__(self, key: QueryKey) -> bool:
        return key in self._slots

    def __len__(self) -> int:
        return len(self._slots)
