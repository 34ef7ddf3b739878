from operator import attrgetter
from typing import Any, Callable, Sequence, TypeVar

from launchpad.core.config import settings
from launchpad.core.exceptions import InvalidPageSizeError
from launchpad.core.logging import LogContext
from launchpad.core.metrics import unmatched_cursors
from launchpad.models.pagination import Page

logger = LogContext(__name__)

T = TypeVar("T")


def paginate(
    collection: Sequence[T],
    after: str | None = None,
    page_size: int = settings.DEFAULT_PAGE_SIZE,
    cursor_of: Callable[[T], Any] = attrgetter("cursor"),
) -> Page[T]:
    """
    Slice the window that follows a cursor out of an ordered collection

    Args:
        collection: The full, already ordered collection
        after: Cursor of the last item the caller has seen, None for the first page
        page_size: Maximum number of items in the window
        cursor_of: Callable returning an item's cursor

    Returns:
        A page holding the window, the cursor of its last item and whether
        items remain beyond it

    Raises:
        InvalidPageSizeError: If page_size is not a positive integer
    """
    if isinstance(page_size, bool) or not isinstance(page_size, int) or page_size <= 0:
        raise InvalidPageSizeError(page_size)

    if not collection:
        return Page(items=[], cursor=None, has_more=False)

    start = 0
    if after is not None:
        for index, item in enumerate(collection):
            if str(cursor_of(item)) == after:
                start = index + 1
                break
        else:
            # an unknown cursor restarts at the head of the collection
            unmatched_cursors.inc()
            logger.warning(
                "Pagination cursor matched no item, restarting from the first item",
                extra={"after": after, "collection_size": len(collection)},
            )

    window = list(collection[start : start + page_size])
    if not window:
        return Page(items=[], cursor=None, has_more=False)

    last_cursor = cursor_of(window[-1])
    has_more = last_cursor != cursor_of(collection[-1])

    return Page(items=window, cursor=str(last_cursor), has_more=has_more)


def merge_pages(existing: Page[T] | None, incoming: Page[T]) -> Page[T]:
    """
    Append a freshly fetched page to the accumulated one

    The incoming page always carries the authoritative cursor and has_more
    flag. Items are concatenated in arrival order without deduplication.
    """
    items = list(existing.items) if existing is not None else []
    items.extend(incoming.items)

    return type(incoming)(
        items=items, cursor=incoming.cursor, has_more=incoming.has_more
    )
