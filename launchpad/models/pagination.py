from typing import Optional, List, TypeVar, Generic
from pydantic import BaseModel, ConfigDict, model_validator

from launchpad.core.exceptions import MalformedPageError


T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    """
    One bounded window of an ordered collection plus pagination metadata

    Attributes:
        items: Items in this window, in collection order
        cursor: Cursor of the last item, None when the window is empty
        has_more: Whether items exist beyond this window

    A page claiming more items without a cursor to continue from, or
    carrying a cursor with no items, raises MalformedPageError.
    """

    model_config = ConfigDict(frozen=True)

    items: List[T]
    cursor: Optional[str] = None
    has_more: bool = False

    @model_validator(mode="after")
    def check_cursor_consistency(self) -> "Page[T]":
        if self.has_more and self.cursor is None:
            raise MalformedPageError("Page reports has_more without a cursor")
        if not self.items and self.cursor is not None:
            raise MalformedPageError(
                "Page carries a cursor but no items", cursor=self.cursor
            )
        return self

