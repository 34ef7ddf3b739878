import logging
from dataclasses import dataclass

import pytest

from launchpad.core.exceptions import InvalidPageSizeError, MalformedPageError
from launchpad.models.pagination import Page
from launchpad.utils.pagination import merge_pages, paginate


@dataclass(frozen=True)
class Item:
    cursor: str
    id: int


def make_items(*cursors: str) -> list[Item]:
    return [Item(cursor=cursor, id=index) for index, cursor in enumerate(cursors)]


def cursors(page: Page) -> list[str]:
    return [item.cursor for item in page.items]


@pytest.fixture
def collection():
    return make_items("5", "4", "3", "2", "1")


class TestPaginate:
    def test_first_page(self, collection):
        page = paginate(collection, None, 2)

        assert cursors(page) == ["5", "4"]
        assert page.cursor == "4"
        assert page.has_more is True

    def test_middle_page(self, collection):
        page = paginate(collection, "4", 2)

        assert cursors(page) == ["3", "2"]
        assert page.cursor == "2"
        assert page.has_more is True

    def test_last_partial_page(self, collection):
        page = paginate(collection, "2", 2)

        assert cursors(page) == ["1"]
        assert page.cursor == "1"
        assert page.has_more is False

    def test_page_never_includes_after_item(self, collection):
        page = paginate(collection, "3", 10)

        assert "3" not in cursors(page)
        assert cursors(page) == ["2", "1"]

    def test_exact_fit_has_no_more(self, collection):
        page = paginate(collection, None, 5)

        assert len(page.items) == 5
        assert page.cursor == "1"
        assert page.has_more is False

    def test_after_last_item_yields_empty_page(self, collection):
        page = paginate(collection, "1", 2)

        assert page.items == []
        assert page.cursor is None
        assert page.has_more is False

    def test_default_page_size_is_twenty(self):
        collection = make_items(*[str(n) for n in range(30, 0, -1)])

        page = paginate(collection)

        assert len(page.items) == 20
        assert page.has_more is True

    @pytest.mark.parametrize("after", [None, "1", "unknown"])
    @pytest.mark.parametrize("page_size", [1, 20])
    def test_empty_collection(self, after, page_size):
        page = paginate([], after, page_size)

        assert page.items == []
        assert page.cursor is None
        assert page.has_more is False

    @pytest.mark.parametrize("page_size", [0, -1, -20, 2.5, True, "3"])
    def test_invalid_page_size_rejected(self, collection, page_size):
        with pytest.raises(InvalidPageSizeError) as exc_info:
            paginate(collection, None, page_size)

        assert exc_info.value.status_code == 400
        assert exc_info.value.error_code == "INVALID_PAGE_SIZE"

    def test_invalid_page_size_rejected_for_empty_collection(self):
        with pytest.raises(InvalidPageSizeError):
            paginate([], None, 0)

    def test_unmatched_cursor_restarts_from_first_item(self, collection, caplog):
        with caplog.at_level(logging.WARNING, logger="launchpad.utils.pagination"):
            page = paginate(collection, "does-not-exist", 2)

        assert cursors(page) == ["5", "4"]
        assert page.has_more is True
        assert any(
            "matched no item" in record.getMessage() for record in caplog.records
        )

    def test_custom_cursor_accessor(self):
        collection = [{"ts": "30"}, {"ts": "20"}, {"ts": "10"}]

        page = paginate(collection, "30", 1, cursor_of=lambda item: item["ts"])

        assert page.items == [{"ts": "20"}]
        assert page.cursor == "20"
        assert page.has_more is True

    def test_deterministic(self, collection):
        assert paginate(collection, "4", 2) == paginate(collection, "4", 2)

    def test_does_not_mutate_collection(self, collection):
        snapshot = list(collection)

        paginate(collection, "5", 3)

        assert collection == snapshot

    @pytest.mark.parametrize("size", [0, 1, 2, 5, 7, 20])
    @pytest.mark.parametrize("page_size", [1, 2, 3, 7])
    def test_first_page_length(self, size, page_size):
        collection = make_items(*[str(n) for n in range(size, 0, -1)])

        page = paginate(collection, None, page_size)

        assert len(page.items) == min(page_size, size)

    @pytest.mark.parametrize("size", [0, 1, 2, 5, 6, 13])
    @pytest.mark.parametrize("page_size", [1, 2, 4, 13, 50])
    def test_threading_cursors_reconstructs_collection(self, size, page_size):
        collection = make_items(*[str(n) for n in range(size, 0, -1)])

        seen = []
        after = None
        for _ in range(size + 2):
            page = paginate(collection, after, page_size)
            seen.extend(page.items)
            if not page.has_more:
                break
            after = page.cursor
        else:
            pytest.fail("pagination did not terminate")

        assert seen == collection


class TestMergePages:
    def test_merge_into_absent_page(self, collection):
        incoming = paginate(collection, None, 2)

        merged = merge_pages(None, incoming)

        assert merged.items == incoming.items
        assert merged.cursor == "4"
        assert merged.has_more is True

    def test_merging_all_pages_rebuilds_collection(self, collection):
        accumulated = None
        for after in (None, "4", "2"):
            accumulated = merge_pages(accumulated, paginate(collection, after, 2))

        assert accumulated.items == collection
        assert accumulated.cursor == "1"
        assert accumulated.has_more is False

    def test_incoming_pointer_wins(self):
        existing = Page(items=make_items("9"), cursor="9", has_more=True)
        incoming = Page(items=make_items("8"), cursor="8", has_more=False)

        merged = merge_pages(existing, incoming)

        assert cursors(merged) == ["9", "8"]
        assert merged.cursor == "8"
        assert merged.has_more is False

    def test_empty_incoming_page_stops_pagination(self, collection):
        existing = paginate(collection, None, 5)
        incoming = paginate(collection, "1", 5)

        merged = merge_pages(existing, incoming)

        assert merged.items == collection
        assert merged.cursor is None
        assert merged.has_more is False

    def test_duplicate_fetch_is_appended_twice(self, collection):
        page = paginate(collection, None, 2)

        merged = merge_pages(merge_pages(None, page), page)

        assert cursors(merged) == ["5", "4", "5", "4"]

    def test_idempotent_and_pure(self, collection):
        existing = paginate(collection, None, 2)
        incoming = paginate(collection, "4", 2)
        existing_items = list(existing.items)

        first = merge_pages(existing, incoming)
        second = merge_pages(existing, incoming)

        assert first == second
        assert existing.items == existing_items
        assert first is not existing


class TestPageValidation:
    def test_has_more_without_cursor_is_malformed(self):
        with pytest.raises(MalformedPageError) as exc_info:
            Page(items=make_items("1"), cursor=None, has_more=True)

        assert exc_info.value.error_code == "MALFORMED_PAGE"

    def test_cursor_without_items_is_malformed(self):
        with pytest.raises(MalformedPageError):
            Page(items=[], cursor="1", has_more=False)

    def test_accumulated_page_may_end_without_cursor(self):
        page = Page(items=make_items("2", "1"), cursor=None, has_more=False)

        assert page.cursor is None
