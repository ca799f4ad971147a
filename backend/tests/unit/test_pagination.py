import math

import pytest

from backend.src.services.entries import EntryStore
from backend.src.services.pagination import EntryPaginator


@pytest.mark.parametrize(
    "total, page_size",
    [(0, 24), (1, 24), (24, 24), (25, 24), (100, 7), (3, 1)],
)
def test_total_pages_is_ceiling(fake_db, total, page_size) -> None:
    fake_db.seed_entries(total)
    paginator = EntryPaginator(page_size)

    paginator.load(EntryStore(fake_db), data_version=0)

    assert paginator.total_count == total
    assert paginator.total_pages == math.ceil(total / page_size)


def test_go_to_page_ignores_out_of_range(fake_db) -> None:
    fake_db.seed_entries(50)
    paginator = EntryPaginator(24)
    paginator.load(EntryStore(fake_db), data_version=0)

    assert paginator.go_to_page(3) is True
    assert paginator.current_page == 3
    assert paginator.go_to_page(0) is False
    assert paginator.go_to_page(4) is False
    assert paginator.current_page == 3


def test_navigation_stops_at_bounds(fake_db) -> None:
    fake_db.seed_entries(30)
    paginator = EntryPaginator(24)
    paginator.load(EntryStore(fake_db), data_version=0)

    assert paginator.prev_page() is False
    assert paginator.next_page() is True
    assert paginator.next_page() is False
    assert paginator.current_page == 2
    assert paginator.has_next_page is False
    assert paginator.has_prev_page is True


def test_page_slice_is_newest_first(fake_db) -> None:
    fake_db.seed_entries(5)
    paginator = EntryPaginator(2)
    store = EntryStore(fake_db)

    paginator.load(store, data_version=0)
    assert [e.title for e in paginator.entries] == ["Entry 5", "Entry 4"]

    paginator.go_to_page(3)
    paginator.load(store, data_version=0)
    assert [e.title for e in paginator.entries] == ["Entry 1"]
    assert paginator.showing_range() == (5, 5)


def test_load_is_cached_until_data_version_changes(fake_db) -> None:
    fake_db.seed_entries(3)
    paginator = EntryPaginator(24)
    store = EntryStore(fake_db)

    paginator.load(store, data_version=0)
    paginator.load(store, data_version=0)
    assert fake_db.calls.count(("entries", "select")) == 2

    paginator.load(store, data_version=1)
    assert fake_db.calls.count(("entries", "select")) == 4


def test_load_failure_keeps_previous_entries(fake_db) -> None:
    fake_db.seed_entries(3)
    paginator = EntryPaginator(24)
    store = EntryStore(fake_db)
    paginator.load(store, data_version=0)

    fake_db.fail("entries", "select", message="connection reset")
    entries = paginator.load(store, data_version=1)

    assert len(entries) == 3
    assert paginator.error is not None
    assert paginator.error.message == "connection reset"


def test_current_page_is_not_clamped_when_total_shrinks(fake_db) -> None:
    rows = fake_db.seed_entries(25)
    paginator = EntryPaginator(24)
    store = EntryStore(fake_db)
    paginator.load(store, data_version=0)
    paginator.go_to_page(2)

    fake_db.tables["entries"].remove(rows[0])
    paginator.load(store, data_version=1)

    assert paginator.current_page == 2
    assert paginator.total_pages == 1
    assert paginator.entries == []


def test_page_numbers_window() -> None:
    paginator = EntryPaginator(10)
    paginator.total_count = 200
    paginator.current_page = 10

    assert paginator.page_numbers() == [8, 9, 10, 11, 12]


def test_page_size_must_be_positive() -> None:
    with pytest.raises(ValueError):
        EntryPaginator(0)
