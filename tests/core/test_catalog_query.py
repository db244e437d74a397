#!/usr/bin/env python3
"""
Tests for catalog derivation - filter, completed-last partition, stable sort.
"""

import pytest

from book_backlog.core import (
    BookRecord,
    BookStatus,
    SortOrder,
    derive_catalog,
    partition_completed,
    sort_records,
)


def make_book(book_id, added, title="T", author="A", status=BookStatus.UNREAD):
    return BookRecord(
        id=book_id,
        title=title,
        author=author,
        status=status,
        added_date=added,
        read_date=1000 if status is BookStatus.READ else None,
    )


@pytest.fixture
def mixed_books():
    return [
        make_book("a", 5, "Delta", "Yamada", BookStatus.READ),
        make_book("b", 1, "Alpha", "Suzuki", BookStatus.UNREAD),
        make_book("c", 4, "Charlie", "Tanaka", BookStatus.READING),
        make_book("d", 2, "Bravo", "Kato", BookStatus.READ),
        make_book("e", 3, "Echo", "Ito", BookStatus.UNREAD),
    ]


def ids(books):
    return [book.id for book in books]


def test_added_desc_scenario_completed_book_sinks():
    """Marking the middle book READ moves it below the active ones."""
    books = [make_book("1", 1), make_book("2", 2), make_book("3", 3)]
    assert ids(derive_catalog(books, SortOrder.ADDED_DESC, None)) == ["3", "2", "1"]

    books[1] = make_book("2", 2, status=BookStatus.READ)
    assert ids(derive_catalog(books, SortOrder.ADDED_DESC, None)) == ["3", "1", "2"]


@pytest.mark.parametrize("sort_order", list(SortOrder))
def test_completed_books_always_follow_active_books(mixed_books, sort_order):
    result = derive_catalog(mixed_books, sort_order, None)
    statuses = [book.status for book in result]
    first_read = statuses.index(BookStatus.READ)
    assert all(status is BookStatus.READ for status in statuses[first_read:])
    assert len(result) == len(mixed_books)


@pytest.mark.parametrize("status", list(BookStatus))
def test_filter_keeps_only_matching_status(mixed_books, status):
    result = derive_catalog(mixed_books, SortOrder.TITLE_ASC, status)
    assert result
    assert all(book.status is status for book in result)


def test_no_filter_returns_full_set(mixed_books):
    result = derive_catalog(mixed_books, SortOrder.ADDED_ASC, None)
    assert set(ids(result)) == set(ids(mixed_books))


def test_filter_with_no_matches_is_empty_not_error():
    books = [make_book("1", 1), make_book("2", 2, status=BookStatus.READ)]
    assert derive_catalog(books, SortOrder.ADDED_DESC, BookStatus.READING) == []


def test_empty_record_set():
    assert derive_catalog([], SortOrder.TITLE_DESC, None) == []


def test_each_sort_order(mixed_books):
    assert ids(derive_catalog(mixed_books, SortOrder.ADDED_DESC, None)) == ["c", "e", "b", "a", "d"]
    assert ids(derive_catalog(mixed_books, SortOrder.ADDED_ASC, None)) == ["b", "e", "c", "d", "a"]
    assert ids(derive_catalog(mixed_books, SortOrder.TITLE_ASC, None)) == ["b", "c", "e", "d", "a"]
    assert ids(derive_catalog(mixed_books, SortOrder.TITLE_DESC, None)) == ["e", "c", "b", "a", "d"]
    assert ids(derive_catalog(mixed_books, SortOrder.AUTHOR_ASC, None)) == ["e", "b", "c", "d", "a"]
    assert ids(derive_catalog(mixed_books, SortOrder.AUTHOR_DESC, None)) == ["c", "b", "e", "a", "d"]


def test_partition_preserves_input_order(mixed_books):
    active, completed = partition_completed(mixed_books)
    assert ids(active) == ["b", "c", "e"]
    assert ids(completed) == ["a", "d"]


@pytest.mark.parametrize("sort_order", [SortOrder.TITLE_ASC, SortOrder.TITLE_DESC])
def test_equal_titles_keep_input_order(sort_order):
    books = [
        make_book("x", 1, title="Same"),
        make_book("y", 2, title="Same"),
        make_book("z", 3, title="Same"),
    ]
    assert ids(sort_records(books, sort_order)) == ["x", "y", "z"]
    assert ids(sort_records(list(reversed(books)), sort_order)) == ["z", "y", "x"]


def test_equal_added_dates_keep_input_order_descending():
    books = [make_book("p", 7), make_book("q", 7), make_book("r", 9)]
    assert ids(sort_records(books, SortOrder.ADDED_DESC)) == ["r", "p", "q"]


def test_sort_key_is_applied_to_text_fields():
    books = [make_book("1", 1, title="beta"), make_book("2", 2, title="Alpha")]
    assert ids(derive_catalog(books, SortOrder.TITLE_ASC, None)) == ["2", "1"]
    folded = derive_catalog(books, SortOrder.TITLE_ASC, None, sort_key=str.casefold)
    assert ids(folded) == ["2", "1"]
    reverse_key = derive_catalog(
        books, SortOrder.TITLE_ASC, None, sort_key=lambda text: -ord(text[0].lower())
    )
    assert ids(reverse_key) == ["1", "2"]


def test_derivation_is_deterministic(mixed_books):
    first = derive_catalog(mixed_books, SortOrder.AUTHOR_ASC, None)
    second = derive_catalog(mixed_books, SortOrder.AUTHOR_ASC, None)
    assert first == second
