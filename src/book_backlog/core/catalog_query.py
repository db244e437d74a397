"""Pure derivation of the visible catalog list from records and view state."""

from typing import Any, Callable, Iterable, List, Optional, Sequence

from .book_record import BookRecord, BookStatus
from .sort_order import SortOrder

SortKey = Callable[[str], Any]


def _identity_key(text: str) -> str:
    return text


def filter_by_status(
    records: Iterable[BookRecord], filter_status: Optional[BookStatus]
) -> List[BookRecord]:
    if filter_status is None:
        return list(records)
    return [record for record in records if record.status is filter_status]


def partition_completed(records: Sequence[BookRecord]):
    """Split into (active, completed), preserving relative order in each group."""
    active = [record for record in records if record.status is not BookStatus.READ]
    completed = [record for record in records if record.status is BookStatus.READ]
    return active, completed


def sort_records(
    records: Sequence[BookRecord],
    sort_order: SortOrder,
    sort_key: SortKey = _identity_key,
) -> List[BookRecord]:
    """Stable sort by the field sort_order selects.

    Descending orders use ``reverse=True``, which keeps equal-key records in
    their input order.
    """
    if sort_order in (SortOrder.ADDED_DESC, SortOrder.ADDED_ASC):
        key = lambda record: record.added_date
    elif sort_order in (SortOrder.TITLE_ASC, SortOrder.TITLE_DESC):
        key = lambda record: sort_key(record.title)
    else:
        key = lambda record: sort_key(record.author)
    return sorted(records, key=key, reverse=sort_order.descending)


def derive_catalog(
    records: Iterable[BookRecord],
    sort_order: SortOrder,
    filter_status: Optional[BookStatus],
    sort_key: SortKey = _identity_key,
) -> List[BookRecord]:
    """Filter, partition and sort records into the list the user sees.

    Completed (READ) books always follow active ones regardless of
    sort_order. ``sort_key`` maps title/author text to a collation key.
    """
    filtered = filter_by_status(records, filter_status)
    active, completed = partition_completed(filtered)
    return sort_records(active, sort_order, sort_key) + sort_records(
        completed, sort_order, sort_key
    )
