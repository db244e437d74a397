"""Domain layer - pure entities and catalog rules."""

from .book_record import BookRecord, BookStatus, current_millis, new_book_id, normalize_memo
from .catalog_query import derive_catalog, filter_by_status, partition_completed, sort_records
from .sort_order import DEFAULT_SORT_ORDER, SortOrder
from .status_policy import compute_read_date

__all__ = [
    "BookRecord",
    "BookStatus",
    "SortOrder",
    "DEFAULT_SORT_ORDER",
    "compute_read_date",
    "current_millis",
    "derive_catalog",
    "filter_by_status",
    "new_book_id",
    "normalize_memo",
    "partition_completed",
    "sort_records",
]
