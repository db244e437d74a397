"""Catalog Query Engine - Derives the visible book list from store and view state."""

from typing import Any, Callable, List, Optional, Sequence

from PySide6.QtCore import QObject, Signal, Slot

from book_backlog.core import (
    DEFAULT_SORT_ORDER,
    BookRecord,
    BookStatus,
    SortOrder,
    derive_catalog,
)


class CatalogQueryEngine(QObject):
    """Holds the latest snapshot plus sort/filter state and publishes the derived list.

    Every change to one of the three inputs triggers a full, synchronous
    recompute over the current snapshot. Consecutive equal results are not
    re-published, so rapid view-state changes collapse to the latest state.

    Signals:
        books_changed: Emitted with the new derived List[BookRecord].
        sort_order_changed: Emitted with the new SortOrder.
        filter_status_changed: Emitted with the new Optional[BookStatus].
    """

    books_changed = Signal(object)
    sort_order_changed = Signal(object)
    filter_status_changed = Signal(object)

    def __init__(
        self,
        sort_key: Optional[Callable[[str], Any]] = None,
        sort_order: SortOrder = DEFAULT_SORT_ORDER,
        filter_status: Optional[BookStatus] = None,
    ):
        super().__init__()
        self._sort_key = sort_key or (lambda text: text)
        self._snapshot: tuple = ()
        self._sort_order = sort_order
        self._filter_status = filter_status
        self._books: List[BookRecord] = []

    @property
    def books(self) -> List[BookRecord]:
        """The most recently derived list."""
        return list(self._books)

    @property
    def sort_order(self) -> SortOrder:
        return self._sort_order

    @property
    def filter_status(self) -> Optional[BookStatus]:
        return self._filter_status

    @property
    def is_filtered(self) -> bool:
        """True when an empty result means 'nothing matches' rather than 'no books'."""
        return self._filter_status is not None

    @Slot(object)
    def on_snapshot(self, books: Sequence[BookRecord]):
        """Accept a new full record set from the store."""
        self._snapshot = tuple(books)
        self._recompute()

    def set_sort_order(self, sort_order: SortOrder):
        if not isinstance(sort_order, SortOrder):
            raise ValueError(f"Unknown sort order: {sort_order!r}")
        if sort_order is self._sort_order:
            return
        self._sort_order = sort_order
        self.sort_order_changed.emit(sort_order)
        self._recompute()

    def set_filter_status(self, filter_status: Optional[BookStatus]):
        if filter_status is not None and not isinstance(filter_status, BookStatus):
            raise ValueError(f"Unknown filter status: {filter_status!r}")
        if filter_status is self._filter_status:
            return
        self._filter_status = filter_status
        self.filter_status_changed.emit(filter_status)
        self._recompute()

    def _recompute(self):
        derived = derive_catalog(
            self._snapshot, self._sort_order, self._filter_status, self._sort_key
        )
        if derived == self._books:
            return
        self._books = derived
        self.books_changed.emit(list(derived))
