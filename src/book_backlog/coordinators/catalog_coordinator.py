"""Catalog Coordinator - Applies add/edit/delete intents to the book store."""

import logging
from typing import Callable, Optional

from PySide6.QtCore import QObject, QThreadPool, Signal, Slot

from book_backlog.core import (
    BookRecord,
    BookStatus,
    compute_read_date,
    current_millis,
    normalize_memo,
)
from book_backlog.io import BookNotFoundError, BookRepository
from book_backlog.services import ThumbnailError, ThumbnailService, ThumbnailWorker
from book_backlog.services.thumbnail_service import ImageSource

logger = logging.getLogger(__name__)


class _IngestRequest(QObject):
    """Holds one background ingest and delivers its outcome on the coordinator's thread."""

    def __init__(self, worker: ThumbnailWorker, callback, parent: "CatalogCoordinator"):
        super().__init__()
        self.worker = worker
        self.signals = worker.signals
        self.callback = callback
        self.parent_ref = parent

    @Slot(object)
    def on_result(self, data):
        self.callback(data)

    @Slot(str)
    def on_error(self, error: str):
        logger.warning("Cover ingest failed: %s", error)
        self.callback(None)

    @Slot()
    def on_finished(self):
        self.parent_ref._active_ingests.discard(self)


class CatalogCoordinator(QObject):
    """Turns user intents into store mutations.

    Responsibilities:
    - Validate required fields before anything is written
    - Ingest cover images (failures degrade to "no new cover")
    - Keep read_date consistent with status on every edit
    - Drop edits/deletes that target a book removed in the meantime
    - Report store failures through ``operation_failed``

    Signals:
        operation_failed: Emitted with a user-facing message when the
            store rejects a mutation. The operation can be retried.
    """

    operation_failed = Signal(str)

    def __init__(
        self,
        book_repository: BookRepository,
        thumbnail_service: ThumbnailService,
        clock: Callable[[], int] = current_millis,
        thread_pool: Optional[QThreadPool] = None,
    ):
        super().__init__()

        if book_repository is None:
            raise ValueError("BookRepository must not be None")
        if thumbnail_service is None:
            raise ValueError("ThumbnailService must not be None")

        self.book_repository = book_repository
        self.thumbnail_service = thumbnail_service
        self._clock = clock
        self._thread_pool = thread_pool
        # Keep pending ingest requests alive until their worker finishes
        self._active_ingests = set()

    def add_book(
        self,
        title: str,
        author: str,
        memo: Optional[str] = "",
        source_image: Optional[ImageSource] = None,
        cover_image: Optional[bytes] = None,
    ) -> Optional[BookRecord]:
        """Create and persist a new UNREAD book.

        ``cover_image`` is an already-ingested cover (for example from
        ``ingest_in_background``) and is stored as-is; ``source_image`` is
        ingested on the calling thread.

        Returns:
            The stored record, or None if the store rejected it.

        Raises:
            ValueError: If title or author is blank.
        """
        title, author = self._validate(title, author)
        cover = cover_image if cover_image is not None else self._ingest_cover(source_image)
        book = BookRecord.create(
            title=title, author=author, memo=memo, cover_image=cover, now=self._clock()
        )
        try:
            return self.book_repository.insert_book(book)
        except RuntimeError as e:
            self._report_failure("add", e)
            return None

    def edit_book(
        self,
        book_id: str,
        title: str,
        author: str,
        memo: Optional[str],
        status: BookStatus,
        new_source_image: Optional[ImageSource] = None,
        new_cover_image: Optional[bytes] = None,
    ) -> Optional[BookRecord]:
        """Update an existing book in a single write.

        The cover is replaced by ``new_cover_image`` (already ingested) when
        given, otherwise only when ``new_source_image`` ingests successfully.
        Returns None when the book no longer exists or the store failed.

        Raises:
            ValueError: If title or author is blank.
        """
        title, author = self._validate(title, author)
        try:
            current = self.book_repository.get_book_by_id(book_id)
        except RuntimeError as e:
            self._report_failure("edit", e)
            return None
        if current is None:
            logger.warning("Book %s not found for update; edit dropped", book_id)
            return None

        cover = current.cover_image
        if new_cover_image is not None:
            cover = new_cover_image
        elif new_source_image is not None:
            new_cover = self._ingest_cover(new_source_image)
            if new_cover is not None:
                cover = new_cover

        read_date = compute_read_date(current.status, current.read_date, status, self._clock())
        updated = current.with_changes(
            title=title,
            author=author,
            memo=normalize_memo(memo),
            status=status,
            read_date=read_date,
            cover_image=cover,
        )
        try:
            return self.book_repository.update_book(updated)
        except BookNotFoundError:
            logger.warning("Book %s vanished during update; edit dropped", book_id)
            return None
        except RuntimeError as e:
            self._report_failure("edit", e)
            return None

    def delete_book(self, book_id: str) -> bool:
        """Delete a book. Returns False if it was already gone or the store failed."""
        try:
            current = self.book_repository.get_book_by_id(book_id)
            if current is None:
                logger.warning("Book %s not found for delete; delete dropped", book_id)
                return False
            self.book_repository.delete_book(current)
        except BookNotFoundError:
            logger.warning("Book %s vanished during delete; delete dropped", book_id)
            return False
        except RuntimeError as e:
            self._report_failure("delete", e)
            return False
        return True

    def ingest_in_background(
        self, source: ImageSource, callback: Callable[[Optional[bytes]], None]
    ) -> ThumbnailWorker:
        """Run the thumbnail pipeline on the thread pool.

        ``callback`` receives the cover bytes, or None if ingest failed. It
        runs on the coordinator's thread once that thread processes events.
        Pass the bytes to ``add_book(cover_image=...)`` or
        ``edit_book(new_cover_image=...)`` to store them without re-encoding.
        """
        worker = ThumbnailWorker(self.thumbnail_service, source)
        request = _IngestRequest(worker, callback, self)
        self._active_ingests.add(request)

        worker.signals.result.connect(request.on_result)
        worker.signals.error.connect(request.on_error)
        worker.signals.finished.connect(request.on_finished)
        pool = self._thread_pool or QThreadPool.globalInstance()
        pool.start(worker)
        return worker

    @property
    def pending_ingests(self) -> int:
        return len(self._active_ingests)

    def _ingest_cover(self, source: Optional[ImageSource]) -> Optional[bytes]:
        if source is None:
            return None
        try:
            return self.thumbnail_service.ingest(source)
        except ThumbnailError as e:
            logger.warning("Cover ingest failed, continuing without cover: %s", e)
            return None

    def _report_failure(self, action: str, error: Exception):
        logger.error("Failed to %s book: %s", action, error)
        self.operation_failed.emit(f"Could not {action} the book. Please try again.")

    @staticmethod
    def _validate(title: str, author: str):
        title = (title or "").strip()
        author = (author or "").strip()
        if not title:
            raise ValueError("Book title cannot be empty")
        if not author:
            raise ValueError("Book author cannot be empty")
        return title, author
