"""Data access layer for book record persistence."""

import logging
import sqlite3
from typing import List, Optional

from PySide6.QtCore import QObject, Signal

from book_backlog.core import BookRecord, BookStatus

logger = logging.getLogger(__name__)


class BookNotFoundError(RuntimeError):
    """Raised when an update or delete targets an id that no longer exists."""


_COLUMNS = "id, title, author, cover_image, status, added_date, read_date, memo"


class BookRepository(QObject):
    """Manages persistence of book records and publishes snapshots.

    Every successful mutation emits ``books_changed`` with the full, freshly
    read record set (ordered by added_date descending). The whole table is
    re-read on each change; this is adequate for personal catalogs of a few
    hundred books and is the scaling limit of this store.

    Storage failures raise RuntimeError after rolling back the failed
    statement, so other records are never affected.

    Signals:
        books_changed: Emitted with List[BookRecord] after insert/update/delete.
    """

    books_changed = Signal(object)

    def __init__(self, connection: sqlite3.Connection) -> None:
        """Initialize repository with database connection.

        Args:
            connection: SQLite connection with the books schema created.

        Raises:
            RuntimeError: If connection is None.
        """
        super().__init__()
        if connection is None:
            raise RuntimeError("Database connection required")
        self.connection = connection
        self.connection.row_factory = sqlite3.Row

    def get_all_books(self) -> List[BookRecord]:
        """Return the current full snapshot, newest first.

        Raises:
            RuntimeError: If the query fails.
        """
        try:
            cur = self.connection.cursor()
            cur.execute(f"SELECT {_COLUMNS} FROM books ORDER BY added_date DESC")
            return [self._row_to_book(row) for row in cur.fetchall()]
        except sqlite3.Error as e:
            raise RuntimeError(f"Failed to retrieve books: {e}") from e

    def get_book_by_id(self, book_id: str) -> Optional[BookRecord]:
        """Retrieve a book by id, or None when it does not exist."""
        try:
            cur = self.connection.cursor()
            cur.execute(f"SELECT {_COLUMNS} FROM books WHERE id = ?", (book_id,))
            row = cur.fetchone()
        except sqlite3.Error as e:
            raise RuntimeError(f"Failed to retrieve book: {e}") from e
        return self._row_to_book(row) if row else None

    def insert_book(self, book: BookRecord) -> BookRecord:
        """Insert a book, replacing any existing row with the same id."""
        self._execute(
            f"INSERT OR REPLACE INTO books ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
            self._book_to_params(book),
            "insert",
        )
        self._publish()
        return book

    def update_book(self, book: BookRecord) -> BookRecord:
        """Overwrite all mutable fields of an existing book.

        Raises:
            BookNotFoundError: If the book does not exist.
            RuntimeError: If the write fails.
        """
        params = self._book_to_params(book)
        cur = self._execute(
            """
            UPDATE books
            SET title = ?, author = ?, cover_image = ?, status = ?,
                added_date = ?, read_date = ?, memo = ?
            WHERE id = ?
            """,
            params[1:] + params[:1],
            "update",
        )
        if cur.rowcount == 0:
            raise BookNotFoundError(f"Book not found: {book.id}")
        self._publish()
        return book

    def delete_book(self, book: BookRecord) -> None:
        """Remove a book.

        Raises:
            BookNotFoundError: If the book does not exist.
            RuntimeError: If the write fails.
        """
        cur = self._execute("DELETE FROM books WHERE id = ?", (book.id,), "delete")
        if cur.rowcount == 0:
            raise BookNotFoundError(f"Book not found: {book.id}")
        self._publish()

    def _execute(self, sql: str, params: tuple, action: str) -> sqlite3.Cursor:
        try:
            cur = self.connection.cursor()
            cur.execute(sql, params)
            self.connection.commit()
            return cur
        except sqlite3.Error as e:
            self.connection.rollback()
            logger.error("Book %s failed, rolled back: %s", action, e)
            raise RuntimeError(f"Failed to {action} book: {e}") from e

    def _publish(self) -> None:
        # The write is already committed; a failed re-read is not a failed mutation.
        try:
            books = self.get_all_books()
        except RuntimeError as e:
            logger.error("Book snapshot refresh failed after commit: %s", e)
            return
        self.books_changed.emit(books)

    @staticmethod
    def _book_to_params(book: BookRecord) -> tuple:
        return (
            book.id,
            book.title,
            book.author,
            sqlite3.Binary(book.cover_image) if book.cover_image is not None else None,
            book.status.name,
            book.added_date,
            book.read_date,
            book.memo,
        )

    @staticmethod
    def _row_to_book(row: sqlite3.Row) -> BookRecord:
        """Convert database row to BookRecord entity."""
        cover = row["cover_image"]
        return BookRecord(
            id=row["id"],
            title=row["title"],
            author=row["author"],
            cover_image=bytes(cover) if cover is not None else None,
            status=BookStatus[row["status"]],
            added_date=row["added_date"],
            read_date=row["read_date"],
            memo=row["memo"],
        )
