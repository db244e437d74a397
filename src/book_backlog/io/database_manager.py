"""SQLite-backed catalog persistence: connection and schema ownership."""

import sqlite3
from pathlib import Path
from typing import Union


class DatabaseManager:
    """Owns the SQLite connection and the books schema.

    Created once by the composition root and closed at shutdown.
    """

    def __init__(self, db_path: Union[Path, str]) -> None:
        if str(db_path) == ":memory:":
            self.db_path = None
            self.connection = sqlite3.connect(":memory:")
        else:
            self.db_path = Path(db_path)
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            self.connection = sqlite3.connect(self.db_path)
        self.connection.row_factory = sqlite3.Row

    def ensure_schema(self) -> None:
        """Create tables and indexes if they do not exist."""
        cur = self.connection.cursor()
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS books (
                id TEXT PRIMARY KEY NOT NULL,
                title TEXT NOT NULL,
                author TEXT NOT NULL,
                cover_image BLOB,
                status TEXT NOT NULL DEFAULT 'UNREAD',
                added_date INTEGER NOT NULL,
                read_date INTEGER,
                memo TEXT
            );
            """
        )
        cur.execute(
            """
            CREATE INDEX IF NOT EXISTS idx_books_added_date
            ON books(added_date);
            """
        )
        self.connection.commit()

    def close(self) -> None:
        self.connection.close()
