"""Domain entity for a catalogued (owned, possibly unread) book."""

import time
import uuid
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional


class BookStatus(Enum):
    """Reading progress of a book. Persisted by name."""

    UNREAD = "UNREAD"
    READING = "READING"
    READ = "READ"


def new_book_id() -> str:
    """Generate an opaque, unique record identifier."""
    return str(uuid.uuid4())


def current_millis() -> int:
    """Current wall-clock time as Unix milliseconds."""
    return int(time.time() * 1000)


def normalize_memo(memo: Optional[str]) -> Optional[str]:
    """Blank memos are stored as absent."""
    if memo is None or not memo.strip():
        return None
    return memo


@dataclass(frozen=True)
class BookRecord:
    """Represents a single book in the catalog.

    Attributes:
        id: Opaque unique identifier (UUID string), immutable.
        title: Display title (non-empty).
        author: Author name (non-empty).
        cover_image: Compressed JPEG thumbnail bytes, if a cover was provided.
        status: Current reading status.
        added_date: Unix milliseconds when the book was added, immutable.
        read_date: Unix milliseconds of the most recent transition into READ.
            Present only while status is READ.
        memo: Optional free-form note.
    """

    id: str
    title: str
    author: str
    cover_image: Optional[bytes] = None
    status: BookStatus = BookStatus.UNREAD
    added_date: int = 0
    read_date: Optional[int] = None
    memo: Optional[str] = None

    @classmethod
    def create(
        cls,
        title: str,
        author: str,
        memo: Optional[str] = None,
        cover_image: Optional[bytes] = None,
        now: Optional[int] = None,
    ) -> "BookRecord":
        """Build a new UNREAD record with a fresh id and added_date."""
        return cls(
            id=new_book_id(),
            title=title,
            author=author,
            cover_image=cover_image,
            status=BookStatus.UNREAD,
            added_date=current_millis() if now is None else now,
            read_date=None,
            memo=normalize_memo(memo),
        )

    def with_changes(self, **changes) -> "BookRecord":
        """Return a copy with the given fields replaced; id and added_date are kept."""
        if "id" in changes or "added_date" in changes:
            raise ValueError("id and added_date cannot change after creation")
        return replace(self, **changes)
