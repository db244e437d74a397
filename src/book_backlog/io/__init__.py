"""I/O layer - Data access for persistence."""

from .book_repository import BookNotFoundError, BookRepository
from .database_manager import DatabaseManager

__all__ = ["DatabaseManager", "BookRepository", "BookNotFoundError"]
