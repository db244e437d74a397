"""
Book Backlog - a personal catalog for books you own but have not read yet.

This package provides:
- A SQLite-backed book store that publishes full snapshots on change
- A reactive query engine (sort + status filter, completed books last)
- Bounded-memory cover thumbnail ingestion
"""

__version__ = "0.1.0"

# Make key components available at package level
from book_backlog.core import BookRecord, BookStatus, SortOrder
from book_backlog.coordinators import CatalogCoordinator, CatalogQueryEngine

__all__ = [
    "BookRecord",
    "BookStatus",
    "SortOrder",
    "CatalogCoordinator",
    "CatalogQueryEngine",
]
