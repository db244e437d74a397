"""Composition root for the book backlog catalog."""

from typing import Callable, Optional

from book_backlog.coordinators import CatalogCoordinator, CatalogQueryEngine
from book_backlog.core import current_millis
from book_backlog.io import BookRepository, DatabaseManager
from book_backlog.services import CollationKeyFactory, SettingsManager, ThumbnailService


class CatalogApplication:
    """
    Builds and owns every catalog component for the lifetime of the process.

    This is the only place that knows how to instantiate and wire the
    components. Create it once at startup and close it at shutdown.
    """

    def __init__(
        self,
        settings: Optional[SettingsManager] = None,
        db_path=None,
        clock: Callable[[], int] = current_millis,
    ):
        # 1. Configuration
        self.settings = settings or SettingsManager()

        # 2. Infrastructure
        self.database = DatabaseManager(db_path or self.settings.get_database_path())
        self.database.ensure_schema()
        self.book_repository = BookRepository(self.database.connection)
        self.thumbnail_service = ThumbnailService(
            max_width=self.settings.get_thumbnail_width(),
            max_height=self.settings.get_thumbnail_height(),
            quality=self.settings.get_thumbnail_quality(),
        )
        self.collation = CollationKeyFactory(self.settings.get_collation_locale())

        # 3. Coordinators (Dependency Injection)
        self.query_engine = CatalogQueryEngine(sort_key=self.collation.sort_key)
        self.coordinator = CatalogCoordinator(
            book_repository=self.book_repository,
            thumbnail_service=self.thumbnail_service,
            clock=clock,
        )

        # 4. Signal wiring: store snapshots feed the query engine
        self.book_repository.books_changed.connect(self.query_engine.on_snapshot)
        self.query_engine.on_snapshot(self.book_repository.get_all_books())
        self._closed = False

    def close(self) -> None:
        if self._closed:
            return
        self.book_repository.books_changed.disconnect(self.query_engine.on_snapshot)
        self.database.close()
        self._closed = True

    def __enter__(self) -> "CatalogApplication":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
