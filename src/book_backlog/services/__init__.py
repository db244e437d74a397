"""Services layer - configuration, collation and image processing."""

from book_backlog.services.collation import CollationKeyFactory
from book_backlog.services.settings_manager import SettingsManager
from book_backlog.services.thumbnail_service import (
    ThumbnailError,
    ThumbnailService,
    calculate_sample_size,
)
from book_backlog.services.thumbnail_worker import ThumbnailWorker, ThumbnailWorkerSignals

__all__ = [
    "CollationKeyFactory",
    "SettingsManager",
    "ThumbnailError",
    "ThumbnailService",
    "calculate_sample_size",
    "ThumbnailWorker",
    "ThumbnailWorkerSignals",
]
