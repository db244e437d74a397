"""Settings Manager - Handles catalog storage and thumbnail configuration."""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

DEFAULT_THUMBNAIL_WIDTH = 300
DEFAULT_THUMBNAIL_HEIGHT = 450
DEFAULT_THUMBNAIL_QUALITY = 80
DEFAULT_COLLATION_LOCALE = "ja_JP"


class SettingsManager:
    """
    Manages application settings.

    Reads values from a .env file in the project root, with the process
    environment taking precedence.
    """

    def __init__(self, project_root: Optional[Path] = None):
        """
        Initialize settings manager.

        Args:
            project_root: Path to project root where .env is located.
                         If None, searches upward from current file.
        """
        if project_root is None:
            current = Path(__file__).resolve()
            project_root = current.parent.parent.parent.parent

        self._project_root = Path(project_root)
        load_dotenv(dotenv_path=self._project_root / ".env")

    def get_database_path(self) -> Path:
        """Location of the SQLite catalog file."""
        value = os.getenv("BOOK_BACKLOG_DB_PATH")
        if value and value.strip():
            return Path(value.strip()).expanduser()
        return Path.home() / ".book_backlog" / "catalog.db"

    def get_thumbnail_width(self) -> int:
        return self._get_positive_int("BOOK_BACKLOG_THUMBNAIL_WIDTH", DEFAULT_THUMBNAIL_WIDTH)

    def get_thumbnail_height(self) -> int:
        return self._get_positive_int("BOOK_BACKLOG_THUMBNAIL_HEIGHT", DEFAULT_THUMBNAIL_HEIGHT)

    def get_thumbnail_quality(self) -> int:
        """JPEG quality, clamped to 0..100."""
        raw = os.getenv("BOOK_BACKLOG_THUMBNAIL_QUALITY")
        try:
            quality = int(raw.strip()) if raw else DEFAULT_THUMBNAIL_QUALITY
        except ValueError:
            quality = DEFAULT_THUMBNAIL_QUALITY
        return max(0, min(100, quality))

    def get_collation_locale(self) -> str:
        """Locale name used for title/author ordering."""
        value = os.getenv("BOOK_BACKLOG_COLLATION_LOCALE")
        return value.strip() if value and value.strip() else DEFAULT_COLLATION_LOCALE

    def reload_env(self) -> None:
        """Reload environment variables from .env file."""
        load_dotenv(dotenv_path=self._project_root / ".env", override=True)

    @staticmethod
    def _get_positive_int(name: str, default: int) -> int:
        raw = os.getenv(name)
        if not raw or not raw.strip():
            return default
        try:
            value = int(raw.strip())
        except ValueError:
            return default
        return value if value > 0 else default
