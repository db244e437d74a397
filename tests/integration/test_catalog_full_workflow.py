#!/usr/bin/env python3
"""
Integration tests for the catalog - full workflow validation.

Tests the complete journey through the composed application:
1. Open catalog → empty list
2. Add books (with and without covers) → list updates newest first
3. Change sort / filter → list recomputed
4. Mark a book read → it sinks to the bottom with a read date
5. Delete a book → removed from the list
6. Reopen the catalog → everything persisted
"""

import os
import tempfile
from pathlib import Path

import pytest
from PySide6.QtCore import QCoreApplication
from PySide6.QtGui import QColor, QImage

from book_backlog.core import BookStatus, SortOrder
from book_backlog.main import CatalogApplication
from book_backlog.services import SettingsManager


def ensure_qt_app():
    if QCoreApplication.instance() is None:
        QCoreApplication([])


@pytest.fixture
def workspace():
    ensure_qt_app()
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def settings(workspace, monkeypatch):
    monkeypatch.setenv("BOOK_BACKLOG_DB_PATH", str(workspace / "catalog.db"))
    monkeypatch.setenv("BOOK_BACKLOG_COLLATION_LOCALE", "en_US")
    monkeypatch.setenv("BOOK_BACKLOG_THUMBNAIL_WIDTH", "300")
    monkeypatch.setenv("BOOK_BACKLOG_THUMBNAIL_HEIGHT", "450")
    return SettingsManager(project_root=workspace)


@pytest.fixture
def cover_path(workspace):
    image = QImage(1200, 1800, QImage.Format.Format_RGB32)
    image.fill(QColor("navy"))
    path = workspace / "cover.png"
    assert image.save(str(path), "PNG")
    return path


def titles(books):
    return [book.title for book in books]


def test_full_catalog_workflow(settings, cover_path):
    clock_values = iter(range(1_000, 100_000, 1_000))

    with CatalogApplication(settings, clock=lambda: next(clock_values)) as app:
        published = []
        app.query_engine.books_changed.connect(lambda books: published.append(titles(books)))

        assert app.query_engine.books == []

        kokoro = app.coordinator.add_book("kokoro", "Natsume", source_image=cover_path)
        app.coordinator.add_book("Rashomon", "Akutagawa")
        app.coordinator.add_book("émile", "Rousseau", source_image=b"not an image")

        assert titles(app.query_engine.books) == ["émile", "Rashomon", "kokoro"]
        assert published[-1] == ["émile", "Rashomon", "kokoro"]

        stored_kokoro = app.book_repository.get_book_by_id(kokoro.id)
        assert stored_kokoro.cover_image[:2] == b"\xff\xd8"
        cover = QImage.fromData(stored_kokoro.cover_image)
        assert (cover.width(), cover.height()) == (300, 450)

        app.query_engine.set_sort_order(SortOrder.TITLE_ASC)
        assert titles(app.query_engine.books) == ["émile", "kokoro", "Rashomon"]

        read = app.coordinator.edit_book(kokoro.id, "kokoro", "Natsume", "great", BookStatus.READ)
        assert read.read_date is not None
        assert titles(app.query_engine.books) == ["émile", "Rashomon", "kokoro"]
        assert app.query_engine.books[-1].cover_image == stored_kokoro.cover_image

        app.query_engine.set_filter_status(BookStatus.READING)
        assert app.query_engine.books == []
        assert app.query_engine.is_filtered

        app.query_engine.set_filter_status(BookStatus.READ)
        assert titles(app.query_engine.books) == ["kokoro"]

        app.query_engine.set_filter_status(None)
        rashomon = next(b for b in app.query_engine.books if b.title == "Rashomon")
        assert app.coordinator.delete_book(rashomon.id) is True
        assert titles(app.query_engine.books) == ["émile", "kokoro"]

    with CatalogApplication(settings) as reopened:
        books = reopened.query_engine.books
        assert titles(books) == ["émile", "kokoro"]
        persisted = next(b for b in books if b.title == "kokoro")
        assert persisted.status is BookStatus.READ
        assert persisted.read_date == read.read_date
        assert persisted.memo == "great"
        assert persisted.added_date == kokoro.added_date


def test_close_is_idempotent(settings):
    app = CatalogApplication(settings)
    app.close()
    app.close()


def test_explicit_db_path_overrides_settings(settings, workspace):
    db_path = workspace / "other" / "books.db"
    with CatalogApplication(settings, db_path=db_path):
        pass
    assert db_path.exists()
    assert not Path(os.environ["BOOK_BACKLOG_DB_PATH"]).exists()
