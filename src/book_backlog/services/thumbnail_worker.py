"""Background worker for cover ingestion using Qt threading."""

from PySide6.QtCore import QObject, QRunnable, Signal, Slot

from book_backlog.services.thumbnail_service import ImageSource, ThumbnailService


class ThumbnailWorkerSignals(QObject):
    """
    Signals for communicating results from worker threads.

    QRunnable doesn't inherit from QObject, so we need a separate
    QObject to hold the signals.
    """
    finished = Signal()
    error = Signal(str)
    result = Signal(object)  # bytes


class ThumbnailWorker(QRunnable):
    """
    Worker that runs the thumbnail pipeline in a background thread.

    Decoding and encoding block, so they must stay off the UI thread.
    """

    def __init__(
        self,
        thumbnail_service: ThumbnailService,
        source: ImageSource,
    ):
        super().__init__()
        self.thumbnail_service = thumbnail_service
        self.source = source
        self.signals = ThumbnailWorkerSignals()
        self.setAutoDelete(True)

    @Slot()
    def run(self):
        """Execute the ingest in the background thread."""
        try:
            data = self.thumbnail_service.ingest(self.source)
            self.signals.result.emit(data)
        except RuntimeError as e:
            self.signals.error.emit(str(e))
        finally:
            self.signals.finished.emit()
