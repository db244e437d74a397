"""Thumbnail generation for book cover images.

Two-pass bounded decode with Qt's QImageReader: the first pass reads only
the header to learn the source dimensions, the second decodes directly at a
power-of-two reduced size, so a multi-megapixel photo never has to be
materialised at full resolution. The result is re-encoded as JPEG bytes.

Fail-fast philosophy: ingest raises ThumbnailError on failure.
"""

from pathlib import Path
from typing import Optional, Tuple, Union

from PySide6.QtCore import QBuffer, QByteArray, QIODevice, QSize
from PySide6.QtGui import QImage, QImageReader

from book_backlog.services.settings_manager import (
    DEFAULT_THUMBNAIL_HEIGHT,
    DEFAULT_THUMBNAIL_QUALITY,
    DEFAULT_THUMBNAIL_WIDTH,
)

ImageSource = Union[Path, str, bytes, bytearray]


class ThumbnailError(RuntimeError):
    """Raised when a source image cannot be probed, decoded or encoded."""


def calculate_sample_size(width: int, height: int, max_width: int, max_height: int) -> int:
    """Largest power-of-two divisor that keeps both dimensions at or above the bounds."""
    sample_size = 1
    if height > max_height or width > max_width:
        half_height = height // 2
        half_width = width // 2
        while half_height // sample_size >= max_height and half_width // sample_size >= max_width:
            sample_size *= 2
    return sample_size


class ThumbnailService:
    """Turns arbitrary source images into bounded-size JPEG cover bytes.

    Holds no mutable state; a single instance can be shared across
    worker threads.
    """

    def __init__(
        self,
        max_width: int = DEFAULT_THUMBNAIL_WIDTH,
        max_height: int = DEFAULT_THUMBNAIL_HEIGHT,
        quality: int = DEFAULT_THUMBNAIL_QUALITY,
    ) -> None:
        if max_width <= 0 or max_height <= 0:
            raise ValueError("Thumbnail bounds must be positive")
        if not 0 <= quality <= 100:
            raise ValueError("JPEG quality must be between 0 and 100")
        self.max_width = max_width
        self.max_height = max_height
        self.quality = quality

    def ingest(
        self,
        source: ImageSource,
        max_width: Optional[int] = None,
        max_height: Optional[int] = None,
        quality: Optional[int] = None,
    ) -> bytes:
        """Produce compressed cover bytes from a source image.

        Args:
            source: Path to an image file, or the encoded image bytes.
            max_width: Target width bound (defaults to the service setting).
            max_height: Target height bound (defaults to the service setting).
            quality: JPEG quality 0-100 (defaults to the service setting).

        Returns:
            JPEG-encoded bytes.

        Raises:
            ThumbnailError: If probing, decoding or encoding fails.
        """
        max_width = self.max_width if max_width is None else max_width
        max_height = self.max_height if max_height is None else max_height
        quality = self.quality if quality is None else quality

        width, height = self.probe_size(source)
        sample_size = calculate_sample_size(width, height, max_width, max_height)
        image = self.decode(source, sample_size)
        return self.encode_jpeg(image, quality)

    def probe_size(self, source: ImageSource) -> Tuple[int, int]:
        """Read (width, height) from the image header without decoding pixels."""
        reader, _device = self._open_reader(source)
        size = reader.size()
        if not size.isValid() or size.width() <= 0 or size.height() <= 0:
            raise ThumbnailError(f"Failed to read image size: {reader.errorString()}")
        return size.width(), size.height()

    def decode(self, source: ImageSource, sample_size: int) -> QImage:
        """Decode the image at 1/sample_size of its native dimensions."""
        reader, _device = self._open_reader(source)
        size = reader.size()
        if not size.isValid():
            raise ThumbnailError(f"Failed to read image size: {reader.errorString()}")
        if sample_size > 1:
            reader.setScaledSize(
                QSize(max(1, size.width() // sample_size), max(1, size.height() // sample_size))
            )
        image = reader.read()
        if image.isNull():
            raise ThumbnailError(f"Failed to decode image: {reader.errorString()}")
        return image

    @staticmethod
    def encode_jpeg(image: QImage, quality: int) -> bytes:
        """Compress a decoded image to JPEG bytes."""
        if image.hasAlphaChannel():
            image = image.convertToFormat(QImage.Format.Format_RGB32)
        buffer = QBuffer()
        if not buffer.open(QIODevice.OpenModeFlag.WriteOnly):
            raise ThumbnailError("Failed to open encode buffer")
        try:
            if not image.save(buffer, "JPG", quality):
                raise ThumbnailError("Failed to encode thumbnail as JPEG")
        finally:
            buffer.close()
        data = buffer.data().data()
        if not data:
            raise ThumbnailError("JPEG encoder produced no data")
        return bytes(data)

    @staticmethod
    def _open_reader(source: ImageSource):
        """Return a QImageReader and the device it reads from (kept alive by the caller)."""
        if isinstance(source, (bytes, bytearray)):
            if not source:
                raise ThumbnailError("Image data is empty")
            buffer = QBuffer()
            buffer.setData(QByteArray(bytes(source)))
            if not buffer.open(QIODevice.OpenModeFlag.ReadOnly):
                raise ThumbnailError("Failed to open image buffer")
            return QImageReader(buffer), buffer

        img_path = Path(source)
        if not img_path.is_file():
            raise ThumbnailError(f"Image path does not exist: {img_path}")
        return QImageReader(str(img_path)), None
