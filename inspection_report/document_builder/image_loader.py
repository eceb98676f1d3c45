"""Image Loader Module

Loads local header images and decodes fetched chart images into drawable
ReportLab image handles.
"""
import io
import logging
import os
from typing import Optional

from PIL import Image as PILImage
from reportlab.lib.utils import ImageReader

from ..exceptions import ImageLoadError

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = (".png", ".jpg", ".jpeg")


class ImageLoader:
    """Loads images from a directory, caching decoded handles per render."""

    def __init__(self, images_dir: Optional[str] = None):
        """
        Initialize image loader.

        Args:
            images_dir: Directory holding local images. If None, load() always
                        returns None and callers draw their vector fallback.
        """
        self.images_dir = images_dir
        self._cache = {}

    def load(self, filename: str) -> Optional[ImageReader]:
        """
        Load a local image by filename.

        Args:
            filename: File name inside images_dir (e.g., "logo_pic.png")

        Returns:
            ImageReader, or None when no images directory is configured

        Raises:
            ImageLoadError: If the file is missing, has an unsupported format or is corrupt
        """
        if not self.images_dir:
            return None
        if filename in self._cache:
            return self._cache[filename]

        image_path = os.path.join(self.images_dir, filename)
        if not filename.lower().endswith(SUPPORTED_EXTENSIONS):
            raise ImageLoadError(image_path, "unsupported image format")
        if not os.path.exists(image_path):
            raise ImageLoadError(image_path, "file not found")

        try:
            with PILImage.open(image_path) as img:
                img.verify()
            reader = ImageReader(image_path)
        except Exception as e:
            raise ImageLoadError(image_path, str(e)) from e

        logger.debug("Loaded image %s", image_path)
        self._cache[filename] = reader
        return reader


def image_from_bytes(data: bytes, source: str = "<bytes>") -> ImageReader:
    """
    Decode raw image bytes into a drawable image.

    Args:
        data: PNG/JPEG bytes
        source: Description used in error messages (e.g., the chart URL)

    Returns:
        ImageReader

    Raises:
        ImageLoadError: If the bytes are not a decodable image
    """
    if not data:
        raise ImageLoadError(source, "empty image data")
    try:
        with PILImage.open(io.BytesIO(data)) as img:
            img.verify()
        return ImageReader(io.BytesIO(data))
    except Exception as e:
        raise ImageLoadError(source, f"not a valid image: {e}") from e
