"""In-memory store for uploaded luggage photos."""

import logging
import threading
import uuid

from travellite.domain.errors import ValidationError
from travellite.domain.models.booking import PhotoAngle

logger = logging.getLogger(__name__)

# Accepted upload types and the extension used in the returned URL
ALLOWED_CONTENT_TYPES: dict[str, str] = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
}
MAX_IMAGE_BYTES = 5 * 1024 * 1024


class InMemoryImageStore:
    """Keeps photo bytes in memory and hands out URLs below ``base_url``."""

    def __init__(self, base_url: str = "/images") -> None:
        self._base_url = base_url.rstrip("/")
        self._lock = threading.Lock()
        self._images: dict[str, tuple[bytes, str]] = {}

    def store(self, angle: PhotoAngle, data: bytes, content_type: str) -> str:
        """Store a photo and return its URL.

        Raises:
            ValidationError: If the upload is empty, too large or not an image.
        """
        extension = ALLOWED_CONTENT_TYPES.get(content_type)
        if extension is None:
            raise ValidationError(
                f"Unsupported image type '{content_type}', expected one of "
                f"{', '.join(ALLOWED_CONTENT_TYPES)}",
                field="content_type",
            )
        if not data:
            raise ValidationError("Image is empty", field="image")
        if len(data) > MAX_IMAGE_BYTES:
            raise ValidationError("Image exceeds the 5 MB limit", field="image")

        name = f"{angle.value}-{uuid.uuid4().hex}.{extension}"
        with self._lock:
            self._images[name] = (data, content_type)
        logger.info(f"Stored {angle.value} luggage photo {name} ({len(data)} bytes)")
        return f"{self._base_url}/{name}"

    def fetch(self, name: str) -> tuple[bytes, str] | None:
        """Return the bytes and content type of a stored photo."""
        with self._lock:
            return self._images.get(name)
