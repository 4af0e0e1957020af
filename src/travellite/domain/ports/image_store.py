"""Image store port."""

from typing import Protocol

from travellite.domain.models.booking import PhotoAngle


class ImageStore(Protocol):
    """Port for persisting luggage photos."""

    def store(self, angle: PhotoAngle, data: bytes, content_type: str) -> str:
        """Store a photo and return the URL it can be fetched from."""
        ...

    def fetch(self, name: str) -> tuple[bytes, str] | None:
        """Return the bytes and content type of a stored photo, if present."""
        ...
