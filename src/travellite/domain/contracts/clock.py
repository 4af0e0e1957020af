"""Protocol for reading the current time."""

from datetime import datetime
from typing import Protocol


class Clock(Protocol):
    """Source of timezone-aware timestamps."""

    def now(self) -> datetime:
        """Return the current time."""
        ...
