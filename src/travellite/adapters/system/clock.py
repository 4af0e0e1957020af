"""Wall clock."""

from datetime import UTC, datetime


class SystemClock:
    """Clock returning the current UTC time."""

    def now(self) -> datetime:
        return datetime.now(UTC)
