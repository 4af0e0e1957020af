"""Error details domain model."""

from pydantic import BaseModel, ConfigDict


class ErrorDetails(BaseModel):
    """Discriminated description of a failure: its kind, a reason and the offending field."""

    model_config = ConfigDict(frozen=True)

    kind: str
    reason: str
    field: str | None = None
