"""Principal domain model."""

from dataclasses import dataclass
from enum import StrEnum

CUSTOMER_TIERS: tuple[str, ...] = ("new", "returning", "premium")


class PrincipalRole(StrEnum):
    """Role an authenticated caller acts in."""

    CUSTOMER = "customer"
    STAFF = "staff"
    ADMIN = "admin"


@dataclass(frozen=True)
class Principal:
    """Authenticated caller, already resolved from a token.

    Staff principals carry the id of the station they are assigned to. The
    tier is the customer's account tier as recorded server-side.
    """

    id: str
    role: PrincipalRole
    station_id: str | None = None
    tier: str = "new"

    @property
    def is_staff(self) -> bool:
        """Whether the principal works at a station counter."""
        return self.role is PrincipalRole.STAFF
