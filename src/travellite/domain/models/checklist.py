"""Security checklist catalog models."""

from dataclasses import dataclass, field
from decimal import Decimal

from travellite.domain.models.booking import RiskLevel

RISK_ORDER: dict[RiskLevel, int] = {
    RiskLevel.LOW: 0,
    RiskLevel.MEDIUM: 1,
    RiskLevel.HIGH: 2,
    RiskLevel.CRITICAL: 3,
}


@dataclass(frozen=True)
class ItemCategory:
    """Group of valuables offered on the security checklist."""

    id: str
    name: str
    description: str
    icon: str = "📦"
    color: str = "#6B7280"
    risk_level: RiskLevel = RiskLevel.MEDIUM
    insurance_multiplier: Decimal = Decimal("1.0")
    sort_order: int = 0
    is_active: bool = True


@dataclass(frozen=True)
class ChecklistItem:
    """A kind of valuable a customer can declare, with its typical value range."""

    id: str
    category_id: str
    name: str
    description: str
    min_value: Decimal
    max_value: Decimal
    risk_level: RiskLevel
    fragile: bool = False
    requires_special_handling: bool = False
    insurance_required: bool = False
    customizable: bool = True
    common_brands: tuple[str, ...] = field(default=())
    tags: tuple[str, ...] = field(default=())
    popularity: int = 0
    is_active: bool = True

    def matches(self, needle: str) -> bool:
        """Case-insensitive match on name, description, tags or brands."""
        needle = needle.lower()
        if needle in self.name.lower() or needle in self.description.lower():
            return True
        return any(needle in value.lower() for value in (*self.tags, *self.common_brands))


@dataclass(frozen=True)
class ChecklistStats:
    """Size of the checklist catalog and how often items were declared."""

    total_categories: int
    total_items: int
    total_declared_items: int
    risk_distribution: dict[RiskLevel, int]
