"""Checklist service - browsing and extending the security checklist catalog."""

import logging
import uuid
from decimal import Decimal
from enum import StrEnum
from typing import TYPE_CHECKING

from travellite.domain.errors import CategoryNotFoundError, ItemNotFoundError, ValidationError
from travellite.domain.models.booking import RiskLevel
from travellite.domain.models.checklist import (
    RISK_ORDER,
    ChecklistItem,
    ChecklistStats,
    ItemCategory,
)

if TYPE_CHECKING:
    from travellite.domain.ports import BookingRepository, ChecklistCatalog

logger = logging.getLogger(__name__)

MAX_RESULTS = 50
MIN_QUERY_LENGTH = 2


class ItemSort(StrEnum):
    """Orderings offered when listing the items of a category."""

    POPULARITY = "popularity"
    NAME = "name"
    VALUE_LOW = "value_low"
    VALUE_HIGH = "value_high"
    RISK = "risk"


def _cap(limit: int) -> int:
    if limit < 1:
        raise ValidationError("limit must be at least 1", field="limit")
    return min(limit, MAX_RESULTS)


def _by_popularity(item: ChecklistItem) -> tuple[int, str]:
    return -item.popularity, item.name


_SORT_KEYS = {
    ItemSort.POPULARITY: _by_popularity,
    ItemSort.NAME: lambda item: item.name,
    ItemSort.VALUE_LOW: lambda item: item.min_value,
    ItemSort.VALUE_HIGH: lambda item: -item.max_value,
    ItemSort.RISK: lambda item: (-RISK_ORDER[item.risk_level], -item.popularity),
}


class ChecklistService:
    """Query and extension side of the security checklist."""

    def __init__(self, catalog: "ChecklistCatalog", bookings: "BookingRepository") -> None:
        self._catalog = catalog
        self._bookings = bookings

    def categories(self) -> list[tuple[ItemCategory, list[ChecklistItem]]]:
        """Active categories in display order, each with its items by popularity."""
        return [
            (category, sorted(self._catalog.items(category.id), key=_by_popularity))
            for category in self._catalog.categories()
        ]

    def items_in_category(
        self,
        category_id: str,
        search: str = "",
        sort_by: ItemSort = ItemSort.POPULARITY,
        limit: int = 50,
    ) -> list[ChecklistItem]:
        """List a category's items, optionally filtered by a search term.

        Raises:
            CategoryNotFoundError: If the category does not exist.
        """
        if self._catalog.get_category(category_id) is None:
            raise CategoryNotFoundError(category_id)
        needle = search.strip()
        items = [
            item for item in self._catalog.items(category_id) if not needle or item.matches(needle)
        ]
        items.sort(key=_SORT_KEYS[sort_by])
        return items[: _cap(limit)]

    def search(
        self,
        query: str,
        category_id: str | None = None,
        risk_level: RiskLevel | None = None,
        limit: int = 20,
    ) -> list[ChecklistItem]:
        """Search items across categories by name, description, tags or brands.

        Raises:
            ValidationError: If the query is shorter than two characters.
        """
        query = (query or "").strip()
        if len(query) < MIN_QUERY_LENGTH:
            raise ValidationError("Search query must be at least 2 characters long", field="q")
        items = [
            item
            for item in self._catalog.items(category_id)
            if item.matches(query) and (risk_level is None or item.risk_level == risk_level)
        ]
        items.sort(key=_by_popularity)
        return items[: _cap(limit)]

    def popular(self, category_id: str | None = None, limit: int = 10) -> list[ChecklistItem]:
        items = sorted(self._catalog.items(category_id), key=_by_popularity)
        return items[: _cap(limit)]

    def get_item(self, item_id: str) -> ChecklistItem:
        item = self._catalog.get_item(item_id)
        if item is None:
            raise ItemNotFoundError(item_id)
        return item

    def create_custom_item(
        self,
        name: str,
        description: str,
        category_id: str,
        estimated_value: Decimal,
        risk_level: RiskLevel = RiskLevel.MEDIUM,
        fragile: bool = False,
        brand: str | None = None,
        tags: tuple[str, ...] = (),
    ) -> ChecklistItem:
        """Add an item a customer could not find in the predefined list.

        Raises:
            ValidationError: If a required field is blank or the value is not positive.
            CategoryNotFoundError: If the category does not exist.
        """
        name, description = (name or "").strip(), (description or "").strip()
        required = (
            ("name", name),
            ("description", description),
            ("category_id", category_id),
            ("estimated_value", estimated_value),
        )
        missing = next((key for key, value in required if not value), None)
        if missing is not None:
            raise ValidationError(
                "Name, description, category, and estimated value are required", field=missing
            )
        if estimated_value < 0:
            raise ValidationError(
                "Estimated value cannot be negative", field="estimated_value"
            )
        if self._catalog.get_category(category_id) is None:
            raise CategoryNotFoundError(category_id)

        item = ChecklistItem(
            id=f"custom-{uuid.uuid4().hex[:12]}",
            category_id=category_id,
            name=name,
            description=description,
            min_value=estimated_value,
            max_value=estimated_value,
            risk_level=risk_level,
            fragile=fragile,
            common_brands=(brand.strip(),) if brand and brand.strip() else (),
            tags=tuple(tag.strip().lower() for tag in tags if tag.strip()),
            customizable=True,
            popularity=0,
        )
        self._catalog.add_item(item)
        logger.info(f"Added custom checklist item {item.id} '{item.name}' to {category_id}")
        return item

    def stats(self) -> ChecklistStats:
        """Catalog size, risk distribution and how many items bookings declared."""
        items = self._catalog.items()
        distribution: dict[RiskLevel, int] = {}
        for item in items:
            distribution[item.risk_level] = distribution.get(item.risk_level, 0) + 1
        declared = sum(len(booking.security_items) for booking in self._bookings.list_all())
        return ChecklistStats(
            total_categories=len(self._catalog.categories()),
            total_items=len(items),
            total_declared_items=declared,
            risk_distribution=distribution,
        )
