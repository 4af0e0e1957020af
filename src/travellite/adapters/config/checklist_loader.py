"""Security checklist loader."""

import logging
from decimal import Decimal, InvalidOperation
from typing import Any

from travellite.adapters.config.app_config import AppConfig
from travellite.domain.models.booking import RiskLevel
from travellite.domain.models.checklist import ChecklistItem, ItemCategory

logger = logging.getLogger(__name__)


def _risk_level(value: Any, owner: str) -> RiskLevel:
    try:
        return RiskLevel(str(value).lower())
    except ValueError:
        raise ValueError(f"{owner} has unknown risk_level '{value}'") from None


def _decimal(value: Any, owner: str, key: str) -> Decimal:
    try:
        number = Decimal(str(value))
    except InvalidOperation:
        raise ValueError(f"{owner} has a non-numeric '{key}'") from None
    if not number.is_finite() or number < 0:
        raise ValueError(f"{owner} needs a non-negative '{key}'")
    return number


class ChecklistLoader:
    """Loads checklist categories and items from app config."""

    @staticmethod
    def load(config: AppConfig) -> tuple[list[ItemCategory], list[ChecklistItem]]:
        """Load categories and items.

        Raises:
            ValueError: On a missing key, a bad value, a duplicate id or an item
                pointing at an unknown category.
        """
        data = config.get_checklist_config()

        categories: list[ItemCategory] = []
        for index, entry in enumerate(data["categories"]):
            if isinstance(entry, dict):
                categories.append(ChecklistLoader._parse_category(entry, index))
        category_ids = {c.id for c in categories}
        if len(category_ids) != len(categories):
            raise ValueError("Duplicate checklist category id in configuration")

        items: list[ChecklistItem] = []
        for index, entry in enumerate(data["items"]):
            if not isinstance(entry, dict):
                continue
            item = ChecklistLoader._parse_item(entry, index)
            if item.category_id not in category_ids:
                raise ValueError(
                    f"Checklist item '{item.id}' refers to unknown category '{item.category_id}'"
                )
            items.append(item)
        if len({i.id for i in items}) != len(items):
            raise ValueError("Duplicate checklist item id in configuration")

        logger.info(
            f"Loaded {len(categories)} checklist categorie(s) and {len(items)} item(s) "
            f"from {config.config_file}"
        )
        return categories, items

    @staticmethod
    def _parse_category(data: dict[str, Any], index: int) -> ItemCategory:
        for key in ("id", "name", "description"):
            if key not in data:
                raise ValueError(f"Checklist category #{index + 1} is missing '{key}'")
        owner = f"Checklist category '{data['id']}'"

        return ItemCategory(
            id=str(data["id"]),
            name=str(data["name"]),
            description=str(data["description"]),
            icon=str(data.get("icon", "📦")),
            color=str(data.get("color", "#6B7280")),
            risk_level=_risk_level(data.get("risk_level", "medium"), owner),
            insurance_multiplier=_decimal(
                data.get("insurance_multiplier", "1.0"), owner, "insurance_multiplier"
            ),
            sort_order=int(data.get("sort_order", 0)),
            is_active=bool(data.get("is_active", True)),
        )

    @staticmethod
    def _parse_item(data: dict[str, Any], index: int) -> ChecklistItem:
        for key in ("id", "category", "name", "description", "min_value", "risk_level"):
            if key not in data:
                raise ValueError(f"Checklist item #{index + 1} is missing '{key}'")
        owner = f"Checklist item '{data['id']}'"

        min_value = _decimal(data["min_value"], owner, "min_value")
        max_value = _decimal(data.get("max_value", data["min_value"]), owner, "max_value")
        if max_value < min_value:
            raise ValueError(f"{owner} has max_value below min_value")

        return ChecklistItem(
            id=str(data["id"]),
            category_id=str(data["category"]),
            name=str(data["name"]),
            description=str(data["description"]),
            min_value=min_value,
            max_value=max_value,
            risk_level=_risk_level(data["risk_level"], owner),
            fragile=bool(data.get("fragile", False)),
            requires_special_handling=bool(data.get("requires_special_handling", False)),
            insurance_required=bool(data.get("insurance_required", False)),
            customizable=bool(data.get("customizable", True)),
            common_brands=tuple(str(b) for b in data.get("common_brands", [])),
            tags=tuple(str(t).lower() for t in data.get("tags", [])),
            popularity=int(data.get("popularity", 0)),
            is_active=bool(data.get("is_active", True)),
        )
