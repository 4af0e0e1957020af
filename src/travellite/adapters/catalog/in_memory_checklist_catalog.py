"""Security checklist catalog held in memory."""

import threading

from travellite.domain.errors import ValidationError
from travellite.domain.models.checklist import ChecklistItem, ItemCategory


class InMemoryChecklistCatalog:
    """Categories and items in dicts; custom items can be added at runtime."""

    def __init__(self, categories: list[ItemCategory], items: list[ChecklistItem]) -> None:
        self._lock = threading.Lock()
        self._categories: dict[str, ItemCategory] = {c.id: c for c in categories}
        self._items: dict[str, ChecklistItem] = {}
        for item in items:
            self.add_item(item)

    def categories(self) -> list[ItemCategory]:
        active = [c for c in self._categories.values() if c.is_active]
        return sorted(active, key=lambda c: (c.sort_order, c.name))

    def get_category(self, category_id: str) -> ItemCategory | None:
        return self._categories.get(category_id)

    def items(self, category_id: str | None = None) -> list[ChecklistItem]:
        with self._lock:
            return [
                item
                for item in self._items.values()
                if item.is_active and (category_id is None or item.category_id == category_id)
            ]

    def get_item(self, item_id: str) -> ChecklistItem | None:
        with self._lock:
            return self._items.get(item_id)

    def add_item(self, item: ChecklistItem) -> None:
        if item.category_id not in self._categories:
            raise ValidationError(
                f"Item '{item.id}' refers to unknown category '{item.category_id}'",
                field="category_id",
            )
        with self._lock:
            if item.id in self._items:
                raise ValidationError(f"Item {item.id} already exists", field="item_id")
            self._items[item.id] = item

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)
