"""Security checklist catalog port."""

from typing import Protocol

from travellite.domain.models.checklist import ChecklistItem, ItemCategory


class ChecklistCatalog(Protocol):
    """Port for the categories and items customers declare on the checklist."""

    def categories(self) -> list[ItemCategory]:
        """Active categories ordered by sort order, then name."""
        ...

    def get_category(self, category_id: str) -> ItemCategory | None:
        """Return a category by id, active or not."""
        ...

    def items(self, category_id: str | None = None) -> list[ChecklistItem]:
        """Active items, optionally restricted to one category."""
        ...

    def get_item(self, item_id: str) -> ChecklistItem | None:
        """Return an item by id, active or not."""
        ...

    def add_item(self, item: ChecklistItem) -> None:
        """Store a new item."""
        ...
