"""Tests for browsing, searching and extending the security checklist."""

from datetime import UTC, datetime
from decimal import Decimal

import pytest

from travellite.adapters.catalog import InMemoryChecklistCatalog
from travellite.adapters.memory import InMemoryBookingRepository
from travellite.application.services import ChecklistService, ItemSort
from travellite.application.services.pricing_engine import PricingEngine
from travellite.domain.errors import CategoryNotFoundError, ItemNotFoundError, ValidationError
from travellite.domain.models import (
    Booking,
    BookingStatus,
    ChecklistItem,
    ContactInfo,
    ItemCategory,
    PaymentInfo,
    RiskLevel,
    SecurityItem,
)

NOW = datetime(2024, 12, 1, 9, 0, tzinfo=UTC)


def item(
    item_id: str,
    category_id: str,
    min_value: int,
    max_value: int,
    risk_level: RiskLevel,
    popularity: int,
    **extra: object,
) -> ChecklistItem:
    return ChecklistItem(
        id=item_id,
        category_id=category_id,
        name=item_id.replace("-", " ").title(),
        description=f"A {item_id}",
        min_value=Decimal(min_value),
        max_value=Decimal(max_value),
        risk_level=risk_level,
        popularity=popularity,
        **extra,  # type: ignore[arg-type]
    )


@pytest.fixture
def repository() -> InMemoryBookingRepository:
    return InMemoryBookingRepository()


@pytest.fixture
def service(repository: InMemoryBookingRepository) -> ChecklistService:
    catalog = InMemoryChecklistCatalog(
        [
            ItemCategory("electronics", "Electronics", "Gadgets", sort_order=1),
            ItemCategory("jewelry", "Jewelry", "Precious things", sort_order=2),
        ],
        [
            item("laptop", "electronics", 25000, 150000, RiskLevel.HIGH, 100,
                 common_brands=("Apple", "Dell"), tags=("computer",)),
            item("smartphone", "electronics", 10000, 120000, RiskLevel.HIGH, 95,
                 common_brands=("Apple", "Samsung")),
            item("headphones", "electronics", 2000, 40000, RiskLevel.MEDIUM, 80,
                 common_brands=("Sony",)),
            item("gold-ring", "jewelry", 10000, 500000, RiskLevel.CRITICAL, 85,
                 tags=("gold",)),
            item("luxury-watch", "jewelry", 15000, 500000, RiskLevel.HIGH, 70,
                 common_brands=("Apple", "Rolex")),
        ],
    )
    return ChecklistService(catalog, repository)


def make_booking(items: tuple[SecurityItem, ...]) -> Booking:
    quote = PricingEngine().quote(120, "railway", "railway", NOW)
    return Booking(
        id="b-1",
        booking_code="TL12345678ABCD",
        customer_id="customer-1",
        source_station_id="ndls",
        destination_station_id="mmct",
        distance_km=Decimal("120"),
        quote=quote,
        contact_info=ContactInfo(phone="+91 98765 43210"),
        luggage_photos=(),
        security_items=items,
        status=BookingStatus.PENDING_PAYMENT,
        payment_info=PaymentInfo(method=None, amount=quote.total),
        tracking_history=(),
        created_at=NOW,
        updated_at=NOW,
    )


class TestBrowse:
    def test_categories_carry_items_by_popularity(self, service: ChecklistService) -> None:
        """Given two categories, when listing, then each carries its items, most popular first."""
        listing = service.categories()

        assert [category.id for category, _ in listing] == ["electronics", "jewelry"]
        assert [i.id for i in listing[1][1]] == ["gold-ring", "luxury-watch"]

    @pytest.mark.parametrize(
        ("sort_by", "expected"),
        [
            (ItemSort.POPULARITY, ["laptop", "smartphone", "headphones"]),
            (ItemSort.NAME, ["headphones", "laptop", "smartphone"]),
            (ItemSort.VALUE_LOW, ["headphones", "smartphone", "laptop"]),
            (ItemSort.VALUE_HIGH, ["laptop", "smartphone", "headphones"]),
            (ItemSort.RISK, ["laptop", "smartphone", "headphones"]),
        ],
    )
    def test_items_in_category_sorting(
        self, service: ChecklistService, sort_by: ItemSort, expected: list[str]
    ) -> None:
        """Given a sort order, when listing a category, then items follow it."""
        items = service.items_in_category("electronics", sort_by=sort_by)

        assert [i.id for i in items] == expected

    def test_items_in_category_search_and_limit(self, service: ChecklistService) -> None:
        """Given a brand search and a limit, when listing a category, then both apply."""
        items = service.items_in_category("electronics", search="apple", limit=1)

        assert [i.id for i in items] == ["laptop"]

    def test_items_in_unknown_category(self, service: ChecklistService) -> None:
        """Given an unknown category, when listing it, then CategoryNotFoundError."""
        with pytest.raises(CategoryNotFoundError) as exc_info:
            service.items_in_category("boats")

        assert exc_info.value.field == "category_id"

    def test_limit_must_be_positive(self, service: ChecklistService) -> None:
        """Given a zero limit, when listing popular items, then ValidationError."""
        with pytest.raises(ValidationError) as exc_info:
            service.popular(limit=0)

        assert exc_info.value.field == "limit"

    def test_popular_across_and_within_categories(self, service: ChecklistService) -> None:
        """Given a limit, when listing popular items, then the most popular come first."""
        assert [i.id for i in service.popular(limit=3)] == ["laptop", "smartphone", "gold-ring"]
        assert [i.id for i in service.popular("jewelry")] == ["gold-ring", "luxury-watch"]

    def test_get_item(self, service: ChecklistService) -> None:
        """Given known and unknown ids, when fetching, then the unknown one raises."""
        assert service.get_item("laptop").max_value == Decimal("150000")
        with pytest.raises(ItemNotFoundError):
            service.get_item("yacht")


class TestSearch:
    def test_search_matches_brands_and_tags(self, service: ChecklistService) -> None:
        """Given a brand, when searching, then items across categories match by popularity."""
        results = service.search("apple")

        assert [i.id for i in results] == ["laptop", "smartphone", "luxury-watch"]
        assert [i.id for i in service.search("GOLD")] == ["gold-ring"]

    def test_search_filters(self, service: ChecklistService) -> None:
        """Given category and risk filters, when searching, then both narrow the results."""
        assert [i.id for i in service.search("apple", category_id="jewelry")] == ["luxury-watch"]
        assert [i.id for i in service.search("apple", risk_level=RiskLevel.MEDIUM)] == []

    @pytest.mark.parametrize("query", ["", "a", "  b  "])
    def test_short_query_is_rejected(self, service: ChecklistService, query: str) -> None:
        """Given a query under two characters, when searching, then ValidationError on q."""
        with pytest.raises(ValidationError) as exc_info:
            service.search(query)

        assert exc_info.value.field == "q"


class TestCustomItems:
    def test_custom_item_is_added(self, service: ChecklistService) -> None:
        """Given a complete description, when adding a custom item, then it is searchable."""
        created = service.create_custom_item(
            name=" Vintage Radio ",
            description="Valve radio",
            category_id="electronics",
            estimated_value=Decimal("12000"),
            fragile=True,
            brand="Philips",
            tags=("Vintage", " "),
        )

        assert created.id.startswith("custom-")
        assert created.name == "Vintage Radio"
        assert created.min_value == created.max_value == Decimal("12000")
        assert created.tags == ("vintage",)
        assert created.common_brands == ("Philips",)
        assert created.popularity == 0
        assert service.get_item(created.id) == created
        assert [i.id for i in service.search("philips")] == [created.id]

    @pytest.mark.parametrize(
        ("overrides", "field"),
        [
            ({"name": "  "}, "name"),
            ({"description": ""}, "description"),
            ({"category_id": ""}, "category_id"),
            ({"estimated_value": Decimal("0")}, "estimated_value"),
            ({"estimated_value": Decimal("-5")}, "estimated_value"),
        ],
    )
    def test_custom_item_validation(
        self, service: ChecklistService, overrides: dict[str, object], field: str
    ) -> None:
        """Given a missing or negative field, when adding a custom item, then it is named."""
        fields: dict[str, object] = {
            "name": "Radio",
            "description": "Valve radio",
            "category_id": "electronics",
            "estimated_value": Decimal("100"),
        }
        fields.update(overrides)

        with pytest.raises(ValidationError) as exc_info:
            service.create_custom_item(**fields)  # type: ignore[arg-type]

        assert exc_info.value.field == field

    def test_custom_item_in_unknown_category(self, service: ChecklistService) -> None:
        """Given an unknown category, when adding a custom item, then CategoryNotFoundError."""
        with pytest.raises(CategoryNotFoundError):
            service.create_custom_item("Oar", "Wooden oar", "boats", Decimal("500"))


def test_stats_count_catalog_and_declarations(
    service: ChecklistService, repository: InMemoryBookingRepository
) -> None:
    """Given one booking declaring two items, when reading stats, then both are counted."""
    repository.add(
        make_booking(
            (
                SecurityItem("laptop", "electronics", "Laptop", Decimal("55000")),
                SecurityItem("gold-ring", "jewelry", "Ring", Decimal("20000")),
            )
        )
    )

    stats = service.stats()

    assert stats.total_categories == 2
    assert stats.total_items == 5
    assert stats.total_declared_items == 2
    assert stats.risk_distribution == {
        RiskLevel.HIGH: 3,
        RiskLevel.MEDIUM: 1,
        RiskLevel.CRITICAL: 1,
    }
