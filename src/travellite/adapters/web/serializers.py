"""Conversion of domain values into JSON-ready dicts."""

from decimal import Decimal
from typing import Any

from travellite.domain.models.booking import (
    Booking,
    BookingStats,
    StationWorkload,
    TrackingEvent,
)
from travellite.domain.models.booking_status import BookingStatus, OperationType
from travellite.domain.models.checklist import ChecklistItem, ChecklistStats, ItemCategory
from travellite.domain.models.price_quote import PriceQuote, PricingTier, QuickQuote
from travellite.domain.models.route_quote import RouteQuote
from travellite.domain.models.station import StateSummary, Station


def money(value: Decimal) -> float:
    return float(value)


def station_to_dict(station: Station) -> dict[str, Any]:
    return {
        "id": station.id,
        "name": station.name,
        "code": station.code,
        "type": station.type.value,
        "city": station.city,
        "state": station.state,
        "coordinates": {
            "latitude": station.coordinates.latitude,
            "longitude": station.coordinates.longitude,
        },
        "operating_hours": {
            "start": station.operating_hours.start.strftime("%H:%M"),
            "end": station.operating_hours.end.strftime("%H:%M"),
        },
        "popularity": station.popularity,
    }


def quote_to_dict(quote: PriceQuote) -> dict[str, Any]:
    """Full breakdown in pipeline order."""
    return {
        "distance_km": money(quote.distance_km),
        "base_price": money(quote.base_price),
        "distance_price": money(quote.distance_price),
        "subtotal": money(quote.subtotal),
        "multipliers": {
            "station": money(quote.station_multiplier),
            "distance": money(quote.distance_multiplier),
            "distance_category": quote.distance_category,
            "time": money(quote.time_multiplier),
            "time_category": quote.time_category,
        },
        "adjusted_price": money(quote.adjusted_price),
        "surcharges": money(quote.surcharges),
        "service_fees": {
            "handling": money(quote.fees.handling),
            "insurance": money(quote.fees.insurance),
            "packaging": money(quote.fees.packaging),
            "tracking": money(quote.fees.tracking),
            "total": money(quote.fees.total),
        },
        "pre_tax_total": money(quote.pre_tax_total),
        "discount": {
            "kind": quote.discount.kind,
            "percentage": money(quote.discount.percentage),
            "amount": money(quote.discount.amount),
        },
        "discounted_total": money(quote.discounted_total),
        "taxes": {
            "gst_percentage": money(quote.taxes.gst_percentage),
            "gst": money(quote.taxes.gst),
            "service_tax_percentage": money(quote.taxes.service_tax_percentage),
            "service_tax": money(quote.taxes.service_tax),
            "total": money(quote.taxes.total),
        },
        "total": money(quote.total),
        "currency": quote.currency,
        "minimum_charge_applied": quote.minimum_charge_applied,
        "maximum_charge_applied": quote.maximum_charge_applied,
    }


def route_quote_to_dict(route: RouteQuote) -> dict[str, Any]:
    return {
        "source": station_to_dict(route.source),
        "destination": station_to_dict(route.destination),
        "distance_km": money(route.distance_km),
        "quote": quote_to_dict(route.quote),
        "travel_time": {
            "transport_hours": money(route.travel_time.transport_hours),
            "processing_hours": route.travel_time.processing_hours,
            "estimated_hours": money(route.travel_time.estimated_hours),
            "estimated_minutes": route.travel_time.estimated_minutes,
            "delivery_hours": route.travel_time.delivery_hours,
        },
    }


def quick_quote_to_dict(quote: QuickQuote) -> dict[str, Any]:
    return {
        "distance_km": money(quote.distance_km),
        "estimated_price": money(quote.estimated_price),
        "price_range": {"min": money(quote.min_price), "max": money(quote.max_price)},
        "currency": quote.currency,
    }


def tier_to_dict(tier: PricingTier) -> dict[str, Any]:
    return {
        "name": tier.name,
        "multiplier": money(tier.multiplier),
        "min_km": money(tier.min_km),
        "max_km": money(tier.max_km) if tier.max_km is not None else None,
    }


def _event_to_dict(event: TrackingEvent) -> dict[str, Any]:
    return {
        "status": event.status,
        "location": event.location,
        "timestamp": event.timestamp.isoformat(),
        "notes": event.notes,
    }


def booking_to_dict(booking: Booking) -> dict[str, Any]:
    payment = booking.payment_info
    contact = booking.contact_info
    return {
        "id": booking.id,
        "booking_code": booking.booking_code,
        "customer_id": booking.customer_id,
        "source_station_id": booking.source_station_id,
        "destination_station_id": booking.destination_station_id,
        "distance_km": money(booking.distance_km),
        "status": booking.status.value,
        "current_location": booking.current_location,
        "quote": quote_to_dict(booking.quote),
        "contact_info": {
            "phone": contact.phone,
            "email": contact.email,
            "address": contact.address,
            "emergency_contact": (
                {
                    "name": contact.emergency_contact.name,
                    "phone": contact.emergency_contact.phone,
                    "relationship": contact.emergency_contact.relationship,
                }
                if contact.emergency_contact
                else None
            ),
        },
        "luggage_photos": [
            {"angle": photo.angle.value, "url": photo.url} for photo in booking.luggage_photos
        ],
        "security_items": [
            {
                "item_id": item.item_id,
                "category_id": item.category_id,
                "name": item.name,
                "estimated_value": money(item.estimated_value),
                "risk_level": item.risk_level.value,
            }
            for item in booking.security_items
        ],
        "total_estimated_value": money(booking.total_estimated_value),
        "payment": {
            "method": payment.method.value if payment.method else None,
            "amount": money(payment.amount),
            "status": payment.status.value,
            "transaction_id": payment.transaction_id,
            "paid_at": payment.paid_at.isoformat() if payment.paid_at else None,
        },
        "tracking_history": [_event_to_dict(event) for event in booking.tracking_history],
        "created_at": booking.created_at.isoformat(),
        "updated_at": booking.updated_at.isoformat(),
    }


def counter_booking_to_dict(booking: Booking, operation: OperationType) -> dict[str, Any]:
    return {**booking_to_dict(booking), "operation_type": operation.value}


def workload_to_dict(workload: StationWorkload) -> dict[str, int]:
    return {
        "pending_pickups": workload.pending_pickups,
        "pending_deliveries": workload.pending_deliveries,
        "completed_pickups": workload.completed_pickups,
        "completed_deliveries": workload.completed_deliveries,
    }


def booking_stats_to_dict(stats: BookingStats) -> dict[str, Any]:
    """Every status is listed, zero counts included."""
    by_status = {}
    for status in BookingStatus:
        totals = stats.by_status.get(status)
        by_status[status.value] = {
            "count": totals.count if totals else 0,
            "total_amount": money(totals.total_amount) if totals else 0.0,
        }
    return {
        "by_status": by_status,
        "total_bookings": stats.total_bookings,
        "total_spent": money(stats.total_spent),
    }


def state_to_dict(state: StateSummary) -> dict[str, Any]:
    return {
        "name": state.name,
        "total_stations": state.total_stations,
        "railways": state.railways,
        "airports": state.airports,
    }


def category_to_dict(category: ItemCategory) -> dict[str, Any]:
    return {
        "id": category.id,
        "name": category.name,
        "description": category.description,
        "icon": category.icon,
        "color": category.color,
        "risk_level": category.risk_level.value,
        "insurance_multiplier": money(category.insurance_multiplier),
        "sort_order": category.sort_order,
    }


def checklist_item_to_dict(item: ChecklistItem) -> dict[str, Any]:
    return {
        "id": item.id,
        "category_id": item.category_id,
        "name": item.name,
        "description": item.description,
        "estimated_value": {"min": money(item.min_value), "max": money(item.max_value)},
        "risk_level": item.risk_level.value,
        "fragile": item.fragile,
        "requires_special_handling": item.requires_special_handling,
        "insurance_required": item.insurance_required,
        "customizable": item.customizable,
        "common_brands": list(item.common_brands),
        "tags": list(item.tags),
        "popularity": item.popularity,
    }


def checklist_stats_to_dict(stats: ChecklistStats) -> dict[str, Any]:
    return {
        "total_categories": stats.total_categories,
        "total_items": stats.total_items,
        "total_declared_items": stats.total_declared_items,
        "risk_distribution": {
            level.value: count for level, count in stats.risk_distribution.items()
        },
    }
