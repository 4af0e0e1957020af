"""Travel and delivery time estimates for station-to-station luggage transport."""

import math
from decimal import ROUND_HALF_UP, Decimal

from travellite.application.services.pricing_engine import round_money
from travellite.domain.models.route_quote import TravelTimeEstimate

# Average door-to-door speed in km/h per station-type pairing
TRANSPORT_SPEEDS_KMH: dict[str, int] = {
    "railway-railway": 60,
    "railway-airport": 50,
    "airport-railway": 50,
    "airport-airport": 80,
}
DEFAULT_SPEED_KMH = 50


def estimate_travel_time(
    distance_km: float | Decimal, source_type: str, destination_type: str
) -> TravelTimeEstimate:
    """Estimate transport time plus counter processing time.

    Routes touching an airport get two hours of processing, others one.
    """
    speed = TRANSPORT_SPEEDS_KMH.get(f"{source_type}-{destination_type}", DEFAULT_SPEED_KMH)
    transport_hours = Decimal(str(distance_km)) / Decimal(speed)
    processing_hours = 2 if "airport" in (source_type, destination_type) else 1
    total_hours = transport_hours + processing_hours
    return TravelTimeEstimate(
        transport_hours=round_money(transport_hours),
        processing_hours=processing_hours,
        estimated_hours=round_money(total_hours),
        estimated_minutes=int((total_hours * 60).to_integral_value(rounding=ROUND_HALF_UP)),
        delivery_hours=estimate_delivery_hours(distance_km),
    )


def estimate_delivery_hours(distance_km: float | Decimal) -> int:
    """Estimate hours until luggage is ready for collection at the destination.

    Every delivery takes at least a day; long routes add twelve hours per
    started 500 km and medium routes a flat twelve hours.
    """
    distance = float(distance_km)
    hours = 24
    if distance > 500:
        hours += math.ceil(distance / 500) * 12
    elif distance > 200:
        hours += 12
    return hours
