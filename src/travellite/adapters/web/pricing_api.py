"""Pricing endpoints: route quotes, quick estimates and the published tariff."""

from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from travellite.adapters.web.context import (
    float_param,
    optional_principal,
    services,
    station_type_param,
)
from travellite.adapters.web.schemas import RouteQuoteRequest, parse_body
from travellite.adapters.web.serializers import (
    money,
    quick_quote_to_dict,
    route_quote_to_dict,
    tier_to_dict,
)
from travellite.domain.models.station import StationType


async def route_quote(request: Request) -> JSONResponse:
    """Quote a route; signed-in customers get their own tier and loyalty count."""
    api = services(request)
    body = await parse_body(request, RouteQuoteRequest)
    principal = optional_principal(request)
    user_tier, prior = api.lifecycle.pricing_profile(principal) if principal else ("new", 0)
    quote = api.quotes.quote_route(
        body.source_station_id,
        body.destination_station_id,
        pickup_time=body.pickup_time,
        user_tier=user_tier,
        prior_booking_count=prior,
    )
    return JSONResponse({"success": True, "data": route_quote_to_dict(quote)})


async def quick_quote(request: Request) -> JSONResponse:
    api = services(request)
    distance = float_param(request, "distance_km")
    quote = api.pricing.quick_quote(
        distance,
        (station_type_param(request, "source_type") or StationType.RAILWAY).value,
        (station_type_param(request, "destination_type") or StationType.RAILWAY).value,
        api.quotes.local_time(),
    )
    data = quick_quote_to_dict(quote)
    data["tier"] = tier_to_dict(api.pricing.pricing_tier(distance))
    return JSONResponse({"success": True, "data": data})


async def pricing_tiers(request: Request) -> JSONResponse:
    """List every distance tier, or only the one ``distance_km`` falls into."""
    engine = services(request).pricing
    if request.query_params.get("distance_km"):
        tier = engine.pricing_tier(float_param(request, "distance_km"))
        return JSONResponse({"success": True, "data": {"tier": tier_to_dict(tier)}})
    tiers = engine.pricing_tiers()
    return JSONResponse({"success": True, "data": {"tiers": [tier_to_dict(t) for t in tiers]}})


async def pricing_config(request: Request) -> JSONResponse:
    """Publish the tariff constants so clients can explain a quote."""
    cfg = services(request).pricing.config
    return JSONResponse(
        {
            "success": True,
            "data": {
                "currency": cfg.currency,
                "base_price": money(cfg.base_price),
                "price_per_km": money(cfg.price_per_km),
                "minimum_charge": money(cfg.minimum_charge),
                "maximum_charge": money(cfg.maximum_charge),
                "station_multipliers": {k: money(v) for k, v in cfg.station_multipliers.items()},
                "time_multipliers": {
                    band.name: {
                        "start_hour": band.start_hour,
                        "end_hour": band.end_hour,
                        "multiplier": money(band.multiplier),
                    }
                    for band in cfg.time_bands
                },
                "service_fees": {
                    "handling": money(cfg.handling_fee),
                    "insurance": money(cfg.insurance_fee),
                    "packaging": money(cfg.packaging_fee),
                    "tracking": money(cfg.tracking_fee),
                },
                "tax_rates": {
                    "gst": money(cfg.gst_rate),
                    "service_tax": money(cfg.service_tax_rate),
                },
                "discounts": {
                    "new_user": money(cfg.new_user_discount_rate),
                    "loyalty": money(cfg.loyalty_discount_rate),
                    "loyalty_min_bookings": cfg.loyalty_min_bookings,
                    "premium": money(cfg.premium_discount_rate),
                },
            },
        }
    )


routes = [
    Route("/api/v1/pricing/quote", route_quote, methods=["POST"]),
    Route("/api/v1/pricing/quick-quote", quick_quote, methods=["GET"]),
    Route("/api/v1/pricing/tiers", pricing_tiers, methods=["GET"]),
    Route("/api/v1/pricing/config", pricing_config, methods=["GET"]),
]
