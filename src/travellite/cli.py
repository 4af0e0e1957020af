"""Command line helpers for distances, price quotes and the station catalog."""

import argparse
import json
import sys
from datetime import datetime, tzinfo
from decimal import Decimal
from typing import Any

from travellite.adapters.catalog import InMemoryStationCatalog
from travellite.adapters.config import AppConfig, StationCatalogLoader
from travellite.adapters.system import SystemClock
from travellite.application.services import PricingEngine, QuoteService, StationFinder
from travellite.application.services.distance_calculator import haversine_km
from travellite.application.services.pricing_engine import round_money
from travellite.domain.models.geo_coordinate import GeoCoordinate
from travellite.domain.models.price_quote import PriceQuote
from travellite.domain.models.station import Station, StationType


def _json_default(value: Any) -> Any:
    if isinstance(value, Decimal):
        return float(value)
    raise TypeError(f"Cannot serialise {type(value).__name__}")


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False, default=_json_default))


def compute_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> Decimal:
    """Great-circle distance between two points, rounded to 0.01 km."""
    km = haversine_km(GeoCoordinate(lat1, lon1), GeoCoordinate(lat2, lon2))
    return round_money(Decimal(str(km)))


def quote_summary(quote: PriceQuote) -> dict[str, Any]:
    """Flatten a quote into the lines shown by ``travellite-cli quote``."""
    return {
        "distance_km": quote.distance_km,
        "subtotal": quote.subtotal,
        "distance_category": quote.distance_category,
        "time_category": quote.time_category,
        "adjusted_price": quote.adjusted_price,
        "service_fees": quote.fees.total,
        "pre_tax_total": quote.pre_tax_total,
        "discount": quote.discount.amount,
        "discount_kind": quote.discount.kind,
        "taxes": quote.taxes.total,
        "total": quote.total,
        "currency": quote.currency,
        "minimum_charge_applied": quote.minimum_charge_applied,
        "maximum_charge_applied": quote.maximum_charge_applied,
    }


def station_summary(station: Station) -> dict[str, Any]:
    return {
        "id": station.id,
        "code": station.code,
        "name": station.name,
        "type": station.type.value,
        "city": station.city,
        "state": station.state,
        "popularity": station.popularity,
    }


def _load_config(config_file: str | None) -> AppConfig:
    """Settings from the environment, plus the ``[pricing]`` table of an explicit file."""
    if not config_file:
        return AppConfig()
    config = AppConfig(config_file=config_file)
    config.get_pricing_config()
    return config


def _load_finder(config: AppConfig) -> tuple[InMemoryStationCatalog, StationFinder]:
    catalog = InMemoryStationCatalog(StationCatalogLoader.load(config))
    return catalog, StationFinder(catalog)


def _pickup_time(hour: int | None, timezone: tzinfo) -> datetime:
    """Now, or today at ``hour``, on the wall clock of the pricing timezone."""
    now = datetime.now(timezone)
    if hour is None:
        return now
    if not 0 <= hour <= 23:
        raise ValueError("--hour must be between 0 and 23")
    return now.replace(hour=hour, minute=0, second=0, microsecond=0)


def _print_quote(summary: dict[str, Any]) -> None:
    currency = summary["currency"]
    print(f"\nDistance: {summary['distance_km']} km ({summary['distance_category']})")
    print(f"  Subtotal:        {summary['subtotal']} {currency}")
    print(f"  Adjusted:        {summary['adjusted_price']} {currency} ({summary['time_category']})")
    print(f"  Service fees:    {summary['service_fees']} {currency}")
    kind = summary["discount_kind"] or "none"
    print(f"  Discount:        -{summary['discount']} {currency} ({kind})")
    print(f"  Taxes:           {summary['taxes']} {currency}")
    print(f"  Total:           {summary['total']} {currency}")
    if summary["maximum_charge_applied"]:
        print("  (maximum charge applied)")
    if summary["minimum_charge_applied"]:
        print("  (minimum charge applied)")
    print()


def _print_stations(stations: list[Station], empty_message: str) -> None:
    if not stations:
        print(empty_message, file=sys.stderr)
        sys.exit(1)
    print(f"\nFound {len(stations)} station(s):\n")
    for station in stations:
        print(f"  {station.name} [{station.code}] ({station.city}, {station.state})")
        print(f"    ID: {station.id}  Type: {station.type.value}")
        print()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="TravelLite luggage pricing and station helper",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Distance between two coordinates
  travellite-cli distance 28.6139 77.2090 19.0760 72.8777

  # Price 1384 km between two railway stations at 14:00
  travellite-cli quote 1384 --hour 14

  # Quote a route between two configured stations
  travellite-cli route ndls mmct --tier premium

  # Search stations
  travellite-cli stations search delhi
        """,
    )
    parser.add_argument("--config", help="TOML configuration file with stations")
    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    distance_parser = subparsers.add_parser("distance", help="Great-circle distance in km")
    for name in ("lat1", "lon1", "lat2", "lon2"):
        distance_parser.add_argument(name, type=float)
    distance_parser.add_argument("--json", action="store_true", help="Output as JSON")

    quote_parser = subparsers.add_parser("quote", help="Price a distance")
    quote_parser.add_argument("distance_km", type=float)
    quote_parser.add_argument(
        "--source-type", choices=[t.value for t in StationType], default="railway"
    )
    quote_parser.add_argument(
        "--destination-type", choices=[t.value for t in StationType], default="railway"
    )
    _add_customer_arguments(quote_parser)

    route_parser = subparsers.add_parser("route", help="Price a route between two stations")
    route_parser.add_argument("source", help="Source station id")
    route_parser.add_argument("destination", help="Destination station id")
    _add_customer_arguments(route_parser)

    tiers_parser = subparsers.add_parser("tiers", help="List distance pricing tiers")
    tiers_parser.add_argument(
        "--distance", type=float, help="Only show the tier this distance in km falls into"
    )
    tiers_parser.add_argument("--json", action="store_true", help="Output as JSON")

    stations_parser = subparsers.add_parser("stations", help="Browse the station catalog")
    stations_sub = stations_parser.add_subparsers(dest="stations_command")
    search_parser = stations_sub.add_parser("search", help="Search stations")
    search_parser.add_argument("query")
    popular_parser = stations_sub.add_parser("popular", help="Most popular stations")
    for sub in (search_parser, popular_parser):
        sub.add_argument("--type", choices=[t.value for t in StationType])
        sub.add_argument("--limit", type=int, default=10)
        sub.add_argument("--json", action="store_true", help="Output as JSON")

    return parser


def _add_customer_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--hour", type=int, help="Pickup hour (0-23), defaults to now")
    parser.add_argument("--tier", default="new", help="Customer tier: new, returning, premium")
    parser.add_argument("--prior-bookings", type=int, default=0)
    parser.add_argument("--json", action="store_true", help="Output as JSON")


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        config = _load_config(args.config)

        if args.command == "distance":
            km = compute_distance(args.lat1, args.lon1, args.lat2, args.lon2)
            if args.json:
                _print_json({"distance_km": km})
            else:
                print(f"{km} km")

        elif args.command == "quote":
            quote = PricingEngine().quote(
                args.distance_km,
                args.source_type,
                args.destination_type,
                _pickup_time(args.hour, config.tzinfo),
                args.tier,
                args.prior_bookings,
            )
            summary = quote_summary(quote)
            if args.json:
                _print_json(summary)
            else:
                _print_quote(summary)

        elif args.command == "route":
            catalog, _ = _load_finder(config)
            quotes = QuoteService(catalog, PricingEngine(), SystemClock(), config.tzinfo)
            route = quotes.quote_route(
                args.source,
                args.destination,
                pickup_time=_pickup_time(args.hour, config.tzinfo),
                user_tier=args.tier,
                prior_booking_count=args.prior_bookings,
            )
            summary = {
                "source": route.source.code,
                "destination": route.destination.code,
                "estimated_hours": route.travel_time.estimated_hours,
                **quote_summary(route.quote),
            }
            if args.json:
                _print_json(summary)
            else:
                print(f"\n{route.source.name} -> {route.destination.name}")
                print(f"  Estimated travel time: {summary['estimated_hours']} h")
                _print_quote(summary)

        elif args.command == "tiers":
            engine = PricingEngine()
            if args.distance is not None:
                tiers = [engine.pricing_tier(args.distance)]
            else:
                tiers = engine.pricing_tiers()
            if args.json:
                _print_json(
                    [
                        {
                            "name": t.name,
                            "multiplier": t.multiplier,
                            "min_km": t.min_km,
                            "max_km": t.max_km,
                        }
                        for t in tiers
                    ]
                )
            else:
                for tier in tiers:
                    upper = f"{tier.max_km} km" if tier.max_km is not None else "and above"
                    print(f"  {tier.name:<14} {tier.min_km} km - {upper}  x{tier.multiplier}")

        elif args.command == "stations":
            if not args.stations_command:
                print("Error: choose a stations command: search or popular", file=sys.stderr)
                sys.exit(1)
            _, finder = _load_finder(config)
            station_type = StationType(args.type) if args.type else None
            if args.stations_command == "search":
                stations = finder.search(args.query, station_type, args.limit)
                empty = f"No stations found for '{args.query}'"
            else:
                stations = finder.popular(station_type, args.limit)
                empty = "No stations configured"
            if args.json:
                _print_json([station_summary(s) for s in stations])
            else:
                _print_stations(stations, empty)

    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def cli_main() -> None:
    """Synchronous entry point for the CLI command."""
    main()


if __name__ == "__main__":
    cli_main()
