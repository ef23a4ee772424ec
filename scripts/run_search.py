"""Entry point for manual searches from the command line."""
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from datetime import date, timedelta

from pydantic import ValidationError

from travel_ai.config.settings import Settings
from travel_ai.core.logging import configure_logging
from travel_ai.planner import TravelPlanner
from travel_ai.services import ProviderError
from travel_ai.tasks.search_payloads import (
    ActivitySearchRequest,
    FlightSearchRequest,
    HotelSearchRequest,
)

logger = logging.getLogger(__name__)


def _default_dates() -> tuple[date, date]:
    start = date.today() + timedelta(days=14)
    return start, start + timedelta(days=3)


def build_parser() -> argparse.ArgumentParser:
    start, end = _default_dates()
    parser = argparse.ArgumentParser(description="Run a travel price search and print JSON")
    parser.add_argument("--log-level", default=None, help="Override TRAVEL_AI_LOG_LEVEL")
    subparsers = parser.add_subparsers(dest="command", required=True)

    flights = subparsers.add_parser("flights", help="Round-trip flight search")
    flights.add_argument("origin", help="Departure airport code, e.g. JFK")
    flights.add_argument("destination", help="Arrival airport code, e.g. LAX")
    flights.add_argument("--depart", type=date.fromisoformat, default=start)
    flights.add_argument("--return", dest="return_date", type=date.fromisoformat, default=end)
    flights.add_argument("--adults", type=int, default=1)
    flights.add_argument("--children", type=int, default=0)
    flights.add_argument("--infants", type=int, default=0)
    flights.add_argument("--cabin", default="Economy")
    flights.add_argument("--currency", default=None)

    hotels = subparsers.add_parser("hotels", help="Hotel search with free-text preferences")
    hotels.add_argument("destination")
    hotels.add_argument("--check-in", type=date.fromisoformat, default=start)
    hotels.add_argument("--check-out", type=date.fromisoformat, default=end)
    hotels.add_argument("--adults", type=int, default=2)
    hotels.add_argument("--children", type=int, default=0)
    hotels.add_argument("--currency", default=None)
    hotels.add_argument("--preferences", default="", help='e.g. "no hostels, 4 star minimum"')

    activities = subparsers.add_parser("activities", help="Price a list of activities")
    activities.add_argument("destination")
    activities.add_argument("activity", nargs="+", help="Activity names to price")
    return parser


async def run(settings: Settings, args: argparse.Namespace) -> dict[str, object]:
    currency = getattr(args, "currency", None) or settings.default_currency
    async with TravelPlanner(settings) as planner:
        if args.command == "flights":
            request = FlightSearchRequest(
                departure_airport_code=args.origin,
                arrival_airport_code=args.destination,
                departure_date=args.depart,
                return_date=args.return_date,
                adults=args.adults,
                children=args.children,
                infants=args.infants,
                cabin_class=args.cabin,
                currency=currency,
            )
            return (await planner.search_flights(request)).to_dict()
        if args.command == "hotels":
            request = HotelSearchRequest(
                destination=args.destination,
                check_in_date=args.check_in,
                check_out_date=args.check_out,
                adults=args.adults,
                children=args.children,
                currency=currency,
                preferences=args.preferences,
            )
            return (await planner.search_hotels(request)).to_dict()
        request = ActivitySearchRequest(destination=args.destination, activities=args.activity)
        results = await planner.price_activities(request)
        return {
            "success": True,
            "destination": request.destination,
            "activities": [result.to_dict() for result in results],
        }


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()
    settings = Settings()
    if args.log_level:
        settings.log_level = args.log_level

    configure_logging(settings.log_level, settings.log_dir)
    settings.ensure_directories()

    try:
        payload = asyncio.run(run(settings, args))
    except ValidationError as exc:
        parser.error(str(exc))
    except ProviderError as exc:
        logger.error("Search failed: %s", exc)
        print(json.dumps({"success": False, **exc.to_dict()}, indent=2))
        sys.exit(1)
    print(json.dumps(payload, indent=2, default=str))


if __name__ == "__main__":
    main()
