"""Flatten graph-shaped round-trip search payloads into flight summaries."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from .models import FlightLeg, FlightSegment, NormalizedFlight

logger = logging.getLogger(__name__)

DEFAULT_BOOKING_ORIGIN = "https://www.skyscanner.com"
MAX_RESULTS = 10


def _to_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _to_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _as_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


def _index_by_id(records: Optional[Iterable[dict[str, Any]]]) -> Dict[str, dict[str, Any]]:
    index: Dict[str, dict[str, Any]] = {}
    for record in _as_list(records):
        if not isinstance(record, dict) or record.get("id") is None:
            continue
        index[str(record["id"])] = record
    return index


@dataclass(frozen=True, slots=True)
class FlightGraph:
    """Id lookup tables built once per provider payload."""

    legs: Dict[str, dict[str, Any]]
    segments: Dict[str, dict[str, Any]]
    places: Dict[str, dict[str, Any]]
    carriers: Dict[str, dict[str, Any]]

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "FlightGraph":
        return cls(
            legs=_index_by_id(payload.get("legs")),
            segments=_index_by_id(payload.get("segments")),
            places=_index_by_id(payload.get("places")),
            carriers=_index_by_id(payload.get("carriers")),
        )

    def _lookup(self, table: Dict[str, dict[str, Any]], key: Any) -> Optional[dict[str, Any]]:
        if key is None:
            return None
        return table.get(str(key))

    def place_code(self, place_id: Any) -> str:
        place = self._lookup(self.places, place_id)
        if place:
            code = place.get("iata") or place.get("name")
            if code:
                return str(code)
        return "" if place_id is None else str(place_id)

    def carrier_name(self, carrier_id: Any) -> str:
        carrier = self._lookup(self.carriers, carrier_id) or {}
        return str(carrier.get("name") or carrier.get("iata") or "")

    def segment(self, segment_id: Any) -> Optional[FlightSegment]:
        segment = self._lookup(self.segments, segment_id)
        if segment is None:
            logger.debug("Segment %s missing from payload", segment_id)
            return None
        return FlightSegment(
            origin_code=self.place_code(segment.get("origin_place_id")),
            destination_code=self.place_code(segment.get("destination_place_id")),
            departure=segment.get("departure"),
            arrival=segment.get("arrival"),
            duration_minutes=_to_int(segment.get("duration")),
            flight_number=str(segment.get("marketing_flight_number") or ""),
            carrier_name=self.carrier_name(segment.get("marketing_carrier_id")),
        )

    def leg(self, leg_id: Any) -> FlightLeg:
        leg = self._lookup(self.legs, leg_id)
        if leg is None:
            logger.debug("Leg %s missing from payload", leg_id)
            return FlightLeg.placeholder()
        segments: List[FlightSegment] = []
        for segment_id in _as_list(leg.get("segment_ids")):
            segment = self.segment(segment_id)
            if segment is not None:
                segments.append(segment)
        return FlightLeg(
            origin_code=self.place_code(leg.get("origin_place_id")),
            destination_code=self.place_code(leg.get("destination_place_id")),
            departure=leg.get("departure"),
            arrival=leg.get("arrival"),
            duration_minutes=_to_int(leg.get("duration")),
            stop_count=_to_int(leg.get("stop_count")) or 0,
            segments=tuple(segments),
        )


def resolve_itinerary_price(itinerary: dict[str, Any]) -> Optional[float]:
    """Cheapest price of an itinerary, or ``None`` when none is listed."""
    cheapest = itinerary.get("cheapest_price") or {}
    price = _to_float(cheapest.get("amount")) if isinstance(cheapest, dict) else None
    if price is not None:
        return price
    options = _as_list(itinerary.get("pricing_options"))
    if options and isinstance(options[0], dict):
        option_price = options[0].get("price")
        if isinstance(option_price, dict):
            return _to_float(option_price.get("amount"))
    return None


def _sort_key(itinerary: dict[str, Any]) -> float:
    price = resolve_itinerary_price(itinerary)
    return math.inf if price is None else price


def _booking_url(itinerary: dict[str, Any], origin: str) -> Optional[str]:
    options = _as_list(itinerary.get("pricing_options"))
    if not options or not isinstance(options[0], dict):
        return None
    items = _as_list(options[0].get("items"))
    if not items or not isinstance(items[0], dict):
        return None
    path = items[0].get("url")
    if not path:
        return None
    return f"{origin.rstrip('/')}{path}"


def normalize_flights(
    payload: Optional[dict[str, Any]],
    *,
    currency: str,
    booking_origin: str = DEFAULT_BOOKING_ORIGIN,
    limit: int = MAX_RESULTS,
) -> List[NormalizedFlight]:
    """Return the ``limit`` cheapest itineraries as self-contained flights.

    Itineraries with equal prices keep their provider order. Legs or segments
    that cannot be resolved degrade to placeholders instead of raising.
    """
    itineraries = (payload or {}).get("itineraries")
    if not isinstance(itineraries, list):
        return []

    graph = FlightGraph.from_payload(payload)
    candidates = [item for item in itineraries if isinstance(item, dict)]
    cheapest = sorted(candidates, key=_sort_key)[:limit]

    flights: List[NormalizedFlight] = []
    for itinerary in cheapest:
        leg_ids = _as_list(itinerary.get("leg_ids"))
        outbound_id = leg_ids[0] if len(leg_ids) > 0 else None
        return_id = leg_ids[1] if len(leg_ids) > 1 else None
        flights.append(
            NormalizedFlight(
                id=str(itinerary.get("id") or ""),
                price=resolve_itinerary_price(itinerary),
                currency=currency,
                outbound=graph.leg(outbound_id),
                inbound=graph.leg(return_id),
                booking_url=_booking_url(itinerary, booking_origin),
            )
        )
    logger.info("Normalised %s of %s itineraries", len(flights), len(itineraries))
    return flights
