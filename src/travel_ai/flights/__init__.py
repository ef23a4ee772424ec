"""Round-trip flight models and normalisation helpers."""

from .models import FlightLeg, FlightSegment, NormalizedFlight
from .normalizer import FlightGraph, normalize_flights, resolve_itinerary_price

__all__ = [
    "FlightGraph",
    "FlightLeg",
    "FlightSegment",
    "NormalizedFlight",
    "normalize_flights",
    "resolve_itinerary_price",
]
