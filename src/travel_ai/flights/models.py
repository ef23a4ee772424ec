"""Dataclasses for flattened round-trip flight summaries."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True, slots=True)
class FlightSegment:
    """A single flight-number hop within a leg."""

    origin_code: str
    destination_code: str
    departure: Optional[str]
    arrival: Optional[str]
    duration_minutes: Optional[int]
    flight_number: str
    carrier_name: str

    def to_dict(self) -> dict[str, object]:
        return {
            "from": self.origin_code,
            "to": self.destination_code,
            "departure": self.departure,
            "arrival": self.arrival,
            "duration": self.duration_minutes,
            "flight_number": self.flight_number,
            "carrier": self.carrier_name,
        }


@dataclass(frozen=True, slots=True)
class FlightLeg:
    """One direction of a round trip, made of ordered segments."""

    origin_code: str
    destination_code: str
    departure: Optional[str]
    arrival: Optional[str]
    duration_minutes: Optional[int]
    stop_count: int
    segments: tuple[FlightSegment, ...] = field(default_factory=tuple)

    @classmethod
    def placeholder(cls) -> "FlightLeg":
        return cls(
            origin_code="",
            destination_code="",
            departure=None,
            arrival=None,
            duration_minutes=None,
            stop_count=0,
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "from": self.origin_code,
            "to": self.destination_code,
            "departure": self.departure,
            "arrival": self.arrival,
            "duration": self.duration_minutes,
            "stops": self.stop_count,
            "segments": [segment.to_dict() for segment in self.segments],
        }


@dataclass(frozen=True, slots=True)
class NormalizedFlight:
    id: str
    price: Optional[float]
    currency: str
    outbound: FlightLeg
    inbound: FlightLeg
    booking_url: Optional[str] = None

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "price": self.price,
            "currency": self.currency,
            "outbound": self.outbound.to_dict(),
            "return": self.inbound.to_dict(),
            "booking_url": self.booking_url,
        }
