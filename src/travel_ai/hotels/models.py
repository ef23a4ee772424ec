"""Dataclasses for hotel filter predicates and normalised hotel listings."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, List, Optional


@dataclass(frozen=True, slots=True)
class HotelFilterPredicate:
    """Structured filter derived from a free-text preference string."""

    excluded_types: FrozenSet[str] = frozenset()
    min_stars: Optional[int] = None
    max_stars: Optional[int] = None
    prefer_luxury: bool = False
    prefer_budget: bool = False
    exclude_vacation_rentals: bool = False

    def to_dict(self) -> dict[str, object]:
        return {
            "exclude_types": sorted(self.excluded_types),
            "min_stars": self.min_stars,
            "max_stars": self.max_stars,
            "prefer_luxury": self.prefer_luxury,
            "prefer_budget": self.prefer_budget,
            "exclude_vacation_rentals": self.exclude_vacation_rentals,
        }


@dataclass(frozen=True, slots=True)
class GeoPoint:
    latitude: float
    longitude: float

    def to_dict(self) -> dict[str, float]:
        return {"latitude": self.latitude, "longitude": self.longitude}


@dataclass(frozen=True, slots=True)
class NormalizedHotel:
    """Flattened hotel listing ready for rendering."""

    name: str
    type: str
    rating: float
    review_count: int
    star_class: Optional[int]
    price_per_night: float
    price_formatted: str
    total_price: Optional[float] = None
    total_price_formatted: Optional[str] = None
    amenities: FrozenSet[str] = frozenset()
    description: Optional[str] = None
    link: Optional[str] = None
    thumbnail: Optional[str] = None
    gps_coordinates: Optional[GeoPoint] = None
    check_in_time: Optional[str] = None
    check_out_time: Optional[str] = None
    property_token: Optional[str] = None
    is_ad: bool = False

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "type": self.type,
            "description": self.description,
            "link": self.link,
            "thumbnail": self.thumbnail,
            "rating": self.rating,
            "reviews": self.review_count,
            "hotel_class": self.star_class,
            "price": self.price_per_night,
            "price_formatted": self.price_formatted,
            "total_price": self.total_price,
            "total_price_formatted": self.total_price_formatted,
            "amenities": sorted(self.amenities),
            "gps_coordinates": self.gps_coordinates.to_dict() if self.gps_coordinates else None,
            "check_in_time": self.check_in_time,
            "check_out_time": self.check_out_time,
            "property_token": self.property_token,
            "is_ad": self.is_ad,
        }

    @classmethod
    def from_iterable(cls, records: Iterable["NormalizedHotel"]) -> List[dict[str, object]]:
        return [record.to_dict() for record in records]


@dataclass(frozen=True, slots=True)
class HotelSearchResult:
    hotels: List[NormalizedHotel] = field(default_factory=list)
    filters: HotelFilterPredicate = field(default_factory=HotelFilterPredicate)
    total_results: int = 0

    def to_dict(self) -> dict[str, object]:
        return {
            "success": True,
            "hotels": NormalizedHotel.from_iterable(self.hotels),
            "total_results": self.total_results,
            "filters_applied": self.filters.to_dict(),
        }
