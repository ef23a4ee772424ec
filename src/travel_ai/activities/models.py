"""Activity price results and the accumulator used while resolving them."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional

ESTIMATED_SOURCE = "Estimated"


@dataclass(frozen=True, slots=True)
class ActivityPriceResult:
    """Best-known price and metadata for one activity.

    ``price`` is ``None`` when the cost is unknown or varies and ``0`` when the
    activity is confirmed free.
    """

    name: str
    search_query: str
    price: Optional[float]
    price_formatted: str
    source: str
    link: Optional[str] = None
    thumbnail: Optional[str] = None
    rating: Optional[float] = None
    reviews: Optional[int] = None
    description: Optional[str] = None
    estimated: bool = False

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "search_query": self.search_query,
            "price": self.price,
            "price_formatted": self.price_formatted,
            "source": self.source,
            "link": self.link,
            "thumbnail": self.thumbnail,
            "rating": self.rating,
            "reviews": self.reviews,
            "description": self.description,
            "estimated": self.estimated,
        }

    @classmethod
    def from_iterable(cls, records: Iterable["ActivityPriceResult"]) -> List[dict[str, object]]:
        return [record.to_dict() for record in records]


@dataclass(slots=True)
class ActivityLookup:
    """Partial result shared by the resolver tiers for a single activity."""

    activity: str
    destination: str
    source: str = "Unknown"
    link: Optional[str] = None
    price: Optional[float] = None
    price_formatted: str = ""
    description: Optional[str] = None
    rating: Optional[float] = None
    reviews: Optional[int] = None
    thumbnail: Optional[str] = None
    estimated: bool = False

    @property
    def search_query(self) -> str:
        return f"{self.activity} {self.destination}".strip()

    @property
    def price_query(self) -> str:
        return f"{self.search_query} tickets price"

    @property
    def has_price(self) -> bool:
        return self.price is not None

    def freeze(self) -> ActivityPriceResult:
        return ActivityPriceResult(
            name=self.activity,
            search_query=self.search_query,
            price=self.price,
            price_formatted=self.price_formatted,
            source=self.source,
            link=self.link,
            thumbnail=self.thumbnail,
            rating=self.rating,
            reviews=self.reviews,
            description=self.description,
            estimated=self.estimated,
        )
