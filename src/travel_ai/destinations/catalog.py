"""City catalog used when the mapping provider is unavailable."""
from __future__ import annotations

import json
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional


@dataclass(frozen=True)
class City:
    """A provider city id with its display name."""

    id: str
    name: str

    def to_dict(self) -> dict[str, object]:
        return {"id": self.id, "name": self.name, "display_name": self.name}


_NEW_YORK = City("60763", "New York City, New York")
_LOS_ANGELES = City("32655", "Los Angeles, California")
_SAN_FRANCISCO = City("60713", "San Francisco, California")
_LAS_VEGAS = City("45963", "Las Vegas, Nevada")
_WASHINGTON = City("60902", "Washington D.C.")
_HONOLULU = City("60603", "Honolulu, Hawaii")

COMMON_CITIES: dict[str, City] = {
    "new york": _NEW_YORK,
    "nyc": _NEW_YORK,
    "new york city": _NEW_YORK,
    "manhattan": _NEW_YORK,
    "los angeles": _LOS_ANGELES,
    "la": _LOS_ANGELES,
    "chicago": City("35805", "Chicago, Illinois"),
    "san francisco": _SAN_FRANCISCO,
    "sf": _SAN_FRANCISCO,
    "miami": City("34438", "Miami, Florida"),
    "las vegas": _LAS_VEGAS,
    "vegas": _LAS_VEGAS,
    "boston": City("60745", "Boston, Massachusetts"),
    "seattle": City("60878", "Seattle, Washington"),
    "washington dc": _WASHINGTON,
    "washington": _WASHINGTON,
    "dc": _WASHINGTON,
    "orlando": City("34515", "Orlando, Florida"),
    "denver": City("60439", "Denver, Colorado"),
    "austin": City("30196", "Austin, Texas"),
    "dallas": City("60449", "Dallas, Texas"),
    "houston": City("56003", "Houston, Texas"),
    "atlanta": City("60898", "Atlanta, Georgia"),
    "philadelphia": City("60795", "Philadelphia, Pennsylvania"),
    "san diego": City("60750", "San Diego, California"),
    "phoenix": City("60811", "Phoenix, Arizona"),
    "london": City("186338", "London, United Kingdom"),
    "paris": City("187147", "Paris, France"),
    "tokyo": City("298184", "Tokyo, Japan"),
    "rome": City("187791", "Rome, Italy"),
    "barcelona": City("187497", "Barcelona, Spain"),
    "amsterdam": City("188590", "Amsterdam, Netherlands"),
    "dubai": City("295424", "Dubai, United Arab Emirates"),
    "singapore": City("294265", "Singapore"),
    "hong kong": City("294217", "Hong Kong, China"),
    "sydney": City("255060", "Sydney, Australia"),
    "toronto": City("155019", "Toronto, Canada"),
    "vancouver": City("154943", "Vancouver, Canada"),
    "cancun": City("150807", "Cancun, Mexico"),
    "hawaii": _HONOLULU,
    "honolulu": _HONOLULU,
    "maui": City("60634", "Maui, Hawaii"),
}


def _normalise(text: str) -> str:
    return re.sub(r"\s+", " ", text.lower()).strip()


class CityCatalog:
    """Alias table mapping lower-case city names to provider city ids."""

    def __init__(self, cities: Mapping[str, City], *, source: Optional[Path] = None) -> None:
        self._cities = dict(cities)
        self._source = source

    @property
    def source(self) -> Optional[Path]:
        return self._source

    def __len__(self) -> int:
        return len(self._cities)

    def find(self, name: str) -> Optional[City]:
        """Exact alias match first, then the longest alias appearing in ``name`` as whole words."""
        normalized = _normalise(name)
        if not normalized:
            return None
        if normalized in self._cities:
            return self._cities[normalized]
        for alias, city in sorted(self._cities.items(), key=lambda item: len(item[0]), reverse=True):
            if re.search(rf"\b{re.escape(alias)}\b", normalized):
                return city
        return None

    @classmethod
    def default(cls) -> "CityCatalog":
        return cls(COMMON_CITIES)

    @classmethod
    def load(cls, path: Path, *, include_defaults: bool = True) -> "CityCatalog":
        if not path.exists():
            raise FileNotFoundError(f"City catalog not found at {path}")
        data = json.loads(path.read_text())
        cities: dict[str, City] = dict(COMMON_CITIES) if include_defaults else {}
        for entry in data.get("cities", []):
            city = City(id=str(entry["id"]), name=entry.get("name", entry["id"]))
            aliases = entry.get("aliases") or [city.name]
            for alias in aliases:
                cities[_normalise(alias)] = city
        return cls(cities, source=path)
