"""Pick a representative city image from an image search payload."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

_UNUSABLE_MARKERS = ("x-raw-image", "encrypted")


@dataclass(frozen=True, slots=True)
class CityImage:
    image_url: str
    thumbnail: Optional[str] = None
    source: Optional[str] = None

    def to_dict(self) -> dict[str, object]:
        return {
            "success": True,
            "image_url": self.image_url,
            "thumbnail": self.thumbnail,
            "source": self.source,
        }


def city_image_query(city: str) -> str:
    return f"{city.strip()} cityscape skyline beautiful"


def _from_entry(entry: Dict[str, Any]) -> Optional[CityImage]:
    url = entry.get("original") or entry.get("thumbnail")
    if not url:
        return None
    return CityImage(image_url=url, thumbnail=entry.get("thumbnail"), source=entry.get("source"))


def pick_city_image(payload: Optional[Dict[str, Any]]) -> Optional[CityImage]:
    images = (payload or {}).get("images_results")
    if not isinstance(images, list):
        return None
    entries = [entry for entry in images if isinstance(entry, dict)]
    for entry in entries:
        url = entry.get("original") or entry.get("thumbnail")
        if url and not any(marker in url for marker in _UNUSABLE_MARKERS):
            return _from_entry(entry)
    if entries:
        return _from_entry(entries[0])
    return None
