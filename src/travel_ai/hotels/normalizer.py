"""Utilities to transform raw Google Hotels payloads into normalised listings."""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .models import GeoPoint, HotelFilterPredicate, HotelSearchResult, NormalizedHotel
from .preferences import parse_preferences, passes_filters

logger = logging.getLogger(__name__)

MAX_RESULTS = 10
MAX_ADS = 3


def _to_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _to_int(value: Any) -> Optional[int]:
    converted = _to_float(value)
    if converted is None:
        return None
    return int(converted)


def _star_class(value: Any) -> Optional[int]:
    stars = _to_int(value)
    if stars is None or not 1 <= stars <= 5:
        return None
    return stars


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    stripped = str(value).strip()
    return stripped or None


def _extract_rate(rate: Optional[Dict[str, Any]]) -> Tuple[Optional[float], Optional[str]]:
    if not isinstance(rate, dict):
        return None, None
    amount = _to_float(rate.get("extracted_lowest"))
    if not amount:
        amount = _to_float(rate.get("extracted_before_taxes_fees"))
    formatted = _text(rate.get("lowest")) or _text(rate.get("before_taxes_fees"))
    return amount, formatted


def _extract_thumbnail(images: Optional[Iterable[Dict[str, Any]]]) -> Optional[str]:
    for image in images or []:
        if not isinstance(image, dict):
            continue
        thumbnail = _text(image.get("thumbnail")) or _text(image.get("original_image"))
        if thumbnail:
            return thumbnail
    return None


def _extract_gps(value: Any) -> Optional[GeoPoint]:
    if not isinstance(value, dict):
        return None
    latitude = _to_float(value.get("latitude"))
    longitude = _to_float(value.get("longitude"))
    if latitude is None or longitude is None:
        return None
    return GeoPoint(latitude=latitude, longitude=longitude)


def _amenities(value: Any) -> frozenset[str]:
    if not isinstance(value, (list, tuple)):
        return frozenset()
    return frozenset(str(item).strip() for item in value if item and str(item).strip())


def build_hotel(property_: Dict[str, Any]) -> Optional[NormalizedHotel]:
    """Normalise a single ``properties`` entry; ``None`` when it has no usable price."""
    name = _text(property_.get("name"))
    if not name:
        return None
    price, price_formatted = _extract_rate(property_.get("rate_per_night"))
    if not price or price <= 0:
        logger.debug("Dropping %s: no nightly price", name)
        return None
    total_price, total_formatted = _extract_rate(property_.get("total_rate"))
    return NormalizedHotel(
        name=name,
        type=_text(property_.get("type")) or "hotel",
        rating=_to_float(property_.get("overall_rating")) or 0.0,
        review_count=_to_int(property_.get("reviews")) or 0,
        star_class=_star_class(property_.get("extracted_hotel_class")),
        price_per_night=price,
        price_formatted=price_formatted or f"${price:g}",
        total_price=total_price or None,
        total_price_formatted=total_formatted if total_price else None,
        amenities=_amenities(property_.get("amenities")),
        description=_text(property_.get("description")),
        link=_text(property_.get("link")),
        thumbnail=_extract_thumbnail(property_.get("images")),
        gps_coordinates=_extract_gps(property_.get("gps_coordinates")),
        check_in_time=_text(property_.get("check_in_time")),
        check_out_time=_text(property_.get("check_out_time")),
        property_token=_text(property_.get("property_token")),
    )


def build_hotel_from_ad(ad: Dict[str, Any]) -> Optional[NormalizedHotel]:
    name = _text(ad.get("name"))
    if not name:
        return None
    price = _to_float(ad.get("extracted_price"))
    if not price or price <= 0:
        logger.debug("Dropping sponsored listing %s: no price", name)
        return None
    return NormalizedHotel(
        name=name,
        type="hotel",
        rating=_to_float(ad.get("overall_rating")) or 0.0,
        review_count=_to_int(ad.get("reviews")) or 0,
        star_class=_star_class(ad.get("hotel_class")),
        price_per_night=price,
        price_formatted=_text(ad.get("price")) or f"${price:g}",
        amenities=_amenities(ad.get("amenities")),
        link=_text(ad.get("link")),
        thumbnail=_text(ad.get("thumbnail")),
        gps_coordinates=_extract_gps(ad.get("gps_coordinates")),
        property_token=_text(ad.get("property_token")),
        is_ad=True,
    )


def filter_hotels(
    payload: Optional[Dict[str, Any]],
    predicate: HotelFilterPredicate,
    *,
    limit: int = MAX_RESULTS,
    max_ads: int = MAX_ADS,
) -> List[NormalizedHotel]:
    payload = payload or {}
    candidates: List[NormalizedHotel] = []

    properties = payload.get("properties")
    if isinstance(properties, list):
        for entry in properties:
            if not isinstance(entry, dict):
                continue
            hotel = build_hotel(entry)
            if hotel is not None and passes_filters(hotel, predicate):
                candidates.append(hotel)

    ads = payload.get("ads")
    if isinstance(ads, list):
        for entry in ads[:max_ads]:
            if not isinstance(entry, dict):
                continue
            hotel = build_hotel_from_ad(entry)
            if hotel is not None and passes_filters(hotel, predicate):
                candidates.append(hotel)

    candidates.sort(key=lambda hotel: hotel.price_per_night)
    return candidates[:limit]


def normalize_hotels(
    payload: Optional[Dict[str, Any]],
    *,
    preferences: Optional[str] = "",
    limit: int = MAX_RESULTS,
    max_ads: int = MAX_ADS,
) -> List[NormalizedHotel]:
    """Filter listings by ``preferences`` and return the cheapest per night first."""
    predicate = parse_preferences(preferences)
    return filter_hotels(payload, predicate, limit=limit, max_ads=max_ads)


def build_hotel_search_result(
    payload: Optional[Dict[str, Any]],
    *,
    preferences: Optional[str] = "",
    limit: int = MAX_RESULTS,
    max_ads: int = MAX_ADS,
) -> HotelSearchResult:
    payload = payload or {}
    predicate = parse_preferences(preferences)
    hotels = filter_hotels(payload, predicate, limit=limit, max_ads=max_ads)
    search_info = payload.get("search_information") or {}
    total = _to_int(search_info.get("total_results")) if isinstance(search_info, dict) else None
    logger.info(
        "Kept %s hotels after filtering (%s reported by provider)",
        len(hotels),
        total if total is not None else "none",
    )
    return HotelSearchResult(hotels=hotels, filters=predicate, total_results=total or len(hotels))
