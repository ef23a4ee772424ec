"""Hotel domain models, preference parsing and normalization helpers."""

from .models import GeoPoint, HotelFilterPredicate, HotelSearchResult, NormalizedHotel
from .normalizer import (
    build_hotel,
    build_hotel_from_ad,
    build_hotel_search_result,
    filter_hotels,
    normalize_hotels,
)
from .preferences import parse_preferences, passes_filters

__all__ = [
    "GeoPoint",
    "HotelFilterPredicate",
    "HotelSearchResult",
    "NormalizedHotel",
    "build_hotel",
    "build_hotel_from_ad",
    "build_hotel_search_result",
    "filter_hotels",
    "normalize_hotels",
    "parse_preferences",
    "passes_filters",
]
