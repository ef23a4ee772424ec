"""City lookup fallbacks and destination imagery."""

from .catalog import COMMON_CITIES, City, CityCatalog
from .images import CityImage, city_image_query, pick_city_image

__all__ = [
    "COMMON_CITIES",
    "City",
    "CityCatalog",
    "CityImage",
    "city_image_query",
    "pick_city_image",
]
