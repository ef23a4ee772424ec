"""Activity price resolution across search tiers."""

from .models import ESTIMATED_SOURCE, ActivityLookup, ActivityPriceResult
from .resolver import (
    ActivityPriceResolver,
    ActivitySearchProvider,
    fallback_result,
    is_aggregator,
    resolve_activity_prices,
)

__all__ = [
    "ESTIMATED_SOURCE",
    "ActivityLookup",
    "ActivityPriceResolver",
    "ActivityPriceResult",
    "ActivitySearchProvider",
    "fallback_result",
    "is_aggregator",
    "resolve_activity_prices",
]
