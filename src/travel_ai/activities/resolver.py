"""Tiered lookup of activity prices across web, local and shopping search results.

Each activity runs through the same ordered tiers, all writing into one
:class:`ActivityLookup`:

1. knowledge panel of a web search for ``"<activity> <destination>"``
2. first local/map listing, when no link is known yet
3. organic results: the first non-aggregator link plus a snippet price scan
4. shopping search for ``"<activity> <destination> tickets price"`` when no
   price is known yet
5. keyword estimate from :func:`travel_ai.pricing.estimate_price`

A failing tier is logged and skipped. :meth:`ActivityPriceResolver.resolve`
never raises.
"""
from __future__ import annotations

import asyncio
import logging
import re
from typing import Any, Callable, Dict, List, Optional, Protocol, Sequence

from travel_ai.pricing import (
    classify_activity,
    estimate_price,
    extract_domain,
    extract_price,
    find_snippet_price,
    format_price,
)

from .models import ESTIMATED_SOURCE, ActivityLookup, ActivityPriceResult

logger = logging.getLogger(__name__)

AGGREGATOR_DOMAINS = (
    "tripadvisor",
    "yelp",
    "expedia",
    "booking",
    "viator",
    "getyourguide",
    "klook",
    "timeout",
    "thrillist",
    "eater",
    "kayak",
    "agoda",
    "hotels",
)
_AGGREGATOR_PATTERN = re.compile(
    r"(?:^|\.)(?:" + "|".join(AGGREGATOR_DOMAINS) + r")\.", re.IGNORECASE
)


class ActivitySearchProvider(Protocol):
    async def web_search(self, query: str, *, num: int = 10) -> Dict[str, Any]:
        ...

    async def shopping_search(self, query: str, *, num: int = 5) -> Dict[str, Any]:
        ...


def is_aggregator(url: Optional[str]) -> bool:
    domain = extract_domain(url)
    if domain == "Unknown":
        return False
    return bool(_AGGREGATOR_PATTERN.search(domain))


def _to_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _to_int(value: Any) -> Optional[int]:
    converted = _to_float(value)
    return int(converted) if converted is not None else None


def _local_places(payload: Dict[str, Any]) -> List[Dict[str, Any]]:
    local = payload.get("local_results")
    if isinstance(local, dict):
        local = local.get("places")
    if not isinstance(local, list):
        return []
    return [place for place in local if isinstance(place, dict)]


def _organic_results(payload: Dict[str, Any]) -> List[Dict[str, Any]]:
    results = payload.get("organic_results")
    if not isinstance(results, list):
        return []
    return [result for result in results if isinstance(result, dict)]


def knowledge_panel_tier(lookup: ActivityLookup, payload: Dict[str, Any]) -> None:
    panel = payload.get("knowledge_graph")
    if not isinstance(panel, dict):
        return
    lookup.link = panel.get("website") or panel.get("reservation_link") or panel.get("directions_link")
    lookup.source = panel.get("title") or lookup.activity
    lookup.description = panel.get("description") or lookup.description
    lookup.rating = _to_float(panel.get("rating")) or lookup.rating
    lookup.reviews = _to_int(panel.get("reviews")) or lookup.reviews
    if panel.get("price"):
        lookup.price = extract_price(panel["price"])
        lookup.price_formatted = format_price(lookup.price)


def local_listing_tier(lookup: ActivityLookup, payload: Dict[str, Any]) -> None:
    if lookup.link:
        return
    places = _local_places(payload)
    if not places:
        return
    place = places[0]
    links = place.get("links") if isinstance(place.get("links"), dict) else {}
    lookup.link = links.get("website") or place.get("link")
    lookup.source = place.get("title") or extract_domain(lookup.link)
    lookup.rating = _to_float(place.get("rating"))
    lookup.reviews = _to_int(place.get("reviews"))
    lookup.thumbnail = place.get("thumbnail")
    raw_price = place.get("price")
    if raw_price and not lookup.has_price:
        lookup.price = extract_price(raw_price)
        lookup.price_formatted = format_price(lookup.price) if lookup.has_price else str(raw_price)


def organic_result_tier(lookup: ActivityLookup, payload: Dict[str, Any]) -> None:
    results = _organic_results(payload)
    if not results:
        return
    if not lookup.link:
        chosen = next((result for result in results if not is_aggregator(result.get("link"))), results[0])
        lookup.link = chosen.get("link")
        lookup.source = chosen.get("source") or extract_domain(lookup.link)
        lookup.description = chosen.get("snippet") or lookup.description
    if lookup.has_price:
        return
    for result in results:
        price = find_snippet_price(result.get("snippet"))
        if price is not None:
            lookup.price = price
            lookup.price_formatted = format_price(price)
            break


WEB_TIERS: tuple[Callable[[ActivityLookup, Dict[str, Any]], None], ...] = (
    knowledge_panel_tier,
    local_listing_tier,
    organic_result_tier,
)


def apply_shopping_results(lookup: ActivityLookup, payload: Dict[str, Any]) -> None:
    results = payload.get("shopping_results")
    if not isinstance(results, list) or not results or not isinstance(results[0], dict):
        return
    listing = results[0]
    price = extract_price(listing.get("price") or listing.get("extracted_price"))
    if price is None:
        return
    lookup.price = price
    lookup.price_formatted = format_price(price)
    if not lookup.link:
        lookup.link = listing.get("link")
        lookup.source = listing.get("source") or "Booking"
        lookup.thumbnail = lookup.thumbnail or listing.get("thumbnail")


def apply_estimate(lookup: ActivityLookup) -> None:
    lookup.price = estimate_price(lookup.activity)
    lookup.price_formatted = format_price(lookup.price, estimated=True)
    lookup.source = ESTIMATED_SOURCE
    lookup.estimated = True


def fallback_result(activity: str, destination: str) -> ActivityPriceResult:
    lookup = ActivityLookup(activity=activity, destination=destination)
    apply_estimate(lookup)
    return lookup.freeze()


class ActivityPriceResolver:
    """Resolves an activity price by walking the search tiers in order."""

    def __init__(self, provider: ActivitySearchProvider, *, web_results: int = 10, shopping_results: int = 5) -> None:
        self.provider = provider
        self.web_results = web_results
        self.shopping_results = shopping_results

    async def _web_payload(self, lookup: ActivityLookup) -> Dict[str, Any]:
        try:
            payload = await self.provider.web_search(lookup.search_query, num=self.web_results)
        except Exception:
            logger.warning("Web search failed for '%s'", lookup.search_query, exc_info=True)
            return {}
        return payload if isinstance(payload, dict) else {}

    async def _shopping_payload(self, lookup: ActivityLookup) -> Dict[str, Any]:
        try:
            payload = await self.provider.shopping_search(lookup.price_query, num=self.shopping_results)
        except Exception:
            logger.warning("Shopping search failed for '%s'", lookup.price_query, exc_info=True)
            return {}
        return payload if isinstance(payload, dict) else {}

    async def _run_tiers(self, lookup: ActivityLookup) -> None:
        payload = await self._web_payload(lookup)
        for tier in WEB_TIERS:
            try:
                tier(lookup, payload)
            except Exception:
                logger.warning("%s failed for '%s'", tier.__name__, lookup.activity, exc_info=True)

        if not lookup.has_price:
            shopping = await self._shopping_payload(lookup)
            try:
                apply_shopping_results(lookup, shopping)
            except Exception:
                logger.warning("Shopping tier failed for '%s'", lookup.activity, exc_info=True)

        if not lookup.has_price:
            logger.info(
                "No live price for '%s'; estimating from category %s",
                lookup.activity,
                classify_activity(lookup.activity) or "default",
            )
            apply_estimate(lookup)

    async def resolve(self, activity: str, destination: str) -> ActivityPriceResult:
        lookup = ActivityLookup(activity=activity, destination=destination)
        try:
            await self._run_tiers(lookup)
        except Exception:
            logger.exception("Price resolution failed for '%s'; using estimate", activity)
            return fallback_result(activity, destination)
        return lookup.freeze()


async def resolve_activity_prices(
    activities: Sequence[str],
    destination: str,
    *,
    resolver: ActivityPriceResolver,
) -> List[ActivityPriceResult]:
    """Resolve every activity concurrently; output order matches ``activities``."""
    outcomes = await asyncio.gather(
        *(resolver.resolve(activity, destination) for activity in activities),
        return_exceptions=True,
    )
    results: List[ActivityPriceResult] = []
    for activity, outcome in zip(activities, outcomes):
        if isinstance(outcome, BaseException):
            logger.warning("Price resolution for '%s' raised %r; using estimate", activity, outcome)
            results.append(fallback_result(activity, destination))
        else:
            results.append(outcome)
    return results
