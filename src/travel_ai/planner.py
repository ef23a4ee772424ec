"""Composes provider clients with the flight, hotel and activity normalizers."""
from __future__ import annotations

import logging
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from travel_ai.activities import (
    ActivityPriceResolver,
    ActivityPriceResult,
    fallback_result,
    resolve_activity_prices,
)
from travel_ai.config.settings import Settings
from travel_ai.destinations import City, CityCatalog, CityImage, city_image_query, pick_city_image
from travel_ai.flights import NormalizedFlight, normalize_flights
from travel_ai.hotels import HotelSearchResult, build_hotel_search_result
from travel_ai.services import (
    FlightApiClient,
    MappingClient,
    ProviderConfigurationError,
    ProviderError,
    SerpApiClient,
)
from travel_ai.services.base import ProviderClient
from travel_ai.tasks.search_payloads import ActivitySearchRequest, FlightSearchRequest, HotelSearchRequest

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FlightSearchResult:
    request: FlightSearchRequest
    flights: List[NormalizedFlight]
    raw_result_count: int

    def to_dict(self) -> dict[str, object]:
        return {
            "success": True,
            "search_params": self.request.model_dump(mode="json"),
            "raw_result_count": self.raw_result_count,
            "flights": [flight.to_dict() for flight in self.flights],
        }


@dataclass(frozen=True, slots=True)
class CityLookupResult:
    cities: List[Dict[str, Any]] = field(default_factory=list)
    hotels: List[Dict[str, Any]] = field(default_factory=list)
    from_fallback: bool = False

    def to_dict(self) -> dict[str, object]:
        return {"cities": self.cities, "hotels": self.hotels, "from_fallback": self.from_fallback}

    @classmethod
    def from_city(cls, city: City) -> "CityLookupResult":
        return cls(cities=[city.to_dict()], from_fallback=True)


def _details(entry: Dict[str, Any]) -> Dict[str, Any]:
    details = entry.get("details")
    return details if isinstance(details, dict) else {}


def _mapping_city(entry: Dict[str, Any]) -> Dict[str, Any]:
    details = _details(entry)
    return {
        "id": entry.get("document_id"),
        "name": entry.get("name"),
        "display_name": details.get("highlighted_name") or entry.get("name"),
        "parent_name": details.get("parent_name"),
        "coords": entry.get("coords"),
    }


def _mapping_hotel(entry: Dict[str, Any]) -> Dict[str, Any]:
    summary = _mapping_city(entry)
    summary["address"] = _details(entry).get("address")
    return summary


class TravelPlanner(AbstractAsyncContextManager["TravelPlanner"]):
    """Entry point used by the API and CLI.

    Clients are created on first use so that a missing credential only affects
    the searches that need it.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        serpapi: Optional[SerpApiClient] = None,
        flight_api: Optional[FlightApiClient] = None,
        mapping: Optional[MappingClient] = None,
        catalog: Optional[CityCatalog] = None,
    ) -> None:
        self.settings = settings
        self._serpapi = serpapi
        self._flight_api = flight_api
        self._mapping = mapping
        self._owned: List[ProviderClient] = []
        if catalog is None:
            catalog = (
                CityCatalog.load(settings.city_catalog_path)
                if settings.city_catalog_path
                else CityCatalog.default()
            )
        self.catalog = catalog

    async def aclose(self) -> None:
        for client in self._owned:
            await client.aclose()
        self._owned.clear()

    async def __aexit__(self, exc_type, exc, exc_tb) -> None:
        await self.aclose()

    @property
    def serpapi(self) -> SerpApiClient:
        if self._serpapi is None:
            self._serpapi = SerpApiClient(
                api_key=self.settings.require("serpapi_key"),
                base_url=self.settings.serpapi_base_url,
                timeout=self.settings.http_timeout_s,
                country=self.settings.search_country,
                language=self.settings.search_language,
            )
            self._owned.append(self._serpapi)
        return self._serpapi

    @property
    def flight_api(self) -> FlightApiClient:
        if self._flight_api is None:
            self._flight_api = FlightApiClient(
                api_key=self.settings.require("flight_api_key"),
                base_url=self.settings.flight_api_base_url,
                timeout=self.settings.flight_timeout_s,
            )
            self._owned.append(self._flight_api)
        return self._flight_api

    @property
    def mapping(self) -> MappingClient:
        if self._mapping is None:
            self._mapping = MappingClient(
                api_key=self.settings.require("mapping_api_key"),
                base_url=self.settings.mapping_api_base_url,
                timeout=self.settings.http_timeout_s,
            )
            self._owned.append(self._mapping)
        return self._mapping

    async def search_flights(self, request: FlightSearchRequest) -> FlightSearchResult:
        payload = await self.flight_api.roundtrip(request)
        itineraries = payload.get("itineraries")
        flights = normalize_flights(
            payload,
            currency=request.currency,
            booking_origin=self.settings.flight_booking_origin,
            limit=self.settings.max_flight_results,
        )
        return FlightSearchResult(
            request=request,
            flights=flights,
            raw_result_count=len(itineraries) if isinstance(itineraries, list) else 0,
        )

    async def search_hotels(self, request: HotelSearchRequest) -> HotelSearchResult:
        payload = await self.serpapi.hotels_search(request)
        return build_hotel_search_result(
            payload,
            preferences=request.preferences,
            limit=self.settings.max_hotel_results,
            max_ads=self.settings.max_hotel_ads,
        )

    def activity_resolver(self) -> ActivityPriceResolver:
        return ActivityPriceResolver(
            self.serpapi,
            web_results=self.settings.web_search_results,
            shopping_results=self.settings.shopping_search_results,
        )

    async def price_activities(self, request: ActivitySearchRequest) -> List[ActivityPriceResult]:
        try:
            resolver = self.activity_resolver()
        except ProviderConfigurationError as exc:
            logger.warning("%s; estimating every activity price", exc)
            return [fallback_result(activity, request.destination) for activity in request.activities]
        return await resolve_activity_prices(request.activities, request.destination, resolver=resolver)

    async def city_image(self, city: str) -> Optional[CityImage]:
        payload = await self.serpapi.images_search(city_image_query(city))
        return pick_city_image(payload)

    async def lookup_city(self, name: str) -> CityLookupResult:
        fallback = self.catalog.find(name)
        try:
            entries = await self.mapping.lookup(name)
        except ProviderError as exc:
            if fallback is None:
                raise
            logger.info("Mapping lookup for '%s' failed (%s); using catalog entry %s", name, exc, fallback.name)
            return CityLookupResult.from_city(fallback)

        cities = [_mapping_city(entry) for entry in MappingClient.iter_entries(entries, "GEO")]
        hotels = [_mapping_hotel(entry) for entry in MappingClient.iter_entries(entries, "HOTEL")][:5]
        if not cities and fallback is not None:
            logger.info("Mapping lookup for '%s' returned no cities; using catalog entry", name)
            return CityLookupResult(cities=[fallback.to_dict()], hotels=hotels, from_fallback=True)
        return CityLookupResult(cities=cities, hotels=hotels)
