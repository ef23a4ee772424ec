"""Client for the FlightAPI round-trip pricing endpoint."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, Optional

import httpx

from .base import ProviderClient

if TYPE_CHECKING:  # pragma: no cover - import for type checking only
    from travel_ai.tasks.search_payloads import FlightSearchRequest

logger = logging.getLogger(__name__)

FLIGHT_API_URL = "https://api.flightapi.io"


class FlightApiClient(ProviderClient):
    provider = "flightapi"
    key_setting = "flight_api_key"

    def __init__(
        self,
        *,
        api_key: Optional[str],
        base_url: str = FLIGHT_API_URL,
        timeout: float = 45.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        super().__init__(api_key=api_key, base_url=base_url, timeout=timeout, client=client)

    def roundtrip_url(self, request: "FlightSearchRequest") -> str:
        parts = [
            "roundtrip",
            self._api_key,
            request.departure_airport_code,
            request.arrival_airport_code,
            request.departure_date.isoformat(),
            request.return_date.isoformat(),
            str(request.adults),
            str(request.children),
            str(request.infants),
            request.cabin_class,
            request.currency,
        ]
        return f"{self._base_url}/{'/'.join(parts)}"

    async def roundtrip(self, request: "FlightSearchRequest") -> Dict[str, Any]:
        url = self.roundtrip_url(request)
        logger.info(
            "Fetching round trips %s -> %s (%s / %s)",
            request.departure_airport_code,
            request.arrival_airport_code,
            request.departure_date,
            request.return_date,
        )
        payload = await self._get_json(url)
        return payload if isinstance(payload, dict) else {}
