"""Client for the SerpAPI search engines used by the planner."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, Optional

import httpx

from .base import ProviderClient

if TYPE_CHECKING:  # pragma: no cover - import for type checking only
    from travel_ai.tasks.search_payloads import HotelSearchRequest

logger = logging.getLogger(__name__)

SERPAPI_URL = "https://serpapi.com/search.json"


class SerpApiClient(ProviderClient):
    """Web, shopping, hotel and image searches through ``search.json``."""

    provider = "serpapi"
    key_setting = "serpapi_key"

    def __init__(
        self,
        *,
        api_key: Optional[str],
        base_url: str = SERPAPI_URL,
        timeout: float = 20.0,
        country: str = "us",
        language: str = "en",
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        super().__init__(api_key=api_key, base_url=base_url, timeout=timeout, client=client)
        self.country = country
        self.language = language

    async def search(self, engine: str, **params: Any) -> Dict[str, Any]:
        logger.info("SerpAPI %s search q=%r", engine, params.get("q"))
        payload = await self._get_json(
            self._base_url,
            params={"engine": engine, "api_key": self._api_key, **params},
        )
        return payload if isinstance(payload, dict) else {}

    async def web_search(self, query: str, *, num: int = 10) -> Dict[str, Any]:
        return await self.search("google", q=query, num=num)

    async def shopping_search(self, query: str, *, num: int = 5) -> Dict[str, Any]:
        return await self.search("google_shopping", q=query, num=num)

    async def images_search(self, query: str, *, num: int = 5) -> Dict[str, Any]:
        return await self.search("google_images", q=query, num=num, safe="active", tbs="isz:l")

    async def hotels_search(self, request: "HotelSearchRequest") -> Dict[str, Any]:
        return await self.search(
            "google_hotels",
            q=request.destination,
            check_in_date=request.check_in_date.isoformat(),
            check_out_date=request.check_out_date.isoformat(),
            adults=request.adults,
            children=request.children,
            currency=request.currency,
            gl=self.country,
            hl=self.language,
        )
