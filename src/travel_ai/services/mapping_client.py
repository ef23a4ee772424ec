"""Client for the city/hotel name mapping lookup."""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

import httpx

from .base import ProviderClient

logger = logging.getLogger(__name__)

MAPPING_URL = "https://api.makcorps.com/mapping"


class MappingClient(ProviderClient):
    """Resolves free-text place names into provider city and hotel ids."""

    provider = "mapping"
    key_setting = "mapping_api_key"

    def __init__(
        self,
        *,
        api_key: Optional[str],
        base_url: str = MAPPING_URL,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        super().__init__(api_key=api_key, base_url=base_url, timeout=timeout, client=client)

    async def lookup(self, name: str) -> List[Dict[str, Any]]:
        logger.debug("Mapping lookup name='%s'", name)
        payload = await self._get_json(self._base_url, params={"api_key": self._api_key, "name": name})
        if not isinstance(payload, list):
            return []
        return [entry for entry in payload if isinstance(entry, dict)]

    @staticmethod
    def iter_entries(payload: Iterable[Dict[str, Any]], entry_type: str) -> Iterable[Dict[str, Any]]:
        for entry in payload:
            if entry.get("type") == entry_type:
                yield entry
