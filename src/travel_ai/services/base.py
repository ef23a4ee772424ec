"""Shared async HTTP plumbing for provider clients."""
from __future__ import annotations

import logging
from contextlib import AbstractAsyncContextManager
from typing import Any, Dict, Mapping, Optional

import httpx

from .errors import ProviderConfigurationError, ProviderUnavailableError

logger = logging.getLogger(__name__)

USER_AGENT = "travel-ai/0.1.0"


class ProviderClient(AbstractAsyncContextManager["ProviderClient"]):
    """Thin wrapper around :class:`httpx.AsyncClient` returning decoded JSON."""

    provider = "provider"
    key_setting = "api_key"

    def __init__(
        self,
        *,
        api_key: Optional[str],
        base_url: str,
        timeout: float = 20.0,
        headers: Optional[Dict[str, str]] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        if not api_key:
            raise ProviderConfigurationError(self.provider, self.key_setting)
        default_headers = {"Accept": "application/json", "User-Agent": USER_AGENT}
        if headers:
            default_headers.update(headers)
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout, headers=default_headers)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aexit__(self, exc_type, exc, exc_tb) -> None:
        await self.aclose()

    def _mask(self, text: str) -> str:
        return text.replace(self._api_key, "***")

    async def _get_json(self, url: str, *, params: Optional[Mapping[str, Any]] = None) -> Any:
        request_params = {key: str(value) for key, value in (params or {}).items() if value is not None}
        try:
            response = await self._client.get(url, params=request_params)
        except httpx.HTTPError as exc:
            logger.warning("%s request failed: %s", self.provider, self._mask(str(exc)))
            raise ProviderUnavailableError(self.provider, message=f"{self.provider} request failed: {self._mask(str(exc))}") from exc

        logger.debug("%s GET %s -> %s", self.provider, self._mask(str(response.request.url)), response.status_code)
        if response.is_error:
            body = self._mask(response.text[:512])
            logger.warning("%s returned HTTP %s: %s", self.provider, response.status_code, body)
            raise ProviderUnavailableError(self.provider, response.status_code, body)
        try:
            return response.json()
        except ValueError as exc:
            raise ProviderUnavailableError(
                self.provider,
                response.status_code,
                message=f"{self.provider} returned a non-JSON body",
            ) from exc
