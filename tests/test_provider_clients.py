from __future__ import annotations

from datetime import date

import httpx
import pytest

from travel_ai.services import (
    FlightApiClient,
    MappingClient,
    ProviderConfigurationError,
    ProviderUnavailableError,
    SerpApiClient,
)
from travel_ai.tasks.search_payloads import FlightSearchRequest, HotelSearchRequest


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def test_missing_key_raises_configuration_error():
    with pytest.raises(ProviderConfigurationError) as excinfo:
        SerpApiClient(api_key=None)
    assert excinfo.value.provider == "serpapi"
    assert excinfo.value.setting == "serpapi_key"


@pytest.mark.asyncio
async def test_serpapi_web_search_sends_engine_and_key():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"organic_results": []})

    async with _client(handler) as http:
        client = SerpApiClient(api_key="secret", client=http)
        payload = await client.web_search("Eiffel Tower Paris")

    assert payload == {"organic_results": []}
    params = seen[0].url.params
    assert params["engine"] == "google"
    assert params["q"] == "Eiffel Tower Paris"
    assert params["api_key"] == "secret"
    assert params["num"] == "10"


@pytest.mark.asyncio
async def test_serpapi_hotels_search_uses_request_fields():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"properties": []})

    request = HotelSearchRequest(
        destination="Paris",
        check_in_date=date(2025, 5, 1),
        check_out_date=date(2025, 5, 4),
        currency="eur",
    )
    async with _client(handler) as http:
        await SerpApiClient(api_key="secret", client=http, country="fr").hotels_search(request)

    params = seen[0].url.params
    assert params["engine"] == "google_hotels"
    assert params["check_in_date"] == "2025-05-01"
    assert params["check_out_date"] == "2025-05-04"
    assert params["currency"] == "EUR"
    assert params["adults"] == "2"
    assert params["gl"] == "fr"


@pytest.mark.asyncio
async def test_http_errors_are_mapped_and_key_is_masked():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, text="Invalid API key secret")

    async with _client(handler) as http:
        client = SerpApiClient(api_key="secret", client=http)
        with pytest.raises(ProviderUnavailableError) as excinfo:
            await client.web_search("anything")

    assert excinfo.value.status == 401
    assert excinfo.value.provider == "serpapi"
    assert "secret" not in excinfo.value.body


@pytest.mark.asyncio
async def test_transport_errors_are_mapped():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with _client(handler) as http:
        client = MappingClient(api_key="secret", client=http)
        with pytest.raises(ProviderUnavailableError) as excinfo:
            await client.lookup("Paris")

    assert excinfo.value.status is None


@pytest.mark.asyncio
async def test_flight_roundtrip_builds_path():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"itineraries": []})

    request = FlightSearchRequest(
        departure_airport_code="jfk",
        arrival_airport_code="lax",
        departure_date=date(2025, 3, 1),
        arrival_date=date(2025, 3, 5),
        number_of_adults=2,
    )
    async with _client(handler) as http:
        payload = await FlightApiClient(api_key="k3y", client=http).roundtrip(request)

    assert payload == {"itineraries": []}
    assert seen[0].url.path == "/roundtrip/k3y/JFK/LAX/2025-03-01/2025-03-05/2/0/0/Economy/USD"


@pytest.mark.asyncio
async def test_mapping_lookup_filters_non_dict_entries():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.params["name"] == "Paris"
        return httpx.Response(200, json=[{"type": "GEO", "name": "Paris"}, "junk"])

    async with _client(handler) as http:
        entries = await MappingClient(api_key="secret", client=http).lookup("Paris")

    assert entries == [{"type": "GEO", "name": "Paris"}]
    assert list(MappingClient.iter_entries(entries, "GEO")) == entries
    assert list(MappingClient.iter_entries(entries, "HOTEL")) == []
