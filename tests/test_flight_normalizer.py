from __future__ import annotations

from travel_ai.flights import normalize_flights, resolve_itinerary_price


def _payload(itineraries):
    return {
        "itineraries": itineraries,
        "legs": [
            {
                "id": "L1",
                "origin_place_id": 1,
                "destination_place_id": 2,
                "departure": "2025-03-01T08:00:00",
                "arrival": "2025-03-01T11:30:00",
                "duration": 330,
                "stop_count": 1,
                "segment_ids": ["S1", "S2", "S-missing"],
            },
            {
                "id": "L2",
                "origin_place_id": 2,
                "destination_place_id": 1,
                "departure": "2025-03-05T09:00:00",
                "arrival": "2025-03-05T17:00:00",
                "duration": 300,
                "stop_count": 0,
                "segment_ids": ["S3"],
            },
        ],
        "segments": [
            {
                "id": "S1",
                "origin_place_id": 1,
                "destination_place_id": 3,
                "departure": "2025-03-01T08:00:00",
                "arrival": "2025-03-01T09:30:00",
                "duration": 150,
                "marketing_flight_number": "100",
                "marketing_carrier_id": -31,
            },
            {
                "id": "S2",
                "origin_place_id": 3,
                "destination_place_id": 2,
                "duration": 120,
                "marketing_flight_number": "200",
                "marketing_carrier_id": -32,
            },
            {
                "id": "S3",
                "origin_place_id": 2,
                "destination_place_id": 1,
                "duration": 300,
                "marketing_flight_number": "300",
                "marketing_carrier_id": -31,
            },
        ],
        "places": [
            {"id": 1, "iata": "JFK", "name": "New York John F. Kennedy"},
            {"id": 2, "iata": "LAX", "name": "Los Angeles International"},
            {"id": 3, "name": "Denver"},
        ],
        "carriers": [
            {"id": -31, "name": "Delta", "iata": "DL"},
            {"id": -32, "iata": "UA"},
        ],
    }


def _itinerary(identifier, amount=None, *, leg_ids=("L1", "L2"), url=None):
    itinerary = {"id": identifier, "leg_ids": list(leg_ids)}
    if amount is not None:
        itinerary["cheapest_price"] = {"amount": amount}
    if url is not None:
        itinerary["pricing_options"] = [{"price": {"amount": amount}, "items": [{"url": url}]}]
    return itinerary


def test_normalize_flights_resolves_legs_segments_and_places():
    payload = _payload([_itinerary("IT-1", 412.5, url="/transport_deeplink/abc")])

    flights = normalize_flights(payload, currency="USD")

    assert len(flights) == 1
    flight = flights[0]
    assert flight.price == 412.5
    assert flight.currency == "USD"
    assert flight.booking_url == "https://www.skyscanner.com/transport_deeplink/abc"
    assert flight.outbound.origin_code == "JFK"
    assert flight.outbound.destination_code == "LAX"
    assert flight.outbound.stop_count == 1
    assert [segment.flight_number for segment in flight.outbound.segments] == ["100", "200"]
    assert flight.outbound.segments[0].destination_code == "Denver"
    assert flight.outbound.segments[0].carrier_name == "Delta"
    assert flight.outbound.segments[1].carrier_name == "UA"
    assert flight.inbound.origin_code == "LAX"
    assert flight.inbound.stop_count == 0

    data = flight.to_dict()
    assert data["outbound"]["from"] == "JFK"
    assert data["return"]["segments"][0]["carrier"] == "Delta"


def test_missing_legs_become_placeholders():
    payload = _payload([_itinerary("IT-1", 100, leg_ids=("L-unknown",))])

    flight = normalize_flights(payload, currency="EUR")[0]

    assert flight.outbound.origin_code == ""
    assert flight.outbound.segments == ()
    assert flight.inbound.destination_code == ""
    assert flight.booking_url is None


def test_results_are_sorted_capped_and_stable_for_ties():
    itineraries = [_itinerary(f"IT-{index}", 500 - index) for index in range(500)]
    itineraries.append(_itinerary("TIE-A", 1))
    itineraries.append(_itinerary("TIE-B", 1))

    flights = normalize_flights(_payload(itineraries), currency="USD")

    assert len(flights) == 10
    prices = [flight.price for flight in flights]
    assert prices == sorted(prices)
    assert [flight.id for flight in flights[:3]] == ["IT-499", "TIE-A", "TIE-B"]


def test_unpriced_itineraries_sort_last_with_no_price():
    payload = _payload([_itinerary("NOPRICE"), _itinerary("PRICED", 250)])

    flights = normalize_flights(payload, currency="USD")

    assert [flight.id for flight in flights] == ["PRICED", "NOPRICE"]
    assert flights[1].price is None


def test_resolve_itinerary_price_falls_back_to_pricing_options():
    assert resolve_itinerary_price({"cheapest_price": {"amount": 99}}) == 99.0
    assert resolve_itinerary_price({"pricing_options": [{"price": {"amount": "120.5"}}]}) == 120.5
    assert resolve_itinerary_price({"pricing_options": [{}]}) is None


def test_non_list_itineraries_yield_no_flights():
    assert normalize_flights({"itineraries": None}, currency="USD") == []
    assert normalize_flights(None, currency="USD") == []


def test_malformed_containers_degrade_instead_of_raising():
    payload = _payload(
        [
            {"id": "DICT-OPTIONS", "leg_ids": ["L1"], "pricing_options": {"price": {"amount": 5}}},
            {"id": "BAD-LEGS", "leg_ids": "L1", "cheapest_price": {"amount": 80}},
        ]
    )
    payload["legs"][0]["segment_ids"] = 7

    flights = normalize_flights(payload, currency="USD")

    assert [flight.id for flight in flights] == ["BAD-LEGS", "DICT-OPTIONS"]
    assert flights[1].price is None
    assert flights[1].booking_url is None
    assert flights[1].outbound.origin_code == "JFK"
    assert flights[1].outbound.segments == ()
    assert flights[0].outbound.origin_code == ""


def test_non_list_pricing_options_have_no_price():
    assert resolve_itinerary_price({"pricing_options": {"price": {"amount": 5}}}) is None
    assert resolve_itinerary_price({"pricing_options": [{"price": {"amount": 7}, "items": {"url": "/x"}}]}) == 7.0
