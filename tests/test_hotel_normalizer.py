from __future__ import annotations

from travel_ai.hotels import build_hotel, build_hotel_search_result, normalize_hotels


def _property(name, price, stars=None, **extra):
    entry = {
        "name": name,
        "type": "hotel",
        "overall_rating": 4.5,
        "reviews": 812,
        "rate_per_night": {"lowest": f"${price}", "extracted_lowest": price},
        "total_rate": {"lowest": f"${price * 3}", "extracted_lowest": price * 3},
        "amenities": ["Free Wi-Fi", "Pool"],
        "images": [{"thumbnail": f"https://img.example.com/{name}.jpg"}],
        "gps_coordinates": {"latitude": 40.75, "longitude": -73.98},
        "check_in_time": "3:00 PM",
        "check_out_time": "11:00 AM",
        "property_token": f"tok-{name}",
    }
    if stars is not None:
        entry["extracted_hotel_class"] = stars
    entry.update(extra)
    return entry


def test_build_hotel_flattens_property():
    hotel = build_hotel(_property("Grand Plaza", 250, stars=5, link="https://grandplaza.example.com"))

    assert hotel is not None
    assert hotel.price_per_night == 250
    assert hotel.price_formatted == "$250"
    assert hotel.total_price == 750
    assert hotel.star_class == 5
    assert hotel.thumbnail == "https://img.example.com/Grand Plaza.jpg"

    data = hotel.to_dict()
    assert data["hotel_class"] == 5
    assert data["reviews"] == 812
    assert data["amenities"] == ["Free Wi-Fi", "Pool"]
    assert data["gps_coordinates"] == {"latitude": 40.75, "longitude": -73.98}
    assert data["is_ad"] is False


def test_build_hotel_drops_unpriced_listings():
    assert build_hotel(_property("Free Stay", 0)) is None
    assert build_hotel({"name": "No Rate"}) is None
    assert build_hotel({"rate_per_night": {"extracted_lowest": 100}}) is None


def test_normalize_hotels_applies_preferences_and_sorts_by_price():
    payload = {
        "properties": [
            _property("Palace Hotel", 400, stars=5),
            _property("Downtown Hostel", 40, stars=4),
            _property("Midtown Hotel", 150, stars=4),
            _property("Budget Inn", 90, stars=2),
        ],
        "ads": [
            {"name": "Sponsored Suites", "extracted_price": 180, "price": "$180", "hotel_class": 4},
        ],
    }

    hotels = normalize_hotels(payload, preferences="no hostels, 4 star minimum")

    assert [hotel.name for hotel in hotels] == ["Midtown Hotel", "Sponsored Suites", "Palace Hotel"]
    assert hotels[1].is_ad


def test_ads_are_capped_and_results_limited():
    payload = {
        "properties": [_property(f"Hotel {index}", 100 + index) for index in range(12)],
        "ads": [{"name": f"Ad {index}", "extracted_price": 10 + index} for index in range(5)],
    }

    hotels = normalize_hotels(payload, limit=10, max_ads=3)

    assert len(hotels) == 10
    assert [hotel.name for hotel in hotels[:3]] == ["Ad 0", "Ad 1", "Ad 2"]


def test_search_result_reports_filters_and_totals():
    payload = {
        "properties": [_property("Midtown Hotel", 150, stars=3)],
        "search_information": {"total_results": 87},
    }

    result = build_hotel_search_result(payload, preferences="only 3 star")
    data = result.to_dict()

    assert data["success"] is True
    assert data["total_results"] == 87
    assert data["filters_applied"]["min_stars"] == 3
    assert data["filters_applied"]["max_stars"] == 3
    assert len(data["hotels"]) == 1
