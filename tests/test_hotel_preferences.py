from __future__ import annotations

from travel_ai.hotels import HotelFilterPredicate, NormalizedHotel, parse_preferences, passes_filters


def _hotel(name: str, stars: int | None, *, type_: str = "hotel") -> NormalizedHotel:
    return NormalizedHotel(
        name=name,
        type=type_,
        rating=4.2,
        review_count=100,
        star_class=stars,
        price_per_night=120.0,
        price_formatted="$120",
    )


def test_empty_preferences_produce_open_predicate():
    assert parse_preferences("") == HotelFilterPredicate()
    assert parse_preferences(None) == HotelFilterPredicate()


def test_no_hostels_with_star_minimum():
    predicate = parse_preferences("No hostels, 4 star minimum")

    assert predicate.excluded_types == frozenset({"hostel"})
    assert predicate.min_stars == 4
    assert predicate.max_stars is None
    assert not passes_filters(_hotel("Downtown Hostel", 4), predicate)
    assert not passes_filters(_hotel("Harbour Backpackers Lodge", 4), predicate)
    assert not passes_filters(_hotel("City Inn", 3), predicate)
    assert passes_filters(_hotel("Grand Plaza", 5), predicate)


def test_only_n_star_sets_exact_bounds():
    predicate = parse_preferences("only 3 star please")

    assert (predicate.min_stars, predicate.max_stars) == (3, 3)
    assert passes_filters(_hotel("Midtown Hotel", 3), predicate)
    assert not passes_filters(_hotel("Palace Hotel", 5), predicate)


def test_first_star_rule_wins():
    predicate = parse_preferences("at least 2 stars, 4+ stars ideally")

    assert predicate.min_stars == 2


def test_luxury_raises_minimum_and_rejects_unrated():
    predicate = parse_preferences("something luxurious, hotels only")

    assert predicate.prefer_luxury
    assert predicate.min_stars == 4
    assert predicate.exclude_vacation_rentals
    assert not passes_filters(_hotel("Mystery Suites", None), predicate)
    assert not passes_filters(_hotel("Beach House", 5, type_="Vacation rental"), predicate)


def test_budget_caps_stars_only_without_explicit_minimum():
    budget = parse_preferences("cheap and cheerful")
    assert budget.prefer_budget
    assert budget.max_stars == 3
    assert passes_filters(_hotel("Unrated Guesthouse", None), budget)
    assert not passes_filters(_hotel("Palace Hotel", 5), budget)

    explicit = parse_preferences("affordable but at least 4 stars")
    assert explicit.min_stars == 4
    assert explicit.max_stars is None
    assert not explicit.prefer_budget


def test_no_budget_sets_three_star_floor():
    predicate = parse_preferences("no budget places, no motels")

    assert predicate.min_stars == 3
    assert predicate.excluded_types == frozenset({"motel"})
    assert not passes_filters(_hotel("Roadside Motel", 4), predicate)
