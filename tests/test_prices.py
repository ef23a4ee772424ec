from __future__ import annotations

import pytest

from travel_ai.pricing import extract_domain, extract_price, find_snippet_price, format_price


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("$1,234.50", 1234.5),
        ("From 45 USD per person", 45.0),
        ("1234", 1234.0),
        (30, 30),
        (12.5, 12.5),
        ("free entry", None),
        ("", None),
        (None, None),
        (True, None),
    ],
)
def test_extract_price(value, expected):
    assert extract_price(value) == expected


def test_find_snippet_price_accepts_dollar_sign_and_currency_words():
    assert find_snippet_price("Adult tickets cost $29.99 online") == 29.99
    assert find_snippet_price("Entry is 15 dollars at the door") == 15.0
    assert find_snippet_price("Prices start at 40 usd") == 40.0
    assert find_snippet_price("Open daily from 9am") is None
    assert find_snippet_price(None) is None


def test_format_price_live_and_estimated():
    assert format_price(45) == "$45"
    assert format_price(45.5) == "$45.50"
    assert format_price(None) == "Price varies"
    assert format_price(40, estimated=True) == "~$40"
    assert format_price(0, estimated=True) == "Free"
    assert format_price(None, estimated=True) == "Free/Varies"


def test_extract_domain_strips_www():
    assert extract_domain("https://www.toureiffel.paris/en/tickets") == "toureiffel.paris"
    assert extract_domain("https://shop.example.com/x") == "shop.example.com"
    assert extract_domain(None) == "Unknown"
    assert extract_domain("not a url") == "Unknown"
