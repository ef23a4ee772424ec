from __future__ import annotations

import json

import pytest

from travel_ai.destinations import CityCatalog, city_image_query, pick_city_image


def test_catalog_exact_and_partial_matches():
    catalog = CityCatalog.default()

    assert catalog.find("NYC").id == "60763"
    assert catalog.find("  Las   Vegas ").name == "Las Vegas, Nevada"
    assert catalog.find("Paris, France").id == "187147"
    assert catalog.find("Atlanta").name == "Atlanta, Georgia"
    assert catalog.find("Reykjavik") is None
    assert catalog.find("") is None


def test_catalog_load_extends_defaults(tmp_path):
    path = tmp_path / "cities.json"
    path.write_text(json.dumps({"cities": [{"id": 189970, "name": "Oslo, Norway", "aliases": ["oslo"]}]}))

    catalog = CityCatalog.load(path)

    assert catalog.source == path
    assert catalog.find("Oslo").to_dict() == {"id": "189970", "name": "Oslo, Norway", "display_name": "Oslo, Norway"}
    assert catalog.find("tokyo") is not None
    assert len(CityCatalog.load(path, include_defaults=False)) == 1


def test_catalog_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        CityCatalog.load(tmp_path / "missing.json")


def test_pick_city_image_skips_unusable_urls():
    payload = {
        "images_results": [
            {"original": "x-raw-image:///abc", "thumbnail": "https://t.example.com/1.jpg"},
            {"original": "https://img.example.com/paris.jpg", "thumbnail": "https://t.example.com/2.jpg", "source": "Example"},
        ]
    }

    image = pick_city_image(payload)

    assert image is not None
    assert image.image_url == "https://img.example.com/paris.jpg"
    assert image.to_dict()["success"] is True
    assert city_image_query(" Paris ") == "Paris cityscape skyline beautiful"


def test_pick_city_image_falls_back_to_first_entry_or_none():
    only_bad = {"images_results": [{"original": "https://encrypted-tbn0.example.com/a"}]}

    assert pick_city_image(only_bad).image_url == "https://encrypted-tbn0.example.com/a"
    assert pick_city_image({}) is None
    assert pick_city_image(None) is None


def test_catalog_partial_matches_need_whole_words():
    catalog = CityCatalog.default()

    assert catalog.find("Lagos") is None
    assert catalog.find("Downtown LA") is not None
    assert catalog.find("Washington D.C.").id == "60902"
