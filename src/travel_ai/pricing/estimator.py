"""Keyword-bucket price estimates for activities without live pricing."""
from __future__ import annotations

import re
from typing import Optional

# Evaluated top to bottom; the first matching category wins.
_PRICE_BUCKETS: tuple[tuple[str, "re.Pattern[str]", Optional[float]], ...] = tuple(
    (category, re.compile(pattern, re.IGNORECASE), price)
    for category, pattern, price in (
        ("theme_park", r"theme\s*park|amusement|disney|universal studios", 100),
        (
            "free_outdoor",
            r"walk|stroll|wander|explore\s+(?:the\s+)?(?:streets?|neighbou?rhood|area)"
            r"|\bpark\b|garden|beach|sunset|sunrise|window\s*shop",
            0,
        ),
        ("museum", r"museum|gallery|exhibit", 25),
        ("heritage", r"temple|shrine|church|cathedral|mosque", 10),
        ("observation", r"tower|observation|viewpoint|skydeck", 35),
        ("zoo", r"\bzoo\b|aquarium", 30),
        ("fine_dining", r"fine\s*dining|michelin|tasting\s*menu", 150),
        ("breakfast", r"breakfast|brunch", 20),
        ("lunch", r"lunch|\bcafe\b|coffee", 25),
        ("dinner", r"dinner|restaurant|dining", 50),
        ("street_food", r"street\s*food|food\s*(?:market|stall|hall)|night\s*market", 15),
        ("nightlife", r"\bbars?\b|pub\b|speakeasy|cocktail|drinks?\b|nightlife|club", 40),
        ("shopping", r"\bshop|shopping|market|\bmall\b|boutique", None),
        ("tour", r"\btour|guided", 45),
        ("class", r"cooking\s*class|workshop|\bclass\b", 80),
        ("wellness", r"\bspa\b|massage|wellness|onsen", 100),
        ("cruise", r"cruise|boat|ferry", 60),
        ("hike", r"hik(?:e|ing)|trek", 0),
        ("bike", r"\bbike|cycling|rental", 30),
        ("diving", r"snorkel|\bdive\b|diving", 80),
        ("lesson", r"surf(?:ing)?|lesson", 70),
    )
)

DEFAULT_ESTIMATE = 25.0


def classify_activity(label: str) -> Optional[str]:
    """Return the name of the first category matching ``label``."""
    for category, pattern, _price in _PRICE_BUCKETS:
        if pattern.search(label or ""):
            return category
    return None


def estimate_price(label: str) -> Optional[float]:
    """Estimate a price for ``label`` from its wording alone.

    ``0`` means the activity is free, ``None`` means the cost varies (shopping).
    Unrecognised activities fall back to :data:`DEFAULT_ESTIMATE`.
    """
    text = (label or "").lower()
    for _category, pattern, price in _PRICE_BUCKETS:
        if pattern.search(text):
            return None if price is None else float(price)
    return DEFAULT_ESTIMATE
