"""Rule-based parsing of free-text hotel preferences."""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Callable, Optional

from .models import HotelFilterPredicate, NormalizedHotel

logger = logging.getLogger(__name__)

_HOSTEL_SYNONYMS = ("backpacker", "dormitory", "dorm")

LUXURY_PATTERN = re.compile(
    r"luxury|luxurious|high[\s-]?end|5[\s-]?star|five[\s-]?star|upscale|premium", re.IGNORECASE
)
BUDGET_PATTERN = re.compile(
    r"budget[\s-]?friendly|cheap|affordable|inexpensive|low[\s-]?cost", re.IGNORECASE
)


@dataclass
class _FilterState:
    excluded_types: set[str] = field(default_factory=set)
    min_stars: Optional[int] = None
    max_stars: Optional[int] = None
    prefer_luxury: bool = False
    prefer_budget: bool = False
    exclude_vacation_rentals: bool = False

    def freeze(self) -> HotelFilterPredicate:
        return HotelFilterPredicate(
            excluded_types=frozenset(self.excluded_types),
            min_stars=self.min_stars,
            max_stars=self.max_stars,
            prefer_luxury=self.prefer_luxury,
            prefer_budget=self.prefer_budget,
            exclude_vacation_rentals=self.exclude_vacation_rentals,
        )


def _exclude_type(kind: str) -> Callable[[_FilterState, "re.Match[str]"], None]:
    def effect(state: _FilterState, _match: "re.Match[str]") -> None:
        state.excluded_types.add(kind)

    return effect


def _exclude_vacation_rentals(state: _FilterState, _match: "re.Match[str]") -> None:
    state.exclude_vacation_rentals = True


def _exclude_budget_tier(state: _FilterState, _match: "re.Match[str]") -> None:
    state.min_stars = 3


def _min_stars(state: _FilterState, match: "re.Match[str]") -> None:
    state.min_stars = int(match.group("stars"))


def _exact_stars(state: _FilterState, match: "re.Match[str]") -> None:
    stars = int(match.group("stars"))
    state.min_stars = stars
    state.max_stars = stars


EXCLUSION_RULES: tuple[tuple["re.Pattern[str]", Callable[[_FilterState, "re.Match[str]"], None]], ...] = tuple(
    (re.compile(pattern, re.IGNORECASE), effect)
    for pattern, effect in (
        (r"no\s*(?:hostels?|backpackers?)", _exclude_type("hostel")),
        (r"don'?t\s*want\s*(?:hostels?|backpackers?)", _exclude_type("hostel")),
        (r"avoid\s*(?:hostels?|backpackers?)", _exclude_type("hostel")),
        (r"no\s*motels?", _exclude_type("motel")),
        (r"don'?t\s*want\s*motels?", _exclude_type("motel")),
        (r"avoid\s*motels?", _exclude_type("motel")),
        (r"no\s*airbnbs?", _exclude_vacation_rentals),
        (r"no\s*vacation\s*rentals?", _exclude_vacation_rentals),
        (r"no\s*short[\s-]?term\s*rentals?", _exclude_vacation_rentals),
        (r"hotels?\s*only", _exclude_vacation_rentals),
        (r"no\s*budget", _exclude_budget_tier),
        (r"no\s*cheap", _exclude_budget_tier),
    )
)

# Only the first matching star rule applies.
STAR_RULES: tuple[tuple["re.Pattern[str]", Callable[[_FilterState, "re.Match[str]"], None]], ...] = tuple(
    (re.compile(pattern, re.IGNORECASE), effect)
    for pattern, effect in (
        (r"only\s*(?P<stars>[1-5])[\s-]*stars?", _exact_stars),
        (r"(?P<stars>[1-5])[\s-]*stars?\s*(?:or\s*)?(?:above|higher|better|\+|minimum|min)", _min_stars),
        (r"at\s*least\s*(?P<stars>[1-5])[\s-]*stars?", _min_stars),
        (r"minimum\s*(?:of\s*)?(?P<stars>[1-5])[\s-]*stars?", _min_stars),
        (r"(?P<stars>[1-5])\+\s*stars?", _min_stars),
    )
)


def parse_preferences(preferences: Optional[str]) -> HotelFilterPredicate:
    """Translate free text such as "no hostels, 4 star minimum" into a predicate."""
    text = (preferences or "").lower()
    state = _FilterState()
    if not text.strip():
        return state.freeze()

    for pattern, effect in EXCLUSION_RULES:
        match = pattern.search(text)
        if match:
            effect(state, match)

    for pattern, effect in STAR_RULES:
        match = pattern.search(text)
        if match:
            effect(state, match)
            break

    if LUXURY_PATTERN.search(text):
        state.prefer_luxury = True
        if state.min_stars is None or state.min_stars < 4:
            state.min_stars = 4

    # Budget intent never overrides an explicit minimum.
    if BUDGET_PATTERN.search(text) and state.min_stars is None:
        state.prefer_budget = True
        state.max_stars = 3

    predicate = state.freeze()
    logger.debug("Parsed hotel preferences %r into %s", preferences, predicate)
    return predicate


def passes_filters(hotel: NormalizedHotel, predicate: HotelFilterPredicate) -> bool:
    name = hotel.name.lower()
    for excluded in predicate.excluded_types:
        if excluded in name:
            return False
        if excluded == "hostel" and any(synonym in name for synonym in _HOSTEL_SYNONYMS):
            return False

    if predicate.exclude_vacation_rentals and "vacation rental" in hotel.type.lower():
        return False

    if hotel.star_class is not None:
        if predicate.min_stars is not None and hotel.star_class < predicate.min_stars:
            return False
        if predicate.max_stars is not None and hotel.star_class > predicate.max_stars:
            return False
    elif predicate.prefer_luxury:
        return False

    return True
