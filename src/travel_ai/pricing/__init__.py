"""Price parsing and fallback estimation helpers."""

from .estimator import DEFAULT_ESTIMATE, classify_activity, estimate_price
from .prices import extract_domain, extract_price, find_snippet_price, format_price

__all__ = [
    "DEFAULT_ESTIMATE",
    "classify_activity",
    "estimate_price",
    "extract_domain",
    "extract_price",
    "find_snippet_price",
    "format_price",
]
