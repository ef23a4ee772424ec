"""Helpers for pulling numeric amounts out of provider price fields."""
from __future__ import annotations

import re
from typing import Any, Optional
from urllib.parse import urlparse

_AMOUNT_PATTERN = re.compile(r"(\d+(?:,\d{3})*(?:\.\d{2})?)")
_SNIPPET_PRICE_PATTERN = re.compile(
    r"\$(\d+(?:\.\d{2})?)|(\d+(?:\.\d{2})?)\s*(?:USD|dollars?)",
    re.IGNORECASE,
)


def extract_price(value: Any) -> Optional[float]:
    """Return the first amount found in ``value`` or ``None``.

    Numbers are returned unchanged. Strings such as ``"$1,234.50"`` or ``"1234"``
    are scanned for a thousands-grouped amount with an optional two-digit
    fraction.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if not value:
        return None
    match = _AMOUNT_PATTERN.search(str(value))
    if not match:
        return None
    try:
        return float(match.group(1).replace(",", ""))
    except ValueError:
        return None


def find_snippet_price(text: Optional[str]) -> Optional[float]:
    """Find a ``$NN.NN`` or ``NN USD``/``NN dollars`` amount in free text."""
    if not text:
        return None
    match = _SNIPPET_PRICE_PATTERN.search(text)
    if not match:
        return None
    return float(match.group(1) or match.group(2))


def format_price(amount: Optional[float], *, estimated: bool = False) -> str:
    if amount is None:
        return "Free/Varies" if estimated else "Price varies"
    if estimated and amount == 0:
        return "Free"
    if float(amount).is_integer():
        text = f"${int(amount)}"
    else:
        text = f"${amount:.2f}"
    return f"~{text}" if estimated else text


def extract_domain(url: Optional[str]) -> str:
    if not url:
        return "Unknown"
    try:
        hostname = urlparse(url).hostname
    except ValueError:
        return "Unknown"
    if not hostname:
        return "Unknown"
    return hostname.replace("www.", "", 1)
