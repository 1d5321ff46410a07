"""Parsing helpers for free-text KOPIS fields."""

import math
import re

FREE_ADMISSION = "전석무료"

# "45,000원", "R석 70,000원" -> amounts followed by the won sign
_PRICE_RE = re.compile(r"(\d[\d,]*)\s*원")


def parse_price(price_text: str | None) -> tuple[int | None, int | None]:
    """
    Extract the minimum and maximum ticket price from a price guide.

    Examples:
        >>> parse_price("전석 45,000원")
        (45000, 45000)
        >>> parse_price("R석 70,000원, S석 50,000원")
        (50000, 70000)
        >>> parse_price("전석무료")
        (0, 0)

    Args:
        price_text: KOPIS ``pcseguidance`` text

    Returns:
        ``(min_price, max_price)``; ``(None, None)`` when no amount is found
    """
    if not price_text or not price_text.strip():
        return 0, 0

    if price_text.replace(" ", "") == FREE_ADMISSION:
        return 0, 0

    amounts = [int(m.replace(",", "")) for m in _PRICE_RE.findall(price_text)]
    if not amounts:
        return None, None
    return min(amounts), max(amounts)


def to_float(text: str | None) -> float:
    """Coerce numeric text to float; malformed, missing or non-finite text gives NaN."""
    try:
        value = float(str(text).strip())
    except (TypeError, ValueError):
        return math.nan
    return value if math.isfinite(value) else math.nan


def nan_to_none(value: float) -> float | None:
    """Map NaN to None so it is stored as missing."""
    return None if math.isnan(value) else value
