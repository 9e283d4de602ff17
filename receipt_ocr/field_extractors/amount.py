"""Total amount extraction with a labeled pass and a bare-number fallback."""
from __future__ import annotations

from typing import List, Optional

from ..patterns import (
    AMOUNT_PATTERN,
    CONFIDENCE_WEIGHTS,
    FALLBACK_AMOUNT_RANGE,
    SIMPLE_AMOUNT_PATTERN,
    parse_number,
)
from .base import FieldMatch


def _labeled_amount(text: str) -> Optional[float]:
    matches = list(AMOUNT_PATTERN.finditer(text))
    if not matches:
        return None
    # Grand totals sit below subtotals, so the last labeled amount wins.
    return parse_number(matches[-1].group(1))


def _fallback_amounts(text: str) -> List[float]:
    low, high = FALLBACK_AMOUNT_RANGE
    values = [parse_number(match.group(0)) for match in SIMPLE_AMOUNT_PATTERN.finditer(text)]
    return [value for value in values if low < value < high]


def extract_amount(text: str) -> Optional[FieldMatch]:
    """Return the receipt total.

    A labeled amount (``Total: 450.00``, ``₹ 28``) is preferred. Only when no
    label matches is the largest plausible bare number used instead.
    """

    labeled = _labeled_amount(text)
    if labeled is not None:
        return FieldMatch(value=labeled, weight=CONFIDENCE_WEIGHTS["amount"])

    candidates = _fallback_amounts(text)
    if not candidates:
        return None
    return FieldMatch(
        value=max(candidates),
        weight=CONFIDENCE_WEIGHTS["amount_fallback"],
        source="fallback",
    )


__all__ = ["extract_amount"]
