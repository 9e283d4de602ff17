"""Merchant extraction using labels and business-name heuristics."""
from __future__ import annotations

from typing import Optional

from ..patterns import BUSINESS_NAME_PATTERNS, CONFIDENCE_WEIGHTS, MERCHANT_PATTERN
from .base import FieldMatch


def _labeled_merchant(text: str) -> Optional[str]:
    # The label is unanchored, so "from" inside a sentence also counts. A label
    # followed by a digit captures only whitespace and yields "".
    match = MERCHANT_PATTERN.search(text)
    if match is None:
        return None
    return match.group(1).strip()


def _business_name(text: str) -> Optional[str]:
    for pattern in BUSINESS_NAME_PATTERNS:
        match = pattern.search(text)
        if match:
            return match.group(1).strip()
    return None


def extract_merchant(text: str) -> Optional[FieldMatch]:
    labeled = _labeled_merchant(text)
    if labeled is not None:
        return FieldMatch(value=labeled, weight=CONFIDENCE_WEIGHTS["merchant"])

    business = _business_name(text)
    if business:
        return FieldMatch(
            value=business,
            weight=CONFIDENCE_WEIGHTS["merchant_fallback"],
            source="fallback",
        )
    return None


__all__ = ["extract_merchant"]
