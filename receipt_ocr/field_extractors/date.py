"""Date extraction helpers."""
from __future__ import annotations

from typing import Optional

from ..patterns import CONFIDENCE_WEIGHTS, DATE_PATTERN
from .base import FieldMatch


def extract_date(text: str) -> Optional[FieldMatch]:
    """Return the first date-shaped token verbatim.

    Only the shape is checked: ``99/99/2024`` is returned as-is.
    """

    match = DATE_PATTERN.search(text)
    if not match:
        return None
    return FieldMatch(value=match.group(0), weight=CONFIDENCE_WEIGHTS["date"])


__all__ = ["extract_date"]
