"""Line item extraction."""
from __future__ import annotations

from typing import List, Optional

from ..patterns import CONFIDENCE_WEIGHTS, ITEM_PATTERN
from .base import FieldMatch


def extract_items(text: str) -> Optional[FieldMatch]:
    """Collect ``"<name> - <price>"`` entries in order of appearance."""

    items: List[str] = [
        f"{match.group(1).strip()} - {match.group(2)}" for match in ITEM_PATTERN.finditer(text)
    ]
    if not items:
        return None
    return FieldMatch(value=items, weight=CONFIDENCE_WEIGHTS["items"])


__all__ = ["extract_items"]
