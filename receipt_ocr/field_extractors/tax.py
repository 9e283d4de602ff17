"""Tax extraction helpers."""
from __future__ import annotations

from typing import Optional

from ..patterns import CONFIDENCE_WEIGHTS, TAX_PATTERN, parse_number
from .base import FieldMatch


def extract_tax(text: str) -> Optional[FieldMatch]:
    match = TAX_PATTERN.search(text)
    if not match:
        return None
    return FieldMatch(value=parse_number(match.group(1)), weight=CONFIDENCE_WEIGHTS["tax"])


__all__ = ["extract_tax"]
