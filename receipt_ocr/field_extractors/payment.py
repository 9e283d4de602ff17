"""Payment method extraction helpers."""
from __future__ import annotations

from typing import Optional

from ..patterns import CONFIDENCE_WEIGHTS, PAYMENT_METHOD_PATTERN
from .base import FieldMatch


def extract_payment_method(text: str) -> Optional[FieldMatch]:
    match = PAYMENT_METHOD_PATTERN.search(text)
    if not match:
        return None
    return FieldMatch(value=match.group(1).lower(), weight=CONFIDENCE_WEIGHTS["payment_method"])


__all__ = ["extract_payment_method"]
