"""Structured result produced by receipt field extraction."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

_CAMEL_CASE_KEYS = {"paymentMethod": "payment_method"}


@dataclass(frozen=True)
class ExtractedData:
    """Fields recovered from receipt text.

    Every field except ``confidence`` is ``None`` when no pattern matched.
    ``confidence`` is the clamped sum of the weights of the passes that
    produced a value.
    """

    amount: Optional[float] = None
    date: Optional[str] = None
    merchant: Optional[str] = None
    items: Optional[List[str]] = None
    tax: Optional[float] = None
    payment_method: Optional[str] = None
    confidence: int = 0

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {}
        if self.amount is not None:
            payload["amount"] = self.amount
        if self.date is not None:
            payload["date"] = self.date
        if self.merchant is not None:
            payload["merchant"] = self.merchant
        if self.items is not None:
            payload["items"] = list(self.items)
        if self.tax is not None:
            payload["tax"] = self.tax
        if self.payment_method is not None:
            payload["payment_method"] = self.payment_method
        payload["confidence"] = self.confidence
        return payload

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ExtractedData":
        normalised = {_CAMEL_CASE_KEYS.get(key, key): value for key, value in data.items()}
        amount = normalised.get("amount")
        tax = normalised.get("tax")
        items = normalised.get("items")
        return cls(
            amount=float(amount) if amount is not None else None,
            date=normalised.get("date"),
            merchant=normalised.get("merchant"),
            items=[str(item) for item in items] if items is not None else None,
            tax=float(tax) if tax is not None else None,
            payment_method=normalised.get("payment_method"),
            confidence=int(normalised.get("confidence") or 0),
        )


__all__ = ["ExtractedData"]
