"""Regex table and confidence weights used by the receipt field extractors."""
from __future__ import annotations

import re
from typing import Dict, Tuple

# Digits with optional thousands commas and decimal part. The lookahead keeps
# a lone "," from being captured so every captured token parses as a float.
_NUMBER = r"(?=,*[0-9])[0-9,]+\.?[0-9]*"

AMOUNT_PATTERN = re.compile(
    r"(?:total|amount|sum|due|pay|rs\.?|₹|inr|grand\s*total|balance|bill)\s*:?\s*(" + _NUMBER + r")",
    re.IGNORECASE,
)

SIMPLE_AMOUNT_PATTERN = re.compile(r"([0-9]{2,}\.[0-9]{2})|([0-9]{3,})")

DATE_PATTERN = re.compile(
    r"([0-9]{1,2}[/\-.][0-9]{1,2}[/\-.][0-9]{2,4})|([0-9]{4}[/\-.][0-9]{1,2}[/\-.][0-9]{1,2})"
)

# The name run stops at any character outside letters, whitespace, "&" and
# ".", so uncleaned "Store: Joe's Cafe" yields "Joe". Cleaned text has no "'".
MERCHANT_PATTERN = re.compile(
    r"(?:from|merchant|store|shop|restaurant|company|vendor|business)\s*:?\s*([a-zA-Z\s&.]+)",
    re.IGNORECASE,
)

BUSINESS_NAME_PATTERNS: Tuple[re.Pattern, ...] = (
    re.compile(
        r"([A-Z][a-z]+(?:\s+[A-Z][a-z]+)*\s+(?:STORE|SHOP|RESTAURANT|MARKET|MALL))",
        re.IGNORECASE,
    ),
    re.compile(r"([A-Z][A-Z\s]+(?:LTD|INC|LLC|CO|CORP))", re.IGNORECASE),
)

ITEM_PATTERN = re.compile(r"([a-zA-Z\s]+)\s+([0-9,]+\.?[0-9]*)")

TAX_PATTERN = re.compile(
    r"(?:tax|gst|vat|cgst|sgst)\s*:?\s*(" + _NUMBER + r")",
    re.IGNORECASE,
)

PAYMENT_METHOD_PATTERN = re.compile(
    r"(?:paid\s*by|payment|method)\s*:?\s*(cash|card|credit|debit|upi|net\s*banking)",
    re.IGNORECASE,
)

CONFIDENCE_WEIGHTS: Dict[str, int] = {
    "amount": 30,
    "amount_fallback": 20,
    "date": 20,
    "merchant": 25,
    "merchant_fallback": 15,
    "items": 15,
    "tax": 10,
    "payment_method": 10,
}

MAX_CONFIDENCE = 100

# ``validate_extracted_data`` requires a confidence strictly above this.
MIN_USABLE_CONFIDENCE = 30

# Exclusive bounds for bare numbers considered as a fallback total.
FALLBACK_AMOUNT_RANGE: Tuple[float, float] = (10.0, 100000.0)


def parse_number(raw: str) -> float:
    """Convert a captured number token such as ``1,234.50`` to ``float``."""

    return float(raw.replace(",", ""))


__all__ = [
    "AMOUNT_PATTERN",
    "BUSINESS_NAME_PATTERNS",
    "CONFIDENCE_WEIGHTS",
    "DATE_PATTERN",
    "FALLBACK_AMOUNT_RANGE",
    "ITEM_PATTERN",
    "MAX_CONFIDENCE",
    "MERCHANT_PATTERN",
    "MIN_USABLE_CONFIDENCE",
    "PAYMENT_METHOD_PATTERN",
    "SIMPLE_AMOUNT_PATTERN",
    "TAX_PATTERN",
    "parse_number",
]
