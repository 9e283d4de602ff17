"""Field extraction passes for structured receipt data."""
from .amount import extract_amount
from .base import FieldMatch
from .date import extract_date
from .items import extract_items
from .merchant import extract_merchant
from .payment import extract_payment_method
from .tax import extract_tax

__all__ = [
    "FieldMatch",
    "extract_amount",
    "extract_date",
    "extract_items",
    "extract_merchant",
    "extract_payment_method",
    "extract_tax",
]
