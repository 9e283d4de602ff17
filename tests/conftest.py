from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture
def raw_receipt_text() -> str:
    return "RECEIPT\n\nJoe's Cafe\n\nItem A   10.00\nItem B   15.50\n\nTax: 2.50\nTotal: ₹ 28.00\nPaid by Card"


@pytest.fixture
def labeled_receipt_text() -> str:
    return "\n".join(
        [
            "RECEIPT",
            "Date: 12/03/2024",
            "Store: Joe's Cafe",
            "Item A   10.00",
            "Item B   15.50",
            "GST: 2.50",
            "Total: ₹ 28.00",
            "Payment: UPI",
        ]
    )
