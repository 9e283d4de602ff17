"""Expense drafts built from scanned receipts for manual review."""
from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass
from typing import List, Optional

from .receipts import Receipt, ReceiptBook, ReceiptStatus

LOGGER = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "amount", "category")


class ExpenseValidationError(ValueError):
    """Raised when a reviewed draft cannot become an expense."""

    def __init__(self, reason: str, missing: Optional[List[str]] = None) -> None:
        super().__init__(reason)
        self.reason = reason
        self.missing = missing or []


@dataclass
class ExpenseDraft:
    """Editable form state shown to the user before an expense is created."""

    name: str = ""
    amount: str = ""
    category: str = ""
    date: str = ""
    description: str = ""


@dataclass(frozen=True)
class Expense:
    name: str
    amount: float
    category: str
    date: str
    description: str
    user_id: str
    receipt_id: Optional[str] = None


def _today(today: Optional[dt.date]) -> str:
    return (today or dt.date.today()).isoformat()


def _format_amount(amount: Optional[float]) -> str:
    if amount is None:
        return ""
    # Whole amounts are shown without a trailing ".0".
    return str(int(amount)) if float(amount).is_integer() else str(amount)


def draft_from_receipt(receipt: Receipt, today: Optional[dt.date] = None) -> ExpenseDraft:
    data = receipt.extracted_data
    return ExpenseDraft(
        name=data.merchant or "",
        amount=_format_amount(data.amount),
        category="",
        date=data.date or _today(today),
        description=f"Scanned from receipt: {receipt.file_name}",
    )


def build_expense(
    draft: ExpenseDraft,
    user_id: str,
    *,
    receipt: Optional[Receipt] = None,
    today: Optional[dt.date] = None,
) -> Expense:
    missing = [name for name in REQUIRED_FIELDS if not str(getattr(draft, name)).strip()]
    if missing:
        raise ExpenseValidationError("missing_fields:" + ",".join(missing), missing)
    try:
        amount = float(draft.amount)
    except ValueError as exc:
        raise ExpenseValidationError("invalid_amount") from exc

    description = draft.description
    if not description and receipt is not None:
        description = f"Scanned from receipt: {receipt.file_name}"

    return Expense(
        name=draft.name.strip(),
        amount=amount,
        category=draft.category.strip(),
        date=draft.date.strip() or _today(today),
        description=description,
        user_id=user_id,
        receipt_id=receipt.id if receipt is not None else None,
    )


def finalise_receipt(
    book: ReceiptBook,
    receipt_id: str,
    draft: ExpenseDraft,
    user_id: str,
    today: Optional[dt.date] = None,
) -> Expense:
    """Create the expense for a reviewed receipt and mark the receipt processed."""

    receipt = book.get(receipt_id)
    if receipt is None:
        raise KeyError(receipt_id)
    expense = build_expense(draft, user_id, receipt=receipt, today=today)
    book.update(receipt.with_status(ReceiptStatus.PROCESSED))
    LOGGER.info("receipt_processed: id=%s amount=%s", receipt_id, expense.amount)
    return expense


__all__ = [
    "Expense",
    "ExpenseDraft",
    "ExpenseValidationError",
    "build_expense",
    "draft_from_receipt",
    "finalise_receipt",
]
