"""Receipt records, their processing status and the scan workflow."""
from __future__ import annotations

import dataclasses
import logging
import threading
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional

from . import ocr_extract
from .extractor import process_text
from .models import ExtractedData
from .settings import Settings

LOGGER = logging.getLogger(__name__)

OCRCallable = Callable[[ocr_extract.ImageInput, Optional[Settings]], str]


class ReceiptStatus(str, Enum):
    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"
    PROCESSED = "processed"


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _generate_receipt_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class Receipt:
    id: str
    file_name: str
    image_url: str
    user_id: str
    extracted_data: ExtractedData = field(default_factory=ExtractedData)
    status: ReceiptStatus = ReceiptStatus.PROCESSING
    created_at: str = field(default_factory=_now_iso)

    def with_status(self, status: ReceiptStatus) -> "Receipt":
        return dataclasses.replace(self, status=status)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "file_name": self.file_name,
            "image_url": self.image_url,
            "user_id": self.user_id,
            "extracted_data": self.extracted_data.to_dict(),
            "status": self.status.value,
            "created_at": self.created_at,
        }


class ReceiptBook:
    """In-memory receipt list, newest first."""

    def __init__(self) -> None:
        self._receipts: List[Receipt] = []
        self._lock = threading.Lock()

    def add(self, receipt: Receipt) -> Receipt:
        with self._lock:
            self._receipts.insert(0, receipt)
        return receipt

    def update(self, receipt: Receipt) -> Optional[Receipt]:
        """Replace the stored receipt with the same id; unknown ids are ignored."""

        with self._lock:
            for index, existing in enumerate(self._receipts):
                if existing.id == receipt.id:
                    self._receipts[index] = receipt
                    return receipt
        return None

    def remove(self, receipt_id: str) -> bool:
        with self._lock:
            before = len(self._receipts)
            self._receipts = [receipt for receipt in self._receipts if receipt.id != receipt_id]
            return len(self._receipts) != before

    def get(self, receipt_id: str) -> Optional[Receipt]:
        with self._lock:
            for receipt in self._receipts:
                if receipt.id == receipt_id:
                    return receipt
        return None

    def list(self) -> List[Receipt]:
        with self._lock:
            return list(self._receipts)

    def clear(self) -> None:
        with self._lock:
            self._receipts = []

    def status_counts(self) -> Dict[str, int]:
        counts = {status.value: 0 for status in ReceiptStatus}
        for receipt in self.list():
            counts[receipt.status.value] += 1
        return counts


def scan_receipt(
    book: ReceiptBook,
    image_input: ocr_extract.ImageInput,
    *,
    file_name: str,
    user_id: str = "",
    image_url: Optional[str] = None,
    ocr: Optional[OCRCallable] = None,
    settings: Optional[Settings] = None,
) -> Receipt:
    """Run OCR and field extraction for one receipt image.

    The receipt is stored as ``processing`` before OCR starts. It ends up
    ``completed`` with the extracted fields, or ``error`` when OCR fails for
    any reason, in which case the exception is re-raised.
    """

    run_ocr = ocr or ocr_extract.extract_text
    receipt = book.add(
        Receipt(
            id=_generate_receipt_id(),
            file_name=file_name,
            image_url=image_url if image_url is not None else _image_reference(image_input),
            user_id=user_id,
        )
    )
    LOGGER.info("receipt_processing: id=%s file=%s", receipt.id, file_name)

    try:
        raw_text = run_ocr(image_input, settings)
    except Exception as exc:
        LOGGER.warning("receipt_ocr_failed: id=%s error=%s", receipt.id, exc)
        book.update(receipt.with_status(ReceiptStatus.ERROR))
        raise

    completed = dataclasses.replace(
        receipt,
        extracted_data=process_text(raw_text),
        status=ReceiptStatus.COMPLETED,
    )
    book.update(completed)
    LOGGER.info(
        "receipt_completed: id=%s confidence=%d",
        completed.id,
        completed.extracted_data.confidence,
    )
    return completed


def apply_corrections(receipt: Receipt, corrections: Mapping[str, Any]) -> Receipt:
    """Return ``receipt`` with user-edited extraction fields merged in."""

    merged = receipt.extracted_data.to_dict()
    merged.update({key: value for key, value in corrections.items() if key != "confidence"})
    return dataclasses.replace(receipt, extracted_data=ExtractedData.from_dict(merged))


def _image_reference(image_input: ocr_extract.ImageInput) -> str:
    if isinstance(image_input, str):
        return image_input.strip()
    return ""


__all__ = [
    "Receipt",
    "ReceiptBook",
    "ReceiptStatus",
    "apply_corrections",
    "scan_receipt",
]
