"""Receipt field extraction pipeline.

``extract_data_from_text`` runs one independent regex pass per field over the
cleaned OCR text. Each pass that yields a value adds its weight from
``CONFIDENCE_WEIGHTS`` to the confidence score, which is capped at
``MAX_CONFIDENCE``. The function never raises: text without any recognisable
field simply produces ``ExtractedData(confidence=0)``.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional, Sequence, Tuple

from .field_extractors import (
    FieldMatch,
    extract_amount,
    extract_date,
    extract_items,
    extract_merchant,
    extract_payment_method,
    extract_tax,
)
from .models import ExtractedData
from .patterns import MAX_CONFIDENCE, MIN_USABLE_CONFIDENCE
from .text_cleaning import clean_ocr_text

LOGGER = logging.getLogger(__name__)

FieldPass = Callable[[str], Optional[FieldMatch]]

EXTRACTION_PASSES: Sequence[Tuple[str, FieldPass]] = (
    ("amount", extract_amount),
    ("date", extract_date),
    ("merchant", extract_merchant),
    ("items", extract_items),
    ("tax", extract_tax),
    ("payment_method", extract_payment_method),
)


def extract_data_from_text(text: str) -> ExtractedData:
    """Extract structured receipt fields from cleaned OCR ``text``."""

    text = text or ""
    LOGGER.debug("extracting_fields: %r", text[:500])

    fields: Dict[str, Any] = {}
    confidence = 0
    for name, field_pass in EXTRACTION_PASSES:
        match = field_pass(text)
        if match is None:
            continue
        fields[name] = match.value
        confidence += match.weight
        LOGGER.debug("field_found: %s=%r source=%s weight=%d", name, match.value, match.source, match.weight)

    result = ExtractedData(confidence=min(confidence, MAX_CONFIDENCE), **fields)
    LOGGER.info("fields_extracted: %s confidence=%d", sorted(fields), result.confidence)
    return result


def process_text(raw_text: str) -> ExtractedData:
    """Clean raw OCR output and extract fields from it."""

    return extract_data_from_text(clean_ocr_text(raw_text))


def validate_extracted_data(data: ExtractedData) -> bool:
    """Return ``True`` when the extraction is good enough to skip manual review."""

    return bool(data.amount and data.amount > 0 and data.confidence > MIN_USABLE_CONFIDENCE)


__all__ = [
    "EXTRACTION_PASSES",
    "extract_data_from_text",
    "process_text",
    "validate_extracted_data",
]
