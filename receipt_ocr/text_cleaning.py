"""Normalisation of raw OCR output before field extraction."""
from __future__ import annotations

import re

_DISALLOWED_CHARS = re.compile(r"[^A-Za-z0-9_\s.,\-/₹:]")
_WHITESPACE = re.compile(r"\s+")


def clean_ocr_text(text: str) -> str:
    """Return ``text`` as a single line holding only extraction-relevant characters.

    Characters outside the allow-list are dropped first, then every whitespace
    run (line breaks included) becomes one space, so a removed symbol between
    two spaces never leaves a double space behind.
    """

    cleaned = _DISALLOWED_CHARS.sub("", text or "")
    cleaned = _WHITESPACE.sub(" ", cleaned)
    return cleaned.strip()


__all__ = ["clean_ocr_text"]
