"""Receipt OCR helpers.

Loads the receipt image from raw bytes, a base64 payload, a ``data:`` URL or
an HTTP(S) URL and runs it through a local Tesseract engine. The recognised
text is returned untouched; cleaning and field extraction happen in
``receipt_ocr.extractor``.
"""
from __future__ import annotations

import base64
import binascii
import logging
from io import BytesIO
from typing import Optional, Tuple, Union

import pytesseract
import requests
from PIL import Image, UnidentifiedImageError
from PIL.Image import DecompressionBombError

from .settings import Settings, get_settings

LOGGER = logging.getLogger(__name__)

ImageInput = Union[str, bytes, bytearray]


class ImageFetchError(RuntimeError):
    """Raised when the input image cannot be retrieved."""


class OCRServiceError(RuntimeError):
    """Raised when the OCR engine fails."""


class OCRDecodeError(RuntimeError):
    """Raised when the input cannot be decoded into an image."""


def extract_text(image_input: ImageInput, settings: Optional[Settings] = None) -> str:
    """Return the raw OCR text recognised in ``image_input``."""

    settings = settings or get_settings()
    binary, source = load_image_bytes(image_input, timeout=settings.ocr_timeout)
    LOGGER.info("running_ocr: source=%s bytes=%d", source, len(binary))
    text = recognise_text(binary, language=settings.ocr_language)
    LOGGER.debug("ocr_text: %r", text[:200])
    return text


def load_image_bytes(image_input: ImageInput, timeout: int) -> Tuple[bytes, str]:
    """Resolve ``image_input`` to image bytes plus a short description of its source."""

    if isinstance(image_input, (bytes, bytearray)):
        return bytes(image_input), "bytes"
    if not isinstance(image_input, str):
        raise OCRDecodeError("unsupported_input_type")

    reference = image_input.strip()
    if reference.startswith(("http://", "https://")):
        return _fetch_image(reference, timeout), reference
    if reference.startswith("data:"):
        return _decode_data_url(reference), "data_url"
    return _decode_base64(reference), "base64"


def _fetch_image(url: str, timeout: int) -> bytes:
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as exc:
        raise ImageFetchError("fetch_failed") from exc
    if not response.content:
        raise ImageFetchError("empty_response")
    return response.content


def _decode_data_url(url: str) -> bytes:
    # data:image/png;base64,<payload>
    header, _, payload = url.partition(",")
    media_type, _, encoding = header[len("data:"):].partition(";")
    if encoding != "base64" or not media_type.startswith("image/"):
        raise OCRDecodeError("unsupported_data_url")
    return _decode_base64(payload)


def _decode_base64(payload: str) -> bytes:
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise OCRDecodeError("invalid_base64") from exc


def recognise_text(binary: bytes, language: str) -> str:
    image = _image_from_bytes(binary)
    try:
        return pytesseract.image_to_string(image, lang=language)
    except pytesseract.TesseractNotFoundError as exc:
        raise OCRServiceError("tesseract_not_found") from exc
    except pytesseract.TesseractError as exc:
        raise OCRServiceError(f"tesseract_error:{exc}") from exc
    except Exception as exc:
        raise OCRServiceError("tesseract_unknown_error") from exc


def _image_from_bytes(binary: bytes) -> Image.Image:
    if not binary:
        raise OCRDecodeError("empty_image")
    try:
        image = Image.open(BytesIO(binary))
        image.load()
    except UnidentifiedImageError as exc:
        raise OCRDecodeError("unsupported_image_format") from exc
    except DecompressionBombError as exc:
        raise OCRDecodeError("image_too_large") from exc
    except OSError as exc:
        raise OCRDecodeError("image_open_failed") from exc
    except Exception as exc:
        raise OCRServiceError("image_open_failed") from exc
    return image.convert("RGB")


__all__ = [
    "ImageFetchError",
    "OCRDecodeError",
    "OCRServiceError",
    "extract_text",
    "load_image_bytes",
    "recognise_text",
]
