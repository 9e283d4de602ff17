from __future__ import annotations

import base64
from typing import Any, Dict

import pytest
import requests

from receipt_ocr import ocr_extract
from receipt_ocr.settings import Settings


class FakeImage:
    mode = "L"

    def __init__(self, captured: Dict[str, Any]) -> None:
        self._captured = captured

    def load(self) -> None:
        self._captured["loaded"] = True

    def convert(self, mode: str) -> "FakeImage":
        self._captured["converted_to"] = mode
        self.mode = mode
        return self


def _patch_image(monkeypatch: pytest.MonkeyPatch, captured: Dict[str, Any]) -> None:
    class FakeImageModule:
        Image = FakeImage

        @staticmethod
        def open(_: Any) -> FakeImage:
            captured["opened"] = True
            return FakeImage(captured)

    monkeypatch.setattr(ocr_extract, "Image", FakeImageModule)


def test_load_image_bytes_passes_raw_bytes_through() -> None:
    assert ocr_extract.load_image_bytes(bytearray(b"abc"), timeout=5) == (b"abc", "bytes")


def test_load_image_bytes_decodes_data_url() -> None:
    payload = base64.b64encode(b"png-bytes").decode()

    binary, source = ocr_extract.load_image_bytes(f"data:image/png;base64,{payload}", timeout=5)

    assert binary == b"png-bytes"
    assert source == "data_url"


def test_load_image_bytes_decodes_bare_base64() -> None:
    payload = base64.b64encode(b"jpeg-bytes").decode()

    assert ocr_extract.load_image_bytes(payload, timeout=5) == (b"jpeg-bytes", "base64")


def test_load_image_bytes_rejects_invalid_base64() -> None:
    with pytest.raises(ocr_extract.OCRDecodeError) as excinfo:
        ocr_extract.load_image_bytes("not base64!!", timeout=5)

    assert "invalid_base64" in str(excinfo.value)


def test_load_image_bytes_rejects_non_base64_data_url() -> None:
    with pytest.raises(ocr_extract.OCRDecodeError):
        ocr_extract.load_image_bytes("data:text/plain,hello", timeout=5)


def test_load_image_bytes_rejects_non_image_data_url() -> None:
    payload = base64.b64encode(b"hello").decode()

    with pytest.raises(ocr_extract.OCRDecodeError) as excinfo:
        ocr_extract.load_image_bytes(f"data:text/plain;base64,{payload}", timeout=5)

    assert "unsupported_data_url" in str(excinfo.value)


def test_load_image_bytes_rejects_other_types() -> None:
    with pytest.raises(ocr_extract.OCRDecodeError):
        ocr_extract.load_image_bytes(12345, timeout=5)  # type: ignore[arg-type]


def test_load_image_bytes_fetches_urls(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: Dict[str, Any] = {}

    class FakeResponse:
        content = b"remote-bytes"

        def raise_for_status(self) -> None:
            return None

    def fake_get(url: str, timeout: int) -> FakeResponse:
        captured["url"] = url
        captured["timeout"] = timeout
        return FakeResponse()

    monkeypatch.setattr(ocr_extract.requests, "get", fake_get)

    binary, source = ocr_extract.load_image_bytes("https://example.com/r.jpg", timeout=7)

    assert binary == b"remote-bytes"
    assert source == "https://example.com/r.jpg"
    assert captured == {"url": "https://example.com/r.jpg", "timeout": 7}


def test_load_image_bytes_wraps_fetch_errors(monkeypatch: pytest.MonkeyPatch) -> None:
    def boom(url: str, timeout: int) -> None:
        raise requests.ConnectionError("offline")

    monkeypatch.setattr(ocr_extract.requests, "get", boom)

    with pytest.raises(ocr_extract.ImageFetchError):
        ocr_extract.load_image_bytes("http://example.com/r.jpg", timeout=5)


def test_load_image_bytes_rejects_empty_downloads(monkeypatch: pytest.MonkeyPatch) -> None:
    class EmptyResponse:
        content = b""

        def raise_for_status(self) -> None:
            return None

    monkeypatch.setattr(ocr_extract.requests, "get", lambda url, timeout: EmptyResponse())

    with pytest.raises(ocr_extract.ImageFetchError) as excinfo:
        ocr_extract.load_image_bytes("https://example.com/blank.jpg", timeout=5)

    assert "empty_response" in str(excinfo.value)


def test_recognise_text_uses_tesseract(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: Dict[str, Any] = {}
    _patch_image(monkeypatch, captured)

    class FakePytesseract:
        TesseractError = RuntimeError
        TesseractNotFoundError = EnvironmentError

        @staticmethod
        def image_to_string(image: FakeImage, lang: str) -> str:
            captured["lang"] = lang
            captured["image_mode"] = image.mode
            return "Total: 28.00"

    monkeypatch.setattr(ocr_extract, "pytesseract", FakePytesseract)

    text = ocr_extract.recognise_text(b"fake-bytes", language="eng")

    assert text == "Total: 28.00"
    assert captured["opened"] is True
    assert captured["loaded"] is True
    assert captured["converted_to"] == "RGB"
    assert captured["image_mode"] == "RGB"
    assert captured["lang"] == "eng"


def test_recognise_text_reports_tesseract_errors(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_image(monkeypatch, {})

    class FakeTesseractError(Exception):
        pass

    class FakeTesseractNotFoundError(Exception):
        pass

    class FakePytesseract:
        TesseractError = FakeTesseractError
        TesseractNotFoundError = FakeTesseractNotFoundError

        @staticmethod
        def image_to_string(_: Any, lang: str) -> str:  # noqa: ARG004
            raise FakeTesseractError("ocr failed")

    monkeypatch.setattr(ocr_extract, "pytesseract", FakePytesseract)

    with pytest.raises(ocr_extract.OCRServiceError) as excinfo:
        ocr_extract.recognise_text(b"fake", language="eng")

    assert "tesseract_error" in str(excinfo.value)


def test_recognise_text_reports_missing_tesseract(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_image(monkeypatch, {})

    class FakeTesseractNotFoundError(Exception):
        pass

    class FakePytesseract:
        TesseractError = RuntimeError
        TesseractNotFoundError = FakeTesseractNotFoundError

        @staticmethod
        def image_to_string(_: Any, lang: str) -> str:  # noqa: ARG004
            raise FakeTesseractNotFoundError()

    monkeypatch.setattr(ocr_extract, "pytesseract", FakePytesseract)

    with pytest.raises(ocr_extract.OCRServiceError) as excinfo:
        ocr_extract.recognise_text(b"fake", language="eng")

    assert "tesseract_not_found" in str(excinfo.value)


def test_recognise_text_wraps_unexpected_tesseract_failures(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_image(monkeypatch, {})

    class FakeTesseractError(Exception):
        pass

    class FakePytesseract:
        TesseractError = FakeTesseractError
        TesseractNotFoundError = EnvironmentError

        @staticmethod
        def image_to_string(_: Any, lang: str) -> str:  # noqa: ARG004
            raise RuntimeError("Tesseract process timeout")

    monkeypatch.setattr(ocr_extract, "pytesseract", FakePytesseract)

    with pytest.raises(ocr_extract.OCRServiceError) as excinfo:
        ocr_extract.recognise_text(b"fake", language="eng")

    assert "tesseract_unknown_error" in str(excinfo.value)


def test_recognise_text_wraps_unexpected_image_failures(monkeypatch: pytest.MonkeyPatch) -> None:
    class BrokenImageModule:
        @staticmethod
        def open(_: Any) -> FakeImage:
            raise ValueError("broken palette")

    monkeypatch.setattr(ocr_extract, "Image", BrokenImageModule)

    with pytest.raises(ocr_extract.OCRServiceError) as excinfo:
        ocr_extract.recognise_text(b"fake", language="eng")

    assert "image_open_failed" in str(excinfo.value)


def test_recognise_text_rejects_invalid_images() -> None:
    with pytest.raises(ocr_extract.OCRDecodeError) as excinfo:
        ocr_extract.recognise_text(b"definitely not an image", language="eng")

    assert "unsupported_image_format" in str(excinfo.value)


def test_recognise_text_rejects_empty_input() -> None:
    with pytest.raises(ocr_extract.OCRDecodeError):
        ocr_extract.recognise_text(b"", language="eng")


def test_extract_text_uses_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: Dict[str, Any] = {}

    def fake_recognise(binary: bytes, language: str) -> str:
        captured["binary"] = binary
        captured["language"] = language
        return "Paid by Cash"

    monkeypatch.setattr(ocr_extract, "recognise_text", fake_recognise)

    text = ocr_extract.extract_text(b"img", settings=Settings(ocr_language="eng+hin"))

    assert text == "Paid by Cash"
    assert captured == {"binary": b"img", "language": "eng+hin"}
