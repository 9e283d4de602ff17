"""FastAPI router definitions for the receipt scanning service."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from dataclasses import asdict
from typing import Any, AsyncIterator, Dict, List, Optional

from fastapi import Depends, FastAPI, File, Form, HTTPException, UploadFile, status
from pydantic import BaseModel

from . import ocr_extract
from .expenses import ExpenseDraft, ExpenseValidationError, draft_from_receipt, finalise_receipt
from .extractor import extract_data_from_text, validate_extracted_data
from .receipts import Receipt, ReceiptBook, apply_corrections, scan_receipt
from .settings import Settings, get_settings
from .text_cleaning import clean_ocr_text

LOGGER = logging.getLogger(__name__)
logging.basicConfig(level=logging.INFO)


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    logging.getLogger().setLevel(get_settings().log_level)
    yield


app = FastAPI(title="Receipt Scanning Service", lifespan=lifespan)

ALLOWED_MIME_TYPES = {
    "image/png",
    "image/jpeg",
    "image/jpg",
    "image/bmp",
    "image/tiff",
}

receipt_book = ReceiptBook()


class ExtractRequest(BaseModel):
    text: str
    clean: bool = True


class ExtractResponse(BaseModel):
    cleaned_text: str
    extracted: Dict[str, Any]
    usable: bool


class ReceiptResponse(BaseModel):
    id: str
    file_name: str
    image_url: str
    user_id: str
    extracted_data: Dict[str, Any]
    status: str
    created_at: str


class ReceiptListResponse(BaseModel):
    receipts: List[ReceiptResponse]
    counts: Dict[str, int]


class DraftResponse(BaseModel):
    name: str
    amount: str
    category: str
    date: str
    description: str


class ExpenseRequest(BaseModel):
    name: str = ""
    amount: str = ""
    category: str = ""
    date: str = ""
    description: str = ""
    user_id: str = ""


class ExpenseResponse(BaseModel):
    name: str
    amount: float
    category: str
    date: str
    description: str
    user_id: str
    receipt_id: Optional[str] = None


def _get_receipt_or_404(receipt_id: str) -> Receipt:
    receipt = receipt_book.get(receipt_id)
    if receipt is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="receipt_not_found")
    return receipt


async def _read_upload(file: UploadFile, settings: Settings) -> bytes:
    data = await file.read()
    if not data:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="empty_file")
    if len(data) > settings.max_upload_size:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="file_too_large")
    if file.content_type not in ALLOWED_MIME_TYPES:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="unsupported_mime")
    return data


@app.post("/extract", response_model=ExtractResponse)
async def extract(payload: ExtractRequest) -> ExtractResponse:
    text = clean_ocr_text(payload.text) if payload.clean else payload.text
    extracted = extract_data_from_text(text)
    return ExtractResponse(
        cleaned_text=text,
        extracted=extracted.to_dict(),
        usable=validate_extracted_data(extracted),
    )


@app.post("/receipts", response_model=ReceiptResponse)
async def upload_receipt(
    file: UploadFile = File(...),
    user_id: str = Form(""),
    settings: Settings = Depends(get_settings),
) -> ReceiptResponse:
    data = await _read_upload(file, settings)

    try:
        receipt = scan_receipt(
            receipt_book,
            data,
            file_name=file.filename or "receipt",
            user_id=user_id,
            settings=settings,
        )
    except ocr_extract.ImageFetchError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="image_fetch_failed") from exc
    except ocr_extract.OCRDecodeError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail="ocr_decode_failed") from exc
    except ocr_extract.OCRServiceError as exc:
        LOGGER.exception("OCR service error: %s", exc)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="ocr_service_error") from exc

    return ReceiptResponse(**receipt.to_dict())


@app.get("/receipts", response_model=ReceiptListResponse)
async def list_receipts() -> ReceiptListResponse:
    return ReceiptListResponse(
        receipts=[ReceiptResponse(**receipt.to_dict()) for receipt in receipt_book.list()],
        counts=receipt_book.status_counts(),
    )


@app.get("/receipts/{receipt_id}", response_model=ReceiptResponse)
async def get_receipt(receipt_id: str) -> ReceiptResponse:
    return ReceiptResponse(**_get_receipt_or_404(receipt_id).to_dict())


@app.patch("/receipts/{receipt_id}", response_model=ReceiptResponse)
async def correct_receipt(receipt_id: str, corrections: Dict[str, Any]) -> ReceiptResponse:
    receipt = _get_receipt_or_404(receipt_id)
    try:
        corrected = apply_corrections(receipt, corrections)
    except (TypeError, ValueError) as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="invalid_correction") from exc
    receipt_book.update(corrected)
    return ReceiptResponse(**corrected.to_dict())


@app.delete("/receipts/{receipt_id}")
async def delete_receipt(receipt_id: str) -> Dict[str, str]:
    if not receipt_book.remove(receipt_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="receipt_not_found")
    return {"status": "deleted", "id": receipt_id}


@app.get("/receipts/{receipt_id}/draft", response_model=DraftResponse)
async def get_expense_draft(receipt_id: str) -> DraftResponse:
    draft = draft_from_receipt(_get_receipt_or_404(receipt_id))
    return DraftResponse(**asdict(draft))


@app.post("/receipts/{receipt_id}/expense", response_model=ExpenseResponse)
async def create_expense(receipt_id: str, payload: ExpenseRequest) -> ExpenseResponse:
    _get_receipt_or_404(receipt_id)
    draft = ExpenseDraft(
        name=payload.name,
        amount=payload.amount,
        category=payload.category,
        date=payload.date,
        description=payload.description,
    )
    try:
        expense = finalise_receipt(receipt_book, receipt_id, draft, payload.user_id)
    except ExpenseValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.reason) from exc
    return ExpenseResponse(**asdict(expense))


__all__ = ["app", "receipt_book"]
