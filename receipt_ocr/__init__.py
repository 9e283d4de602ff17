"""Receipt OCR text cleaning and field extraction."""
from .extractor import extract_data_from_text, process_text, validate_extracted_data
from .models import ExtractedData
from .text_cleaning import clean_ocr_text

__all__ = [
    "ExtractedData",
    "clean_ocr_text",
    "extract_data_from_text",
    "process_text",
    "validate_extracted_data",
]
