"""Application settings for the receipt scanning service."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

DEFAULT_OCR_LANGUAGE = "eng"
DEFAULT_OCR_TIMEOUT = 30
DEFAULT_MAX_UPLOAD_SIZE = 15 * 1024 * 1024
DEFAULT_LOG_LEVEL = "INFO"

# Names an explicit .env file instead of the working directory or project root.
ENV_FILE_VARIABLE = "RECEIPT_OCR_ENV_FILE"

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    ocr_language: str = DEFAULT_OCR_LANGUAGE
    ocr_timeout: int = DEFAULT_OCR_TIMEOUT
    max_upload_size: int = DEFAULT_MAX_UPLOAD_SIZE
    log_level: str = DEFAULT_LOG_LEVEL

    @staticmethod
    def _positive_int_env(name: str, default: int) -> int:
        raw = os.getenv(name)
        if raw is None or not raw.strip():
            return default
        try:
            value = int(raw.strip())
        except ValueError as exc:
            raise RuntimeError(f"Environment variable {name} must be an integer") from exc
        if value <= 0:
            raise RuntimeError(f"Environment variable {name} must be positive")
        return value

    @classmethod
    def load(cls) -> "Settings":
        _ensure_env_file_loaded()
        ocr_language = (os.getenv("OCR_LANGUAGE") or "").strip() or DEFAULT_OCR_LANGUAGE
        log_level = (os.getenv("LOG_LEVEL") or "").strip().upper() or DEFAULT_LOG_LEVEL
        if not isinstance(logging.getLevelName(log_level), int):
            raise RuntimeError(f"LOG_LEVEL has unknown level {log_level!r}")

        return cls(
            ocr_language=ocr_language,
            ocr_timeout=cls._positive_int_env("OCR_TIMEOUT", DEFAULT_OCR_TIMEOUT),
            max_upload_size=cls._positive_int_env("MAX_UPLOAD_SIZE", DEFAULT_MAX_UPLOAD_SIZE),
            log_level=log_level,
        )


@lru_cache()
def get_settings() -> Settings:
    return Settings.load()


def reset_settings_state() -> None:
    """Forget the cached settings and which ``.env`` file was loaded (for tests)."""
    global _ENV_FILE_CHECKED, _LOADED_ENV_FILE
    _ENV_FILE_CHECKED = False
    _LOADED_ENV_FILE = None
    get_settings.cache_clear()


_ENV_FILE_CHECKED = False
_LOADED_ENV_FILE: Optional[Path] = None


def _env_file_candidates() -> List[Path]:
    explicit = (os.getenv(ENV_FILE_VARIABLE) or "").strip()
    if explicit:
        path = Path(explicit).expanduser()
        if not path.is_file():
            raise RuntimeError(f"{ENV_FILE_VARIABLE} points to a missing file: {path}")
        return [path]
    return [Path.cwd() / ".env", Path(__file__).resolve().parent.parent / ".env"]


def _ensure_env_file_loaded() -> Optional[Path]:
    """Load the first existing ``.env`` candidate once; real environment variables win."""
    global _ENV_FILE_CHECKED, _LOADED_ENV_FILE
    if _ENV_FILE_CHECKED:
        return _LOADED_ENV_FILE
    for env_path in _env_file_candidates():
        if env_path.is_file():
            load_dotenv(dotenv_path=env_path, override=False)
            LOGGER.debug("env_file_loaded: %s", env_path)
            _LOADED_ENV_FILE = env_path
            break
    _ENV_FILE_CHECKED = True
    return _LOADED_ENV_FILE


__all__ = ["Settings", "get_settings", "reset_settings_state"]
