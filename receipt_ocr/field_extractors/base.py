"""Shared result type for the per-field extraction passes."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class FieldMatch:
    value: Any
    weight: int
    source: str = "labeled"


__all__ = ["FieldMatch"]
