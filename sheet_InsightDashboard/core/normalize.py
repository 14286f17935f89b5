# sheet_InsightDashboard/core/normalize.py
from __future__ import annotations
import math
import re
from typing import Iterable, Optional

import pandas as pd

from .model import Cell, Row

_NUMERIC_STRIP = re.compile(r"[$,%]")
_NUMBER_FULL = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?\Z")
_NUMBER_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_PLAIN_NUMERIC = re.compile(r"^[\d,.]+\Z")

def is_missing(value) -> bool:
    """None and float NaN (pandas' empty cell) count as missing."""
    if value is None:
        return True
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False

def as_text(value: Cell) -> str:
    """Text form of a cell; integral floats lose their '.0' so '150.0' never reads as 1500 kV."""
    if is_missing(value):
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    return str(value)

def to_number(value: Cell) -> Optional[float]:
    """Strip '$', ',' and '%' and parse; None when the result is not a number."""
    if is_missing(value) or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    s = _NUMERIC_STRIP.sub("", str(value)).strip()
    if not s or not _NUMBER_FULL.match(s):
        return None
    return float(s)

def parse_leading_float(text: str) -> Optional[float]:
    """Parse the numeric prefix of a string ('-6.21 S' -> -6.21)."""
    m = _NUMBER_PREFIX.match(text or "")
    return float(m.group(1)) if m else None

def parse_coordinate(text: str) -> float:
    # decimal comma -> decimal point (first occurrence only)
    value = parse_leading_float((text or "").replace(",", ".", 1))
    return value if value is not None else 0.0

def parse_voltage(text: str) -> int:
    digits = re.sub(r"[^0-9]", "", text or "")
    return int(digits) if digits else 0

def clean_string(value, max_length: int = 50) -> str:
    """
    Compact a display string.
    - comma runs collapse to one, a leading/trailing comma is dropped
    - overlong comma lists yield their first segment of length (3, max_length),
      else the first segment as-is
    - other overlong strings are cut at max_length with '...'
    """
    if not value or not isinstance(value, str):
        return ""
    cleaned = re.sub(r",+", ",", value)
    cleaned = re.sub(r"^,|,\Z", "", cleaned)

    if len(cleaned) > max_length and "," in cleaned:
        parts = cleaned.split(",")
        for part in parts:
            trimmed = part.strip()
            if trimmed and 3 < len(trimmed) < max_length:
                return trimmed
        return parts[0].strip()

    if len(cleaned) > max_length:
        return cleaned[:max_length] + "..."
    return cleaned

def _normalize_cell(value: Cell) -> Cell:
    if is_missing(value):
        return None
    if not isinstance(value, str):
        return value
    value = value.strip()
    # plain numeric text becomes a number; '$'-prefixed text is kept for currency detection
    if _PLAIN_NUMERIC.match(value):
        try:
            return float(value.replace(",", ""))
        except ValueError:
            return value
    return value

def normalize_rows(rows: Iterable[Row]) -> list[Row]:
    """Trim header names and string cells, turn plain numeric text into numbers."""
    out: list[Row] = []
    for row in rows:
        out.append({str(k).strip(): _normalize_cell(v) for k, v in row.items()})
    return out
