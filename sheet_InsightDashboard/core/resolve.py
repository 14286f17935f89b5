# sheet_InsightDashboard/core/resolve.py
from __future__ import annotations
from typing import Sequence

from .model import Row
from .normalize import as_text

def resolve_column(row: Row, candidates: Sequence[str]) -> str:
    """
    Value of the first column matching one of ``candidates``.

    Order:
      1) exact header match, candidates in priority order
      2) case-insensitive containment either way, candidate-then-column order
    Returns the trimmed cell text, or "" when nothing non-blank matches.
    """
    for name in candidates:
        if name in row:
            text = as_text(row[name]).strip()
            if text:
                return text

    for name in candidates:
        lname = name.lower()
        for key, value in row.items():
            lkey = str(key).lower()
            if lkey in lname or lname in lkey:
                text = as_text(value).strip()
                if text:
                    return text
    return ""
