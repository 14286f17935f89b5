# sheet_InsightDashboard/loaders/table_loader.py
from __future__ import annotations
from pathlib import Path
import io, logging
import pandas as pd

from ..core.model import Row
from ..core.normalize import is_missing

_LOG = logging.getLogger(__name__)

EXCEL_SUFFIXES = (".xlsx", ".xls")

class InsufficientDataError(ValueError):
    """File has no header row plus at least one data row."""

# ---------- grid -> rows ----------
def _rows_from_grid(grid: list[list], name: str) -> list[Row]:
    if len(grid) < 2:
        raise InsufficientDataError(f"{name} has insufficient data")
    headers = ["" if is_missing(h) else str(h).strip() for h in grid[0]]
    if not any(headers):
        raise InsufficientDataError(f"{name} has no parseable headers")

    rows: list[Row] = []
    for line in grid[1:]:
        row: Row = {}
        for idx, header in enumerate(headers):
            value = line[idx] if idx < len(line) else None
            row[header] = None if is_missing(value) else value
        rows.append(row)
    return rows

# ---------- delimited text ----------
def _detect_separator(first_line: str) -> str:
    return "\t" if "\t" in first_line else ","

def _strip(value):
    return value.strip() if isinstance(value, str) else value

def _grid_from_text(text: str) -> list[list]:
    lines = [ln for ln in text.splitlines() if ln.strip()]
    if not lines:
        return []
    sep = _detect_separator(lines[0])
    width = len(lines[0].split(sep))
    df = pd.read_csv(io.StringIO("\n".join(lines)), sep=sep, header=None, dtype=str,
                     keep_default_na=False, engine="python",
                     on_bad_lines=lambda bad: bad[:width])
    df = df.apply(lambda col: col.map(_strip))
    return df.astype(object).where(df.notna(), None).values.tolist()

# ---------- workbook ----------
def _grid_from_excel(buff: bytes) -> list[list]:
    # first sheet, no header inference; empty cells arrive as NaN
    df = pd.read_excel(io.BytesIO(buff), sheet_name=0, header=None, dtype=object)
    df = df.dropna(how="all")
    return df.astype(object).where(df.notna(), None).values.tolist()

def _decode(buff: bytes) -> str:
    for enc in ("utf-8-sig", "cp1252"):
        try:
            return buff.decode(enc)
        except UnicodeDecodeError:
            continue
    return buff.decode("latin-1")

# ---------- public loaders ----------
def rows_from_bytes(buff: bytes, name: str) -> list[Row]:
    """
    Accepts: workbook bytes (.xlsx/.xls, first sheet) or delimited text.
    Returns: one dict per data row keyed by the header row.
    """
    if Path(name).suffix.lower() in EXCEL_SUFFIXES:
        grid = _grid_from_excel(buff)
    else:
        grid = _grid_from_text(_decode(buff))
    rows = _rows_from_grid(grid, name)
    _LOG.debug("parsed %d row(s) from %s", len(rows), name)
    return rows