# sheet_InsightDashboard/utils/detect.py
from __future__ import annotations
from pathlib import Path
from dataclasses import dataclass
from typing import Literal

DetectedKind = Literal["excel", "csv", "unknown"]

@dataclass(frozen=True)
class DetectedItem:
    path: Path        # actual path on disk
    kind: DetectedKind

    @property
    def name(self) -> str:
        return self.path.name

def detect_kind(p: Path) -> DetectedKind:
    """
    Classify a single path.
    - .xlsx / .xls        -> 'excel'
    - .csv / .tsv / .txt  -> 'csv'
    else                  -> 'unknown'
    Office lock files (~$book.xlsx) are 'unknown'.
    """
    if p.name.startswith("~$"):
        return "unknown"
    suffix = p.suffix.lower()
    if suffix in (".xlsx", ".xls"):
        return "excel"
    if suffix in (".csv", ".tsv", ".txt"):
        return "csv"
    return "unknown"

def discover_inputs(root: Path, recurse: bool = True) -> list[DetectedItem]:
    """
    If 'root' is a file -> return that one item (if known).
    If 'root' is a folder -> walk (optionally recursively) and collect spreadsheets.
    """
    items: list[DetectedItem] = []
    if root.is_file():
        kind = detect_kind(root)
        if kind != "unknown":
            items.append(DetectedItem(root.resolve(), kind))
        return items

    it = root.rglob("*") if recurse else root.glob("*")
    for p in it:
        if not p.is_file():
            continue
        kind = detect_kind(p)
        if kind != "unknown":
            items.append(DetectedItem(p.resolve(), kind))

    # deterministic ordering
    items.sort(key=lambda x: str(x.path))
    return items
