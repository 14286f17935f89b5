# sheet_InsightDashboard/core/pipeline.py
from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Sequence
import logging
import re

from .aggregate import DEFAULT_TOP_N, build_series
from .classify import classify_rows, configure_from_config
from .filters import filter_towers, normalize_filters
from .model import BatchResult, FileResult, Row
from .normalize import normalize_rows
from .plotting import save_series_plot, save_tower_map
from .reports import write_fields_report, write_series_report, write_summary_report, write_towers_report
from .towers import towers_from_rows
from ..loaders.table_loader import rows_from_bytes

_LOG = logging.getLogger(__name__)

ProgressFn = Callable[[str], None]

@dataclass(frozen=True)
class SourceFile:
    name: str                       # file name incl. suffix, picks the parser
    source: str                     # where it came from (path or drive id)
    read: Callable[[], bytes]

def process_rows(name: str, raw_rows: Sequence[Row], source: str = "",
                 top_n: int = DEFAULT_TOP_N) -> FileResult:
    """Classify, aggregate and extract towers for one file's rows."""
    if not raw_rows:
        return FileResult(name=name, source=source)

    rows = normalize_rows(raw_rows)
    fields = classify_rows(rows)
    series = build_series(rows, fields, top_n=top_n)
    # tower columns are resolved on the raw text, not the numeric-normalized rows
    towers = towers_from_rows(raw_rows)

    _LOG.info("%s: %d row(s), %d field(s) (%d metric, %d dimension), chart=%s, towers=%d",
              name, len(rows), len(fields),
              sum(f.is_metric for f in fields), sum(f.is_dimension for f in fields),
              series.title if series else None, len(towers))
    return FileResult(
        name=name,
        source=source,
        rows=tuple(rows),
        fields=tuple(fields),
        series=series,
        towers=tuple(towers),
        n_rows=len(rows),
        n_columns=len(rows[0]),
    )

def run_batch(items: Sequence[SourceFile], cfg: dict,
              progress: Optional[ProgressFn] = None) -> BatchResult:
    """
    Process files one after another. A file that fails to download or parse
    becomes an empty FileResult carrying the error; the batch goes on.
    """
    configure_from_config(cfg)
    top_n = int(((cfg or {}).get("charts") or {}).get("top_n", DEFAULT_TOP_N))

    results: list[FileResult] = []
    towers: list = []
    total = len(items)
    for i, item in enumerate(items, start=1):
        if progress is not None:
            progress(f"Processing {item.name} ({i}/{total})...")
        try:
            raw_rows = rows_from_bytes(item.read(), item.name)
            result = process_rows(item.name, raw_rows, source=item.source, top_n=top_n)
        except Exception as e:
            _LOG.warning("failed to process %s: %s", item.name, e)
            result = FileResult(name=item.name, source=item.source, error=str(e))
        results.append(result)
        towers.extend(result.towers)

    return BatchResult(files=tuple(results), towers=tuple(towers))

def _sanitize(name: str) -> str:
    s = re.sub(r"[^A-Za-z0-9._-]+", "_", Path(name).stem).strip("_")
    return (s[:120] if len(s) > 120 else s) or "file"

def write_outputs(batch: BatchResult, cfg: dict, out_root: Path) -> None:
    """Per-file field/series reports and charts, plus batch summary and tower map."""
    out_root.mkdir(parents=True, exist_ok=True)
    charts_cfg = (cfg or {}).get("charts", {}) or {}
    map_cfg = (cfg or {}).get("map", {}) or {}

    seen: dict[str, int] = {}
    for res in batch.succeeded:
        base = _sanitize(res.name)
        seen[base] = seen.get(base, 0) + 1
        if seen[base] > 1:
            base = f"{base}_{seen[base]:02d}"
        file_dir = out_root / base
        file_dir.mkdir(parents=True, exist_ok=True)

        write_fields_report(res.fields, file_dir / "fields.csv")
        if res.series is None:
            _LOG.info("%s: no metric/dimension pair; chart skipped", res.name)
            continue
        write_series_report(res.series, file_dir / "series.csv")
        if bool(charts_cfg.get("plot", True)):
            save_series_plot(res.series, file_dir / "chart.png")

    write_summary_report(batch.files, out_root / "summary.csv")
    towers = filter_towers(batch.towers, normalize_filters(map_cfg.get("filters")))
    if len(towers) < len(batch.towers):
        _LOG.info("map filters kept %d of %d tower(s)", len(towers), len(batch.towers))
    if towers:
        write_towers_report(towers, out_root / "towers.csv")
        if bool(map_cfg.get("plot", True)):
            save_tower_map(towers, out_root / "tower_map.png")
