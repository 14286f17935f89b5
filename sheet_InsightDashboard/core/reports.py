# sheet_InsightDashboard/core/reports.py
from __future__ import annotations
from dataclasses import asdict
from pathlib import Path
from typing import Sequence
import pandas as pd

from .model import ChartSeries, FieldDescriptor, FileResult, TowerRecord
from .towers import marker_color, marker_size, voltage_band

FIELD_COLUMNS = [
    "name", "type", "is_metric", "is_dimension", "unique_value_count",
    "sample_values", "total", "average", "minimum", "maximum",
]

def write_fields_report(fields: Sequence[FieldDescriptor], out_path: Path) -> pd.DataFrame:
    rows = []
    for fd in fields:
        row = asdict(fd)
        row["type"] = fd.type.value
        row["sample_values"] = " | ".join(fd.sample_values)
        rows.append(row)
    df = pd.DataFrame(rows, columns=FIELD_COLUMNS)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(out_path, index=False)
    return df

def write_series_report(series: ChartSeries, out_path: Path) -> pd.DataFrame:
    """Shown points plus a TOTAL row; TOTAL covers all groups, not only the shown ones."""
    rows = [{series.dimension_field: cat, series.metric_field: val} for cat, val in series.points]
    rows.append({series.dimension_field: "TOTAL", series.metric_field: series.total})
    df = pd.DataFrame(rows, columns=[series.dimension_field, series.metric_field])
    out_path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(out_path, index=False)
    return df

def write_towers_report(towers: Sequence[TowerRecord], out_path: Path) -> pd.DataFrame:
    rows = []
    for t in towers:
        row = asdict(t)
        row["voltage_band"] = voltage_band(t.voltage_kv)
        row["marker_color"] = marker_color(t.voltage_kv)
        row["marker_size"] = marker_size(t.voltage_kv)
        rows.append(row)
    df = pd.DataFrame(rows)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(out_path, index=False)
    return df

def write_summary_report(files: Sequence[FileResult], out_path: Path) -> pd.DataFrame:
    rows = [{
        "file": f.name,
        "source": f.source,
        "status": "ok" if f.ok else "failed",
        "n_rows": f.n_rows,
        "n_columns": f.n_columns,
        "chart": f.series.title if f.series else "",
        "n_towers": len(f.towers),
        "error": f.error,
    } for f in files]
    df = pd.DataFrame(rows, columns=[
        "file", "source", "status", "n_rows", "n_columns", "chart", "n_towers", "error",
    ])
    out_path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(out_path, index=False)
    return df
