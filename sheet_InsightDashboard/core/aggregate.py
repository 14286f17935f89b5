# sheet_InsightDashboard/core/aggregate.py
from __future__ import annotations
import logging
from typing import Optional, Sequence

import pandas as pd

from .model import ChartSeries, FieldDescriptor, Row
from .normalize import as_text, to_number

DEFAULT_TOP_N: int = 10
UNKNOWN_CATEGORY = "Unknown"

_LOG = logging.getLogger(__name__)

def _pick(fields: Sequence[FieldDescriptor], role: str, wanted: Optional[str]) -> Optional[FieldDescriptor]:
    eligible = [f for f in fields if getattr(f, role)]
    if wanted is not None:
        eligible = [f for f in eligible if f.name == wanted]
    return eligible[0] if eligible else None

def build_series(rows: Sequence[Row],
                 fields: Sequence[FieldDescriptor],
                 top_n: int = DEFAULT_TOP_N,
                 metric: Optional[str] = None,
                 dimension: Optional[str] = None) -> Optional[ChartSeries]:
    """
    Sum the first metric field per value of the first dimension field.

    ``metric`` / ``dimension`` pick a specific eligible field by name instead of
    the first one. Returns None when no metric or no dimension is available.
    Unparsable metric cells count as 0 here (classification ignores them).
    ``total`` covers every group, ``points`` only the top ``top_n``.
    """
    m = _pick(fields, "is_metric", metric)
    d = _pick(fields, "is_dimension", dimension)
    if m is None or d is None:
        _LOG.debug("no chart: metric=%s dimension=%s", m and m.name, d and d.name)
        return None

    frame = pd.DataFrame({
        "category": [as_text(r.get(d.name)) or UNKNOWN_CATEGORY for r in rows],
        "value": [to_number(r.get(m.name)) or 0.0 for r in rows],
    })
    if frame.empty:
        grouped = pd.Series(dtype=float)
    else:
        # first-seen order kept for ties
        grouped = frame.groupby("category", sort=False)["value"].sum()
        grouped = grouped.sort_values(ascending=False, kind="stable")

    points = tuple((str(cat), float(val)) for cat, val in grouped.head(max(0, int(top_n))).items())
    return ChartSeries(
        title=f"{m.name} by {d.name}",
        dimension_field=d.name,
        metric_field=m.name,
        points=points,
        total=float(grouped.sum()),
    )
