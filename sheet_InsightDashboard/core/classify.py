# sheet_InsightDashboard/core/classify.py
from __future__ import annotations
import logging
import re
from dataclasses import dataclass
from typing import Iterable, Sequence

import numpy as np

from .model import Cell, FieldDescriptor, FieldType, Row
from .normalize import as_text, is_missing, to_number

# ----- defaults (used if configure_from_config isn't called) -----
_DEFAULT_DIMENSION_KEYWORDS: tuple[str, ...] = (
    "name", "nama", "type", "tipe", "jenis", "category", "kategori",
    "status", "department", "departemen", "mesin",
)
_DEFAULT_METRIC_KEYWORDS: tuple[str, ...] = (
    "total", "amount", "count", "sum", "quantity", "qty", "price", "cost",
    "hour", "jam", "jumlah", "harga", "biaya",
)
_DEFAULT_MONEY_KEYWORDS: tuple[str, ...] = ("amount", "price", "cost", "harga", "biaya")

_NUMBER_SHARE: float = 0.8          # numeric share needed for NUMBER
_CATEGORY_MIN_UNIQUE: int = 20      # unique-value ceiling is max(this, share * n)
_CATEGORY_UNIQUE_SHARE: float = 0.7
_CATEGORY_MAX_NUMERIC_SHARE: float = 0.5
_SAMPLE_SIZE: int = 5

_MISSING_TOKENS = ("", "N/A")
_CURRENCY = re.compile(r"^\$?\d+(\.\d{2})?\Z")

_LOG = logging.getLogger(__name__)

@dataclass(frozen=True)
class OverrideRule:
    """Name-based override applied after the statistical pass."""
    label: str
    keywords: tuple[str, ...]
    forced_type: FieldType
    as_metric: bool
    requires_numeric: bool = False

    def matches(self, lower_name: str) -> bool:
        return any(k in lower_name for k in self.keywords)

def _build_rules(dimension_kws, metric_kws) -> tuple[OverrideRule, ...]:
    # Priority: evaluated top to bottom, later rules win. A name hitting both
    # keyword sets ends as a metric.
    return (
        OverrideRule("dimension", tuple(dimension_kws), FieldType.CATEGORY, as_metric=False),
        OverrideRule("metric", tuple(metric_kws), FieldType.NUMBER, as_metric=True, requires_numeric=True),
    )

_MONEY_KEYWORDS: tuple[str, ...] = _DEFAULT_MONEY_KEYWORDS
OVERRIDE_RULES: tuple[OverrideRule, ...] = _build_rules(_DEFAULT_DIMENSION_KEYWORDS, _DEFAULT_METRIC_KEYWORDS)

def _keywords(value, default: tuple[str, ...]) -> tuple[str, ...]:
    if isinstance(value, Iterable) and not isinstance(value, (str, bytes)):
        lowered = tuple(str(k).lower() for k in value if str(k).strip())
        if lowered:
            return lowered
    return default

def configure_from_config(cfg: dict) -> None:
    """
    Optional: call once at startup to override the keyword tables from config.yaml.
    Keeps classify_field signature unchanged.
    """
    global OVERRIDE_RULES, _MONEY_KEYWORDS

    # reset to defaults each call so repeated invocations do not accumulate
    cls = (cfg or {}).get("classification", {}) if cfg else {}
    cls = cls or {}
    dimension_kws = _keywords(cls.get("dimension_keywords"), _DEFAULT_DIMENSION_KEYWORDS)
    metric_kws = _keywords(cls.get("metric_keywords"), _DEFAULT_METRIC_KEYWORDS)
    _MONEY_KEYWORDS = _keywords(cls.get("money_keywords"), _DEFAULT_MONEY_KEYWORDS)
    OVERRIDE_RULES = _build_rules(dimension_kws, metric_kws)

def _summary(numbers: list[float]) -> dict:
    if not numbers:
        return {}
    arr = np.asarray(numbers, dtype=float)
    total = float(arr.sum())
    return {
        "total": total,
        "average": total / arr.size,
        "minimum": float(arr.min()),
        "maximum": float(arr.max()),
    }

def _no_summary() -> dict:
    return {"total": None, "average": None, "minimum": None, "maximum": None}

def _is_present(value: Cell) -> bool:
    if is_missing(value):
        return False
    return not (isinstance(value, str) and value in _MISSING_TOKENS)

def _unique_key(value: Cell):
    # 1 and "1" stay distinct, 1 and 1.0 collapse
    return (isinstance(value, str), value)

def classify_field(values: Sequence[Cell], field_name: str) -> FieldDescriptor:
    """
    Infer type and role of one column.

    Order (later steps override earlier ones):
      1) empty column -> TEXT, no role (final)
      2) any currency-looking string -> CURRENCY metric
      3) >= 80% numeric -> NUMBER metric
      4) few distinct, mostly non-numeric values -> CATEGORY dimension
      5) OVERRIDE_RULES on the lower-cased field name
    """
    non_null = [v for v in values if _is_present(v)]
    if not non_null:
        return FieldDescriptor(name=field_name)

    unique_count = len({_unique_key(v) for v in non_null})
    samples: list[str] = []
    for v in non_null[:_SAMPLE_SIZE]:
        text = as_text(v)
        if text not in samples:
            samples.append(text)

    numbers = [n for n in (to_number(v) for v in non_null) if n is not None]
    n = len(non_null)

    ftype = FieldType.TEXT
    is_metric = False
    is_dimension = False
    summary = _no_summary()

    if any(isinstance(v, str) and _CURRENCY.match(v.replace(",", "")) for v in non_null):
        ftype, is_metric = FieldType.CURRENCY, True
        summary.update(_summary(numbers))
    elif len(numbers) >= n * _NUMBER_SHARE:
        ftype, is_metric = FieldType.NUMBER, True
        summary.update(_summary(numbers))
    elif (1 < unique_count <= max(_CATEGORY_MIN_UNIQUE, n * _CATEGORY_UNIQUE_SHARE)
          and len(numbers) < n * _CATEGORY_MAX_NUMERIC_SHARE):
        ftype, is_dimension = FieldType.CATEGORY, True

    lower_name = field_name.lower()
    for rule in OVERRIDE_RULES:
        if not rule.matches(lower_name):
            continue
        if rule.requires_numeric and not numbers:
            continue
        if rule.as_metric:
            money = any(k in lower_name for k in _MONEY_KEYWORDS)
            ftype = FieldType.CURRENCY if money else rule.forced_type
            is_metric, is_dimension = True, False
            summary = _no_summary()
            summary.update(_summary(numbers))
        else:
            ftype = rule.forced_type
            is_metric, is_dimension = False, True
            summary = _no_summary()
        _LOG.debug("field '%s' forced to %s by %s keyword", field_name, ftype.value, rule.label)

    return FieldDescriptor(
        name=field_name,
        type=ftype,
        is_metric=is_metric,
        is_dimension=is_dimension,
        unique_value_count=unique_count,
        sample_values=tuple(samples),
        **summary,
    )

def classify_rows(rows: Sequence[Row]) -> list[FieldDescriptor]:
    """One descriptor per column of the first row, in column order."""
    if not rows:
        return []
    names = list(rows[0].keys())
    return [classify_field([r.get(name) for r in rows], name) for name in names]
