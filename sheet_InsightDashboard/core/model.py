# sheet_InsightDashboard/core/model.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

Cell = Union[str, int, float, None]
Row = dict[str, Cell]          # column name as in the source file -> raw cell

class FieldType(str, Enum):
    NUMBER = "number"
    CURRENCY = "currency"
    CATEGORY = "category"
    TEXT = "text"

@dataclass(frozen=True)
class FieldDescriptor:
    name: str
    type: FieldType = FieldType.TEXT
    is_metric: bool = False
    is_dimension: bool = False
    unique_value_count: int = 0
    sample_values: tuple[str, ...] = ()
    # numeric summary, only set for metrics
    total: Optional[float] = None
    average: Optional[float] = None
    minimum: Optional[float] = None
    maximum: Optional[float] = None

@dataclass(frozen=True)
class ChartSeries:
    title: str                                # "<metric> by <dimension>"
    dimension_field: str
    metric_field: str
    points: tuple[tuple[str, float], ...]     # descending, capped
    total: float                              # over all groups, not only the points

@dataclass(frozen=True)
class TowerRecord:
    id: str
    unit_name: str
    latitude: float
    longitude: float
    tower_type: str
    voltage_kv: int
    location_name: str
    substation: str
    region: str
    status: str

@dataclass(frozen=True)
class FileResult:
    name: str
    source: str
    rows: tuple[Row, ...] = ()
    fields: tuple[FieldDescriptor, ...] = ()
    series: Optional[ChartSeries] = None
    towers: tuple[TowerRecord, ...] = ()
    n_rows: int = 0
    n_columns: int = 0
    error: str = ""

    @property
    def ok(self) -> bool:
        return self.n_rows > 0

@dataclass(frozen=True)
class BatchResult:
    files: tuple[FileResult, ...] = ()
    towers: tuple[TowerRecord, ...] = ()

    @property
    def succeeded(self) -> list[FileResult]:
        return [f for f in self.files if f.ok]

    @property
    def failed(self) -> list[FileResult]:
        return [f for f in self.files if not f.ok]
