# sheet_InsightDashboard/core/filters.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable

from .model import TowerRecord
from .towers import VOLTAGE_BANDS, voltage_band

@dataclass(frozen=True)
class TowerFilters:
    search: str = ""
    voltage_band: str = ""        # one of VOLTAGE_BANDS, "" = all
    region: str = ""
    status: str = ""

def normalize_filters(raw: dict) -> TowerFilters:
    raw = raw or {}
    band = str(raw.get("voltage_band") or "").strip()
    if band not in VOLTAGE_BANDS:
        band = ""
    return TowerFilters(
        search=str(raw.get("search") or "").strip(),
        voltage_band=band,
        region=str(raw.get("region") or "").strip(),
        status=str(raw.get("status") or "").strip(),
    )

def _matches_search(t: TowerRecord, query: str) -> bool:
    return any(query in s.lower() for s in (t.location_name, t.unit_name, t.substation, t.region))

def filter_towers(towers: Iterable[TowerRecord], filters: TowerFilters) -> list[TowerRecord]:
    out = list(towers)
    if filters.search:
        q = filters.search.lower()
        out = [t for t in out if _matches_search(t, q)]
    if filters.voltage_band:
        out = [t for t in out if voltage_band(t.voltage_kv) == filters.voltage_band]
    if filters.region:
        r = filters.region.lower()
        out = [t for t in out if r in t.region.lower()]
    if filters.status:
        s = filters.status.lower()
        out = [t for t in out if s in t.status.lower()]
    return out

def tower_stats(towers: Iterable[TowerRecord]) -> dict[str, int]:
    towers = list(towers)
    stats = {"total": len(towers)}
    for band in VOLTAGE_BANDS:
        stats[band] = 0
    for t in towers:
        stats[voltage_band(t.voltage_kv)] += 1
    return stats

def unique_regions(towers: Iterable[TowerRecord]) -> list[str]:
    return sorted({t.region for t in towers if t.region})

def unique_statuses(towers: Iterable[TowerRecord]) -> list[str]:
    return sorted({t.status for t in towers if t.status})
