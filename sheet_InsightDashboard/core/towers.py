# sheet_InsightDashboard/core/towers.py
from __future__ import annotations
import logging
import math
from typing import Iterable, Optional

from .model import Row, TowerRecord
from .normalize import clean_string, parse_coordinate, parse_voltage
from .resolve import resolve_column

# header aliases, preferred spelling first (English and Indonesian sheets)
LAT_ALIASES = ("LOCK LAT", "Latitude", "LAT", "Lock Lat")
LON_ALIASES = ("LOCK LONG", "LOCK LON", "Longitude", "LONG", "LON", "Lock Long")
LOCATION_ALIASES = ("Nama Lokasi", "NAMA LOKASI", "Location", "LOKASI")
VOLTAGE_ALIASES = ("Tegangan", "TEGANGAN", "Voltage", "KV")
TYPE_ALIASES = ("TIPE", "TIPE TOWER", "Type", "Tower Type")
UNIT_ALIASES = ("Unit", "UNIT", "Unit Name", "No")
SUBSTATION_ALIASES = ("Gardu Induk", "GARDU INDUK", "Substation", "GI")
REGION_ALIASES = ("KOTA/KAB", "KOTA", "Region", "Wilayah", "KAB", "KABUPATEN")
STATUS_ALIASES = ("Status Operasi", "STATUS", "Status", "Operasi")
ID_ALIASES = ("IdFunctloc", "FUNCTLOC", "ID", "Functloc")

# coordinates at or below this magnitude are treated as unset, not as equator/meridian
COORD_SENTINEL: float = 0.1

# (min kV inclusive, color, size); first match wins
MARKER_TIERS: tuple[tuple[int, str, int], ...] = (
    (500, "#DC2626", 28),   # red
    (150, "#EA580C", 24),   # orange
    (70,  "#CA8A04", 20),   # yellow
)
MARKER_DEFAULT: tuple[str, int] = ("#059669", 16)  # green

VOLTAGE_BANDS: tuple[str, ...] = ("500+", "150-499", "70-149", "<70")

_LOG = logging.getLogger(__name__)

def marker_color(voltage_kv: int) -> str:
    for low, color, _ in MARKER_TIERS:
        if voltage_kv >= low:
            return color
    return MARKER_DEFAULT[0]

def marker_size(voltage_kv: int) -> int:
    for low, _, size in MARKER_TIERS:
        if voltage_kv >= low:
            return size
    return MARKER_DEFAULT[1]

def voltage_band(voltage_kv: int) -> str:
    if voltage_kv >= 500:
        return "500+"
    if voltage_kv >= 150:
        return "150-499"
    if voltage_kv >= 70:
        return "70-149"
    return "<70"

def valid_coordinates(latitude: float, longitude: float) -> bool:
    for value in (latitude, longitude):
        if value == 0 or math.isnan(value) or abs(value) <= COORD_SENTINEL:
            return False
    return -90 <= latitude <= 90 and -180 <= longitude <= 180

def has_required_columns(row: Row) -> bool:
    return bool(resolve_column(row, LAT_ALIASES)
                and resolve_column(row, LON_ALIASES)
                and resolve_column(row, LOCATION_ALIASES))

def to_record(row: Row, index: int = 0) -> Optional[TowerRecord]:
    """Build a tower from one raw row; None when the row is rejected."""
    lat_str = resolve_column(row, LAT_ALIASES)
    lon_str = resolve_column(row, LON_ALIASES)
    location = resolve_column(row, LOCATION_ALIASES)
    if not (lat_str and lon_str and location):
        return None

    latitude = parse_coordinate(lat_str)
    longitude = parse_coordinate(lon_str)
    if not valid_coordinates(latitude, longitude):
        _LOG.debug("invalid coordinates for %s: lat=%s, lng=%s", location, latitude, longitude)
        return None

    functloc = resolve_column(row, ID_ALIASES)
    return TowerRecord(
        id=functloc or f"tower-{index}",
        unit_name=clean_string(resolve_column(row, UNIT_ALIASES) or "Unknown Unit"),
        latitude=latitude,
        longitude=longitude,
        tower_type=clean_string(resolve_column(row, TYPE_ALIASES) or "Unknown"),
        voltage_kv=parse_voltage(resolve_column(row, VOLTAGE_ALIASES)),
        location_name=clean_string(location),
        substation=clean_string(resolve_column(row, SUBSTATION_ALIASES) or "Unknown Substation", 80),
        region=clean_string(resolve_column(row, REGION_ALIASES) or "Unknown Region"),
        status=clean_string(resolve_column(row, STATUS_ALIASES) or "Unknown Status"),
    )

def towers_from_rows(rows: Iterable[Row]) -> list[TowerRecord]:
    """
    Pre-filter rows lacking lat/lon/location, then build and validate.
    Ids fall back to the position among pre-filtered rows.
    """
    kept = [r for r in rows if has_required_columns(r)]
    towers: list[TowerRecord] = []
    for idx, row in enumerate(kept):
        rec = to_record(row, idx)
        if rec is not None:
            towers.append(rec)
    _LOG.debug("%d of %d row(s) with coordinates kept as towers", len(towers), len(kept))
    return towers
