# sheet_InsightDashboard/core/plotting.py
from __future__ import annotations
from pathlib import Path
from typing import Sequence
import matplotlib.pyplot as plt

from .model import ChartSeries, TowerRecord
from .towers import MARKER_DEFAULT, MARKER_TIERS, marker_color, marker_size

_BAR_COLOR = "#8884d8"

def save_series_plot(series: ChartSeries, out_path: Path) -> None:
    if not series.points:
        print(f"[INFO] {series.title}: no points; skipping chart.")
        return
    out_path.parent.mkdir(parents=True, exist_ok=True)

    labels = [cat for cat, _ in series.points]
    values = [val for _, val in series.points]

    plt.figure(figsize=(11, 6))
    plt.bar(range(len(values)), values, color=_BAR_COLOR, label=series.metric_field)
    plt.xticks(range(len(labels)), labels, rotation=45, ha="right", fontsize=8)
    plt.xlabel(series.dimension_field)
    plt.ylabel(series.metric_field)
    plt.title(f"{series.title} (total {series.total:,.2f})")
    plt.grid(True, axis="y", alpha=0.3)
    plt.legend(fontsize=8, frameon=False)
    plt.tight_layout()
    plt.savefig(out_path, dpi=160)
    plt.close()
    print(f"[OK] {series.title}: {len(values)} bar(s) → {out_path}")

def save_tower_map(towers: Sequence[TowerRecord], out_path: Path) -> None:
    """Lon/lat scatter, one marker per tower, colored and sized by voltage tier."""
    if not towers:
        return
    out_path.parent.mkdir(parents=True, exist_ok=True)

    xs = [t.longitude for t in towers]
    ys = [t.latitude for t in towers]
    colors = [marker_color(t.voltage_kv) for t in towers]
    # matplotlib sizes are areas in pt^2
    sizes = [marker_size(t.voltage_kv) ** 2 / 4 for t in towers]

    plt.figure(figsize=(9, 8))
    plt.scatter(xs, ys, c=colors, s=sizes, marker="s", edgecolors="white", linewidths=1.0)
    for low, color, size in MARKER_TIERS:
        plt.scatter([], [], c=color, s=size ** 2 / 4, marker="s", label=f"≥{low} kV")
    plt.scatter([], [], c=MARKER_DEFAULT[0], s=MARKER_DEFAULT[1] ** 2 / 4, marker="s", label="<70 kV")
    plt.xlabel("Longitude")
    plt.ylabel("Latitude")
    plt.title(f"Towers ({len(towers)})")
    plt.grid(True, alpha=0.3)
    plt.legend(fontsize=8, loc="best", frameon=False)
    plt.tight_layout()
    plt.savefig(out_path, dpi=160)
    plt.close()
    print(f"[OK] tower map: {len(towers)} tower(s) → {out_path}")
