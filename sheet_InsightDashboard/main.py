# sheet_InsightDashboard/main.py
from __future__ import annotations
from pathlib import Path
import logging
import sys
import yaml

from sheet_InsightDashboard.core.filters import tower_stats, unique_regions, unique_statuses
from sheet_InsightDashboard.core.pipeline import SourceFile, run_batch, write_outputs
from sheet_InsightDashboard.loaders.drive_loader import DriveClient, DriveRequestError, settings_from_config
from sheet_InsightDashboard.utils.detect import discover_inputs

def load_config(cfg_path: Path) -> dict:
    with cfg_path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}

def _local_sources(cfg: dict, verbose: bool) -> list[SourceFile]:
    in_path = Path(cfg["input"]["path"]).resolve()
    recurse = bool(cfg["input"].get("recurse", True))
    if verbose:
        print(f"[cfg] input={in_path} (recurse={recurse})")

    detected = discover_inputs(in_path, recurse=recurse)
    if verbose and detected:
        kinds: dict[str, int] = {}
        for d in detected:
            kinds.setdefault(d.kind, 0)
            kinds[d.kind] += 1
        print(f"[detector] found {sum(kinds.values())} inputs → {kinds}")
    return [SourceFile(name=d.name, source=str(d.path), read=d.path.read_bytes) for d in detected]

def _drive_sources(cfg: dict, verbose: bool) -> list[SourceFile]:
    client = DriveClient(settings_from_config(cfg))
    if verbose:
        print("[drive] Connecting to Google Drive...")
    client.check_access()
    files = client.list_spreadsheets()
    if verbose:
        print(f"[drive] Found {len(files)} spreadsheet file(s). Processing...")
    return [SourceFile(name=f.download_name, source=f"drive:{f.id}",
                       read=lambda f=f: client.download(f)) for f in files]

def main(argv: list[str] | None = None):
    argv = sys.argv[1:] if argv is None else argv

    # ---------- config ----------
    here = Path(__file__).resolve().parent
    cfg = load_config(Path(argv[0]) if argv else here / "config.yaml")

    log_cfg = cfg.get("logging", {}) or {}
    verbose = bool(log_cfg.get("verbose", True))
    logging.basicConfig(level=str(log_cfg.get("level", "INFO")).upper(),
                        format="%(levelname)s %(name)s: %(message)s")

    out_root = Path(cfg["output"]["root"]).resolve()
    out_root.mkdir(parents=True, exist_ok=True)
    if verbose:
        print(f"[cfg] output={out_root}")

    # ---------- discover ----------
    source = str(cfg.get("input", {}).get("source", "local")).lower()
    try:
        items = _drive_sources(cfg, verbose) if source == "drive" else _local_sources(cfg, verbose)
    except (DriveRequestError, ValueError) as e:
        print(f"[ERROR] {e}")
        sys.exit(1)

    if not items:
        print("[INFO] No Excel/CSV inputs found; nothing to process.")
        sys.exit(0)

    # ---------- process ----------
    progress = (lambda msg: print(f"  [load] {msg}")) if verbose else None
    batch = run_batch(items, cfg, progress=progress)
    write_outputs(batch, cfg, out_root)

    # ---------- summary ----------
    if not batch.succeeded:
        print("[WARN] No files could be processed successfully. Check file formats and permissions.")
    elif batch.failed:
        names = ", ".join(f.name for f in batch.failed)
        print(f"[WARN] {len(batch.failed)} file(s) failed to process: {names}")

    if verbose:
        charts = sum(1 for f in batch.succeeded if f.series is not None)
        print(f"[summary] {len(batch.succeeded)}/{len(batch.files)} file(s) processed, "
              f"{charts} chart(s), towers by voltage: {tower_stats(batch.towers)}, "
              f"regions: {unique_regions(batch.towers)}, statuses: {unique_statuses(batch.towers)}")

if __name__ == "__main__":
    main()
