"""Run summary report."""

from __future__ import annotations

from pathlib import Path

from geocode_batch.common.fs import write_json
from geocode_batch.common.time_utils import utc_timestamp_iso
from geocode_batch.lookup.runner import RunStats


def write_run_summary(path: Path, run_id: str, stats: RunStats, started_at: str) -> Path:
    status = "success"
    if stats.failed > 0 or stats.empty > 0:
        status = "partial"

    payload = {
        "run_id": run_id,
        "started_at": started_at,
        "finished_at": utc_timestamp_iso(),
        "status": status,
        "totals": stats.to_dict(),
    }
    write_json(path, payload)
    return path
