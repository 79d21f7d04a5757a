from __future__ import annotations
import json
from pathlib import Path
from typing import Any, Dict, Tuple
import pandas as pd
from .activities import ActivitySummary, ActivityStreams
from .config import GeneratorConfig

def _write_json(record: Dict[str, Any], path: Path):
    with open(path, "w", encoding="utf-8") as f:
        json.dump(record, f, indent=2)

def _write_csv(df: pd.DataFrame, path: Path):
    df.to_csv(path, index=False)

def _write_parquet(df: pd.DataFrame, path: Path):
    # Try pyarrow; if missing, raise a clear error
    try:
        df.to_parquet(path, index=False)
    except Exception as e:
        raise RuntimeError(
            "Parquet write failed. Install pyarrow (recommended) or use --format csv."
        ) from e

def write_activity(summary: ActivitySummary, streams: ActivityStreams,
                   athlete_dir: Path) -> Tuple[Path, Path]:
    """Write activity_{id}.json (summary) and streams_{id}.json (time + heartRate + metrics)."""
    activity_path = athlete_dir / f"activity_{summary.activity_id}.json"
    streams_path = athlete_dir / f"streams_{streams.activity_id}.json"
    _write_json(summary.to_record(), activity_path)
    _write_json(streams.to_record(), streams_path)
    return activity_path, streams_path

def write_outputs(index: pd.DataFrame, out_dir: Path, cfg: GeneratorConfig) -> dict:
    written = {}

    fmt = cfg.out_format
    if fmt in ("csv", "both"):
        ip = out_dir / "activities.csv"
        _write_csv(index, ip)
        written["activities_csv"] = str(ip)

    if fmt in ("parquet", "both"):
        ip = out_dir / "activities.parquet"
        _write_parquet(index, ip)
        written["activities_parquet"] = str(ip)

    return written
