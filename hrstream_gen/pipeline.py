from __future__ import annotations
import json, hashlib, platform, datetime, sys, logging
from pathlib import Path
from typing import List, Optional
import numpy as np
import pandas as pd

from .config import GeneratorConfig
from .activities import (
    ActivitySummary, ActivityStreams, make_activity_id, generate_summary, build_streams,
)
from .sanity import run_sanity_checks
from .io import write_activity, write_outputs
from .utils import make_rng, reference_now

logger = logging.getLogger(__name__)

def _sha256_file(path: Path) -> str:
    h = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(1024*1024), b""):
            h.update(chunk)
    return h.hexdigest()

def _index_row(athlete_id: int, summary: ActivitySummary, streams: ActivityStreams,
               activity_path: Path, streams_path: Path) -> dict:
    hr = np.asarray(streams.heart_rate, dtype=float)
    recorded = hr[hr > 0]
    sampling = streams.time_seconds[1] - streams.time_seconds[0] if len(streams.time_seconds) > 1 else 1
    return {
        "athlete_id": int(athlete_id),
        "activity_id": summary.activity_id,
        "activity_name": summary.activity_name,
        "start_local": summary.start_local.isoformat(),
        "elapsed_time_sec": summary.elapsed_time_sec,
        "moving_time_sec": summary.moving_time_sec,
        "sampling_seconds": int(sampling),
        "n_samples": int(len(hr)),
        "n_dropout": int(len(hr) - len(recorded)),
        "hr_min": float(recorded.min()) if len(recorded) else np.nan,
        "hr_max": float(recorded.max()) if len(recorded) else np.nan,
        "hr_mean": float(recorded.mean()) if len(recorded) else np.nan,
        "threshold_bpm": streams.threshold_bpm,
        "seconds_above_threshold": streams.seconds_above_threshold,
        "activity_path": str(activity_path),
        "streams_path": str(streams_path),
    }

def produce_and_write(athlete_id: int, count: int = 5, seed: int = 12345,
                      out_root: str = "./synthetic", cfg: Optional[GeneratorConfig] = None,
                      now: Optional[datetime.datetime] = None) -> List[dict]:
    """Generate ``count`` activities for one athlete and write:

      <out_root>/<athlete_id>/activity_{id}.json   (summary)
      <out_root>/<athlete_id>/streams_{id}.json    (time + heartRate + metrics)

    Returns one index row per activity.
    """
    cfg = cfg or GeneratorConfig()
    now = now or reference_now(cfg.reference_time)

    athlete_dir = Path(out_root) / str(athlete_id)
    athlete_dir.mkdir(parents=True, exist_ok=True)

    # summary draws come from one generator per athlete; streams use their own
    rng = make_rng(seed)

    rows = []
    for i in range(count):
        activity_id = make_activity_id(athlete_id, i, cfg.activity_id_stride)
        summary = generate_summary(cfg, rng, activity_id, now)
        streams = build_streams(summary, cfg, seed)

        activity_path, streams_path = write_activity(summary, streams, athlete_dir)
        logger.info("Wrote %s", activity_path)
        logger.info("Wrote %s (samples=%d, above%d=%d)", streams_path,
                    len(streams.time_seconds), streams.threshold_bpm, streams.seconds_above_threshold)

        rows.append(_index_row(athlete_id, summary, streams, activity_path, streams_path))
    return rows

def generate_dataset(cfg: GeneratorConfig, out_dir: str, run_checks: bool = True) -> dict:
    cfg.validate()
    out_path = Path(out_dir)
    out_path.mkdir(parents=True, exist_ok=True)

    now = reference_now(cfg.reference_time)

    # 1) per-athlete activities + stream records
    rows = []
    for athlete_id, seed in cfg.athletes:
        rows.extend(produce_and_write(athlete_id, count=cfg.activities_per_athlete, seed=seed,
                                      out_root=str(out_path), cfg=cfg, now=now))
    index = pd.DataFrame(rows)

    # 2) index table + metadata
    written = write_outputs(index, out_path, cfg)

    meta = {
        "generated_at_utc": datetime.datetime.now(datetime.timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
        "reference_time": now.isoformat(),
        "python": sys.version.split()[0],
        "platform": platform.platform(),
        "config": cfg.to_dict(),
        "counts": {
            "n_athletes": len(cfg.athletes),
            "n_activities": int(index.shape[0]),
            "n_samples": int(index["n_samples"].sum()) if len(index) else 0,
        },
        "files": {},
    }

    for name, path in written.items():
        meta["files"][name] = {
            "path": str(path),
            "sha256": _sha256_file(Path(path)),
        }

    meta_path = out_path / "metadata.json"
    with open(meta_path, "w", encoding="utf-8") as f:
        json.dump(meta, f, indent=2)

    if run_checks:
        report = run_sanity_checks(index, cfg)
        report_path = out_path / "sanity_report.json"
        with open(report_path, "w", encoding="utf-8") as f:
            json.dump(report, f, indent=2)
        for check in report["checks"]:
            if not check["passed"]:
                logger.warning("Sanity check failed: %s (%s)", check["name"], check["detail"])
        written["sanity_report"] = str(report_path)

    return {"metadata_path": str(meta_path), "outputs": written}
