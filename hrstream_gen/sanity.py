from __future__ import annotations
import numpy as np
import pandas as pd
from .config import GeneratorConfig

def _check(report: dict, name: str, passed: bool, detail: str = "") -> None:
    report["checks"].append({"name": name, "passed": bool(passed), "detail": detail})

def run_sanity_checks(index: pd.DataFrame, cfg: GeneratorConfig) -> dict:
    """Lightweight sanity checks over the activity index.

    Returns a JSON-serializable dict with metrics + pass/fail flags.
    """
    report = {"summary": {}, "checks": []}

    n = int(index.shape[0])
    report["summary"]["activities"] = n
    report["summary"]["athletes"] = int(index["athlete_id"].nunique()) if n else 0
    if n:
        samples = index["n_samples"].to_numpy(dtype=float)
        report["summary"]["mean_samples"] = float(np.mean(samples))
        report["summary"]["mean_seconds_above_threshold"] = float(index["seconds_above_threshold"].mean())
        report["summary"]["dropout_rate"] = float(index["n_dropout"].sum() / max(1.0, samples.sum()))

    _check(report, "non_empty", n > 0, f"{n} activities")
    if n == 0:
        return report

    dup = int(index["activity_id"].duplicated().sum())
    _check(report, "unique_activity_ids", dup == 0, f"{dup} duplicates")

    expected = index["elapsed_time_sec"] // index["sampling_seconds"] + 1
    bad_len = int((expected != index["n_samples"]).sum())
    _check(report, "sample_count_matches_duration", bad_len == 0, f"{bad_len} mismatched")

    above = index["seconds_above_threshold"]
    bad_above = int(((above < 0) | (above > index["n_samples"])).sum())
    _check(report, "threshold_count_within_samples", bad_above == 0, f"{bad_above} out of range")

    # hr_min/hr_max exclude dropout zeros; NaN when every sample dropped
    lo = index["hr_min"].dropna()
    hi = index["hr_max"].dropna()
    in_bounds = bool((lo >= cfg.resting_bpm).all() and (hi <= cfg.max_bpm).all())
    _check(report, "hr_within_bounds", in_bounds, f"[{cfg.resting_bpm}, {cfg.max_bpm}]")

    return report
