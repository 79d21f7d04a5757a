import json
import logging

import pandas as pd
import pytest

from hrstream_gen.pipeline import generate_dataset, produce_and_write
from hrstream_gen.sanity import run_sanity_checks


def _read_json(path):
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def test_produce_and_write_layout(tmp_path, small_cfg, caplog):
    with caplog.at_level(logging.INFO, logger="hrstream_gen.pipeline"):
        rows = produce_and_write(10000, count=3, seed=40, out_root=str(tmp_path), cfg=small_cfg)

    athlete_dir = tmp_path / "10000"
    names = sorted(p.name for p in athlete_dir.iterdir())
    assert names == [
        "activity_10000000001.json",
        "activity_10000000002.json",
        "activity_10000000003.json",
        "streams_10000000001.json",
        "streams_10000000002.json",
        "streams_10000000003.json",
    ]
    assert [r["activity_id"] for r in rows] == [10000000001, 10000000002, 10000000003]
    assert "Wrote" in caplog.text
    assert "above100=" in caplog.text


def test_written_records_are_consistent(tmp_path, small_cfg):
    rows = produce_and_write(10001, count=2, seed=41, out_root=str(tmp_path), cfg=small_cfg)
    for row in rows:
        summary = _read_json(tmp_path / "10001" / f"activity_{row['activity_id']}.json")
        streams = _read_json(tmp_path / "10001" / f"streams_{row['activity_id']}.json")
        assert summary["activityId"] == streams["activityId"] == row["activity_id"]
        assert summary["hasHeartRate"] is True
        assert len(streams["timeSeconds"]) == len(streams["heartRate"])
        assert len(streams["timeSeconds"]) == summary["elapsedTimeSec"] + 1
        above = sum(1 for v in streams["heartRate"] if v > streams["thresholdBpm"])
        assert streams["secondsAboveThreshold"] == above == row["seconds_above_threshold"]


def test_negative_athlete_seed(tmp_path, small_cfg):
    a = produce_and_write(10000, count=2, seed=-1, out_root=str(tmp_path / "a"), cfg=small_cfg)
    b = produce_and_write(10000, count=2, seed=-1, out_root=str(tmp_path / "a2"), cfg=small_cfg)
    c = produce_and_write(10000, count=2, seed=1, out_root=str(tmp_path / "c"), cfg=small_cfg)
    assert [(r["activity_name"], r["elapsed_time_sec"], r["seconds_above_threshold"]) for r in a] == \
        [(r["activity_name"], r["elapsed_time_sec"], r["seconds_above_threshold"]) for r in b]
    assert _read_json(tmp_path / "a" / "10000" / "streams_10000000001.json") == \
        _read_json(tmp_path / "a2" / "10000" / "streams_10000000001.json")
    assert _read_json(tmp_path / "a" / "10000" / "streams_10000000001.json") != \
        _read_json(tmp_path / "c" / "10000" / "streams_10000000001.json")
    for row in a:
        streams = _read_json(tmp_path / "a" / "10000" / f"streams_{row['activity_id']}.json")
        assert len(streams["timeSeconds"]) == row["elapsed_time_sec"] + 1
        assert all(v == 0 or small_cfg.resting_bpm <= v <= small_cfg.max_bpm for v in streams["heartRate"])


def test_reference_time_accepts_utc_suffix(tmp_path, small_cfg):
    small_cfg.reference_time = "2024-05-01T12:00:00Z"
    generate_dataset(small_cfg, out_dir=str(tmp_path), run_checks=False)
    meta = _read_json(tmp_path / "metadata.json")
    assert meta["reference_time"] == "2024-05-01T12:00:00+00:00"


def test_generate_dataset_outputs(tmp_path, small_cfg):
    res = generate_dataset(small_cfg, out_dir=str(tmp_path))

    meta = json.loads((tmp_path / "metadata.json").read_text(encoding="utf-8"))
    assert res["metadata_path"] == str(tmp_path / "metadata.json")
    assert meta["counts"]["n_activities"] == 6
    assert meta["counts"]["n_athletes"] == 2
    assert len(meta["files"]["activities_csv"]["sha256"]) == 64
    assert meta["reference_time"] == "2024-05-01T12:00:00"

    index = pd.read_csv(res["outputs"]["activities_csv"])
    assert len(index) == 6
    assert set(index["athlete_id"]) == {10000, 10001}

    report = json.loads((tmp_path / "sanity_report.json").read_text(encoding="utf-8"))
    assert report["summary"]["activities"] == 6
    assert all(c["passed"] for c in report["checks"])


def test_generate_dataset_is_reproducible(tmp_path, small_cfg):
    generate_dataset(small_cfg, out_dir=str(tmp_path / "a"))
    generate_dataset(small_cfg, out_dir=str(tmp_path / "b"))
    for path in sorted((tmp_path / "a" / "10000").iterdir()):
        other = tmp_path / "b" / "10000" / path.name
        assert path.read_bytes() == other.read_bytes()


def test_no_index_and_no_checks(tmp_path, small_cfg):
    small_cfg.out_format = "none"
    res = generate_dataset(small_cfg, out_dir=str(tmp_path), run_checks=False)
    assert res["outputs"] == {}
    assert not (tmp_path / "sanity_report.json").exists()
    assert (tmp_path / "10001").is_dir()


def test_invalid_config_raises(tmp_path, small_cfg):
    small_cfg.resting_bpm = 200
    with pytest.raises(ValueError):
        generate_dataset(small_cfg, out_dir=str(tmp_path))


def test_sanity_flags_out_of_bounds(small_cfg):
    index = pd.DataFrame([{
        "athlete_id": 1, "activity_id": 1, "elapsed_time_sec": 10, "sampling_seconds": 1,
        "n_samples": 11, "n_dropout": 0, "hr_min": 20.0, "hr_max": 120.0,
        "seconds_above_threshold": 3,
    }])
    report = run_sanity_checks(index, small_cfg)
    failed = {c["name"] for c in report["checks"] if not c["passed"]}
    assert failed == {"hr_within_bounds"}


def test_sanity_on_empty_index(small_cfg):
    report = run_sanity_checks(pd.DataFrame(), small_cfg)
    assert report["checks"] == [{"name": "non_empty", "passed": False, "detail": "0 activities"}]
