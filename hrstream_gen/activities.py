from __future__ import annotations
import datetime
from dataclasses import dataclass
from typing import Any, Dict, Tuple
import numpy as np
from .config import GeneratorConfig
from .streams import generate_streams, count_above_threshold
from .utils import derive_seed

ACTIVITY_VERBS = [
    "back up", "bypass", "hack", "override", "compress", "copy", "navigate",
    "index", "connect", "generate", "quantify", "calculate", "synthesize",
    "input", "transmit", "program", "reboot", "parse",
]
ACTIVITY_NOUNS = [
    "driver", "protocol", "bandwidth", "panel", "microchip", "program",
    "port", "card", "array", "interface", "system", "sensor", "firewall",
    "hard drive", "pixel", "alarm", "feed", "monitor", "application",
    "transmitter", "bus", "circuit", "capacitor", "matrix",
]

@dataclass(frozen=True)
class ActivitySummary:
    activity_id: int
    activity_name: str
    start_local: datetime.datetime
    elapsed_time_sec: int
    moving_time_sec: int
    has_heart_rate: bool = True

    def to_record(self) -> Dict[str, Any]:
        return {
            "activityId": self.activity_id,
            "activityName": self.activity_name,
            "startLocal": self.start_local.isoformat(),
            "elapsedTimeSec": self.elapsed_time_sec,
            "movingTimeSec": self.moving_time_sec,
            "hasHeartRate": self.has_heart_rate,
        }

@dataclass(frozen=True)
class ActivityStreams:
    activity_id: int
    time_seconds: Tuple[int, ...] = ()
    heart_rate: Tuple[int, ...] = ()
    threshold_bpm: int = 100
    seconds_above_threshold: int = 0

    def to_record(self) -> Dict[str, Any]:
        return {
            "activityId": self.activity_id,
            "timeSeconds": list(self.time_seconds),
            "heartRate": list(self.heart_rate),
            "thresholdBpm": self.threshold_bpm,
            "secondsAboveThreshold": self.seconds_above_threshold,
        }

def make_activity_id(athlete_id: int, index: int, stride: int = 1_000_000) -> int:
    # always positive and predictable: athlete 10000 -> 10000000001, 10000000002, ...
    return int(athlete_id) * int(stride) + (int(index) + 1)

def activity_seed(seed: int, activity_id: int) -> int:
    return derive_seed(seed, activity_id & 0x7FFFFFFF)

def sampling_for(elapsed_sec: int, cfg: GeneratorConfig) -> int:
    # 1s, or 5s for very long activities
    if elapsed_sec > cfg.long_activity_sec:
        return cfg.long_sampling_seconds
    return cfg.sampling_seconds

def generate_summary(cfg: GeneratorConfig, rng: np.random.Generator, activity_id: int,
                     now: datetime.datetime) -> ActivitySummary:
    """Draw one activity summary (no streams)."""
    verb = ACTIVITY_VERBS[int(rng.integers(len(ACTIVITY_VERBS)))]
    noun = ACTIVITY_NOUNS[int(rng.integers(len(ACTIVITY_NOUNS)))]

    offset_sec = int(rng.integers(0, cfg.recent_days * 24 * 3600 + 1))
    start_local = now - datetime.timedelta(seconds=offset_sec)

    elapsed = int(rng.integers(cfg.min_elapsed_sec, cfg.max_elapsed_sec + 1))
    stopped = int(rng.integers(0, int(elapsed * cfg.moving_trim_frac) + 1))
    moving = max(0, elapsed - stopped)

    return ActivitySummary(
        activity_id=activity_id,
        activity_name=f"Synthetic {verb} {noun}",
        start_local=start_local,
        elapsed_time_sec=elapsed,
        moving_time_sec=moving,
        has_heart_rate=True,
    )

def build_streams(summary: ActivitySummary, cfg: GeneratorConfig, seed: int) -> ActivityStreams:
    """Build the HR stream for ``summary`` deterministically from seed + activity id."""
    times, hr = generate_streams(
        duration_seconds=summary.elapsed_time_sec,
        sampling_seconds=sampling_for(summary.elapsed_time_sec, cfg),
        resting_bpm=cfg.resting_bpm,
        max_bpm=cfg.max_bpm,
        seed=activity_seed(seed, summary.activity_id),
        interval_intensity=cfg.interval_intensity,
        dropout_probability=cfg.dropout_probability,
    )
    return ActivityStreams(
        activity_id=summary.activity_id,
        time_seconds=tuple(times),
        heart_rate=tuple(hr),
        threshold_bpm=cfg.threshold_bpm,
        seconds_above_threshold=count_above_threshold(times, hr, cfg.threshold_bpm),
    )
