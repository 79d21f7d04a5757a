from __future__ import annotations

"""Generator configuration for HRStream synthetic activities.

Defaults reproduce the stock dataset: three athletes, five activities each,
1 s sampling (5 s for activities longer than two hours), 50..185 bpm bounds.
"""

from dataclasses import dataclass, asdict, field
from typing import Literal, Dict, Any, List, Optional, Tuple
import json


OutputFormat = Literal["csv", "parquet", "both", "none"]


def _default_athletes() -> List[Tuple[int, int]]:
    return [(10000, 40), (10001, 41), (10002, 42)]


@dataclass
class GeneratorConfig:
    # ---- dataset shape ----
    # (athlete_id, seed) pairs; each athlete gets its own summary generator
    athletes: List[Tuple[int, int]] = field(default_factory=_default_athletes)
    activities_per_athlete: int = 5
    activity_id_stride: int = 1_000_000

    # ---- activity summary ----
    min_elapsed_sec: int = 600
    max_elapsed_sec: int = 3 * 60 * 60
    moving_trim_frac: float = 0.10   # up to 10% of elapsed time spent stopped
    recent_days: int = 30            # start times fall within the last N days
    # ISO timestamp anchoring start times; None means "now"
    reference_time: Optional[str] = None

    # ---- stream sampling ----
    sampling_seconds: int = 1
    long_sampling_seconds: int = 5
    long_activity_sec: int = 2 * 60 * 60

    # ---- HR model ----
    resting_bpm: int = 50
    max_bpm: int = 185
    interval_intensity: float = 0.12    # fraction of samples in high-intensity bursts
    dropout_probability: float = 0.01   # fraction of samples recorded as missing (0)
    threshold_bpm: int = 100

    # ---- output ----
    out_format: OutputFormat = "csv"

    def validate(self) -> "GeneratorConfig":
        if self.sampling_seconds < 1 or self.long_sampling_seconds < 1:
            raise ValueError("sampling intervals must be >= 1 second")
        if self.resting_bpm <= 0 or self.resting_bpm >= self.max_bpm:
            raise ValueError(
                f"expected 0 < resting_bpm < max_bpm, got {self.resting_bpm} / {self.max_bpm}"
            )
        if self.min_elapsed_sec < 0 or self.min_elapsed_sec > self.max_elapsed_sec:
            raise ValueError(
                f"invalid elapsed range [{self.min_elapsed_sec}, {self.max_elapsed_sec}]"
            )
        if self.activities_per_athlete < 0:
            raise ValueError("activities_per_athlete must be >= 0")
        if not self.athletes:
            raise ValueError("at least one (athlete_id, seed) pair is required")
        if self.out_format not in ("csv", "parquet", "both", "none"):
            raise ValueError(f"unknown out_format: {self.out_format!r}")
        return self

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["athletes"] = [list(a) for a in self.athletes]
        return d

    def to_json(self, path: str) -> None:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)

    @staticmethod
    def from_json(path: str) -> "GeneratorConfig":
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if "athletes" in data:
            data["athletes"] = [(int(a), int(s)) for a, s in data["athletes"]]
        return GeneratorConfig(**data)
