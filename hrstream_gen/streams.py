from __future__ import annotations
import numpy as np
from typing import List, Optional, Sequence, Tuple

from .utils import clip01, make_rng

# fraction of the activity spent ramping up / down
RAMP_FRAC = 0.10

def _base_factor(progress: np.ndarray) -> np.ndarray:
    warmup = clip01(progress / RAMP_FRAC)          # 0..1 in first 10%
    cooldown = clip01((1.0 - progress) / RAMP_FRAC)  # 0..1 in last 10%
    # Equals cooldown; kept in this form so the ramp shape can be changed in one place.
    return np.maximum(np.minimum(warmup, cooldown), cooldown)

def generate_streams(
    duration_seconds: int,
    sampling_seconds: int = 1,
    resting_bpm: int = 55,
    max_bpm: int = 180,
    seed: int = 0,
    interval_intensity: float = 0.15,
    dropout_probability: float = 0.0,
    rng: Optional[np.random.Generator] = None,
) -> Tuple[List[int], List[int]]:
    """Synthesize a (time, heart rate) stream for one activity.

    Model: warmup/cooldown ramp around a steady state at 50-65% of heart-rate
    reserve, random high-intensity bursts, +/-3 bpm noise and optional dropout.
    Dropped samples are recorded as 0; every other sample is clamped to
    [resting_bpm, max_bpm].

    Each sample consumes exactly four uniform draws from ``rng`` in the order
    interval selector, burst magnitude, noise, dropout. When ``rng`` is None a
    fresh generator is seeded from ``seed``, so identical arguments always give
    identical streams.
    """
    if rng is None:
        rng = make_rng(seed)

    times = np.arange(0, int(duration_seconds) + 1, int(sampling_seconds), dtype=np.int64)
    n = len(times)

    p = times / max(1, duration_seconds)
    base = _base_factor(p)
    steady = resting_bpm + (max_bpm - resting_bpm) * (0.5 * base + 0.35 * (1.0 - base))

    # row-major: sample i draws u[i, 0..3] in sequence
    u = rng.random((n, 4))
    is_interval = u[:, 0] < interval_intensity
    burst = np.where(is_interval, 0.15 + u[:, 1] * 0.25, u[:, 1] * 0.05)
    noise = (u[:, 2] - 0.5) * 6.0

    # np.rint rounds half to even
    bpm = np.rint(np.clip(steady * (1.0 + burst) + noise, resting_bpm, max_bpm)).astype(np.int64)
    hr = np.where(u[:, 3] < dropout_probability, 0, bpm)

    return times.tolist(), hr.tolist()

def count_above_threshold(
    times: Optional[Sequence[int]],
    heart_rates: Optional[Sequence[int]],
    threshold: int,
) -> int:
    """Number of samples with heart rate strictly above ``threshold``.

    Missing axes count as empty; axes of different length are compared over
    their common prefix.
    """
    if times is None or heart_rates is None:
        return 0
    n = min(len(times), len(heart_rates))
    if n == 0:
        return 0
    hr = np.asarray(heart_rates[:n])
    return int(np.count_nonzero(hr > threshold))
