from __future__ import annotations
import datetime
import numpy as np
from typing import Optional

def clip01(x):
    return np.clip(x, 0.0, 1.0)

def make_rng(seed: int) -> np.random.Generator:
    # Any integer seed; negatives wrap to 64 bits. Non-negative seeds match default_rng(seed).
    return np.random.default_rng(np.random.SeedSequence(int(seed) & 0xFFFF_FFFF_FFFF_FFFF))

def derive_seed(*keys: int) -> int:
    # Stable across processes and platforms (unlike hash()).
    ss = np.random.SeedSequence([int(k) & 0xFFFFFFFF for k in keys])
    return int(ss.generate_state(1, dtype=np.uint32)[0])

def reference_now(reference_time: Optional[str]) -> datetime.datetime:
    if reference_time:
        # fromisoformat only accepts a trailing "Z" from Python 3.11
        if reference_time.endswith(("Z", "z")):
            reference_time = reference_time[:-1] + "+00:00"
        return datetime.datetime.fromisoformat(reference_time)
    return datetime.datetime.now().replace(microsecond=0)
