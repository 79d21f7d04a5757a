"""HRStream synthetic Strava-like heart-rate dataset generator.

Produces, per athlete:
- activity_{id}.json: activity summary (name, start time, elapsed/moving time)
- streams_{id}.json: per-second time + heart-rate streams and seconds above a threshold

plus an activity index table, metadata.json and a sanity report for the whole run.
Output is deterministic for a given (athlete id, seed) pair.
"""

__all__ = ["generate_dataset", "generate_streams", "count_above_threshold"]
from .pipeline import generate_dataset
from .streams import generate_streams, count_above_threshold
