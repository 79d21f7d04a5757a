import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from hrstream_gen.config import GeneratorConfig  # noqa: E402


@pytest.fixture
def small_cfg():
    """Two short-activity athletes with a fixed reference time."""
    return GeneratorConfig(
        athletes=[(10000, 40), (10001, 41)],
        activities_per_athlete=3,
        max_elapsed_sec=1800,
        reference_time="2024-05-01T12:00:00",
    )
