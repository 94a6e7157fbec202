import sys
from pathlib import Path

import pytest

# Ensure `import roku` works when running `pytest` without needing PYTHONPATH hacks.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture(autouse=True)
def _reset_rate_limits() -> None:
    from guards import limiter

    limiter.reset()
