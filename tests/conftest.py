import sys
from pathlib import Path

import pytest

# Add repo root to Python path so `import city_core...` works in tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from city_core.config import DashboardProfile, MetricDef  # noqa: E402


@pytest.fixture
def cost_profile() -> DashboardProfile:
    """Single-metric profile over a `Cost` column."""
    return DashboardProfile(
        name="test",
        title="Test chart",
        metrics=(MetricDef(key="cost", column="Cost", label="Cost", axis_label="Cost", color="#4e79a7"),),
        palette=("#1f77b4", "#ff7f0e"),
        default_cities=("A",),
        default_metrics=("cost",),
    )
