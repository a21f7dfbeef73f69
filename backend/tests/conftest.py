import pathlib
import sys
from datetime import datetime, timezone

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from roi_dashboard.config import get_settings  # noqa: E402


@pytest.fixture(autouse=True)
def _reset_settings_cache(monkeypatch: pytest.MonkeyPatch):
    """Keep environment overrides from leaking between tests."""

    for name in (
        "ROI_DASHBOARD_STALE_DAYS_WARNING",
        "ROI_DASHBOARD_WEIGHT_TOLERANCE",
        "ROI_DASHBOARD_TRAILING_WINDOW_DAYS",
        "ROI_DASHBOARD_CHANGE_LOG_LIMIT",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
def fixed_now() -> datetime:
    return datetime(2024, 3, 5, 12, 0, tzinfo=timezone.utc)

