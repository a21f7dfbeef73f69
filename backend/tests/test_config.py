from roi_dashboard.config import DEFAULT_DISCLAIMER_TEXT, EngineSettings, get_settings


def test_defaults():
    settings = get_settings()
    assert settings.stale_days_warning == 7
    assert settings.weight_tolerance == 0.005
    assert settings.trailing_window_days == 30
    assert settings.change_log_limit == 5
    assert settings.default_disclaimer_text == DEFAULT_DISCLAIMER_TEXT


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("ROI_DASHBOARD_TRAILING_WINDOW_DAYS", "90")
    assert EngineSettings().trailing_window_days == 90


def test_explicit_overrides_bypass_environment():
    settings = get_settings(weight_tolerance=0.01)
    assert settings.weight_tolerance == 0.01
    assert get_settings() is get_settings()
