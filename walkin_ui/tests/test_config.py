import pytest

from walkin_ui import env_defaults
from walkin_ui.config import DEFAULT_BASE_URL, BrowserProfile, UiTestConfig, _parse_browsers

_KEYS = (
    "UI_BASE_URL",
    "PLAYWRIGHT_BROWSERS",
    "PLAYWRIGHT_HEADLESS",
    "UI_STAY_ON_STEP_DURATION_MS",
    "UI_STAY_ON_STEP_INTERVAL_MS",
    "UI_EXPECT_TIMEOUT_MS",
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """No exported settings and an empty ``.env`` unless a test writes one."""
    for key in _KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr(env_defaults, "ENV_FILE", tmp_path / ".env")
    env_defaults._load_env_defaults.cache_clear()
    yield tmp_path / ".env"
    env_defaults._load_env_defaults.cache_clear()


def test_defaults():
    config = UiTestConfig()
    assert config.base_url == DEFAULT_BASE_URL
    assert config.browser_type == "chromium"
    assert [profile.name for profile in config.profiles()] == ["chromium"]
    assert config.stay_on_step_duration == 1.5
    assert config.stay_on_step_interval == 0.2
    assert config.playwright_headless is True


def test_browsers_are_deduplicated_in_order(monkeypatch):
    monkeypatch.setenv("PLAYWRIGHT_BROWSERS", "Firefox, webkit,firefox")
    config = UiTestConfig()
    assert [profile.browser_type for profile in config.profiles()] == ["firefox", "webkit"]
    assert config.browser_type == "firefox"


@pytest.mark.parametrize("raw", ["", " , ", "chromium,netscape"])
def test_invalid_browser_lists_rejected(raw):
    with pytest.raises(ValueError, match="PLAYWRIGHT_BROWSERS"):
        _parse_browsers(raw)


def test_interval_longer_than_duration_rejected(monkeypatch):
    monkeypatch.setenv("UI_STAY_ON_STEP_DURATION_MS", "100")
    monkeypatch.setenv("UI_STAY_ON_STEP_INTERVAL_MS", "200")
    with pytest.raises(ValueError, match="must not exceed"):
        UiTestConfig()


def test_non_integer_timeout_rejected(monkeypatch):
    monkeypatch.setenv("UI_EXPECT_TIMEOUT_MS", "soon")
    with pytest.raises(ValueError, match="UI_EXPECT_TIMEOUT_MS must be an integer"):
        UiTestConfig()


def test_env_file_fills_gaps_and_environment_wins(monkeypatch, isolated_env):
    isolated_env.write_text(
        "# local overrides\n"
        "export UI_BASE_URL='https://staging.example.test'\n"
        'PLAYWRIGHT_HEADLESS="false"\n',
        encoding="utf-8",
    )
    config = UiTestConfig()
    assert config.base_url == "https://staging.example.test"
    assert config.playwright_headless is False

    monkeypatch.setenv("UI_BASE_URL", "https://prod.example.test")
    assert UiTestConfig().base_url == "https://prod.example.test"


def test_url_joins_paths(monkeypatch):
    monkeypatch.setenv("UI_BASE_URL", "https://site.example.test/")
    config = UiTestConfig()
    assert config.url() == "https://site.example.test/"
    assert config.url("/thankyou") == "https://site.example.test/thankyou"


def test_use_profile_switches_and_restores(monkeypatch):
    monkeypatch.setenv("PLAYWRIGHT_BROWSERS", "chromium,webkit")
    config = UiTestConfig()
    webkit = config.profiles()[1]

    with config.use_profile(webkit) as active:
        assert config.browser_type == "webkit"
        active.base_url = "https://changed.example.test"

    assert config.browser_type == "chromium"
    assert webkit.base_url == DEFAULT_BASE_URL
    assert isinstance(active, BrowserProfile)
