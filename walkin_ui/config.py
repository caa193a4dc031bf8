"""Shared configuration for the walk-in bath UI suite.

Values come from environment variables, falling back to the workspace
``.env`` file and then to built-in defaults:

- UI_BASE_URL: site under test (default https://test-qa.capslock.global)
- PLAYWRIGHT_BROWSERS: comma separated list of chromium/firefox/webkit
- PLAYWRIGHT_HEADLESS: "true"/"1" to run without a visible window

Every browser listed becomes one profile; e2e scenarios run once per profile.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from copy import deepcopy
from dataclasses import dataclass
from typing import Dict, Iterator, List
from urllib.parse import urljoin

from walkin_ui.env_defaults import get_setting

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://test-qa.capslock.global"
SUPPORTED_BROWSERS = ("chromium", "firefox", "webkit")


@dataclass
class BrowserProfile:
    """One browser engine pointed at one deployment of the site."""

    name: str
    browser_type: str
    base_url: str


def _int_setting(key: str, default: int) -> int:
    raw = get_setting(key, str(default))
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from exc


def _parse_browsers(raw: str) -> List[str]:
    names = [name.strip().lower() for name in raw.split(",") if name.strip()]
    if not names:
        raise ValueError("PLAYWRIGHT_BROWSERS must name at least one browser")
    unknown = [name for name in names if name not in SUPPORTED_BROWSERS]
    if unknown:
        raise ValueError(
            f"Unsupported browser(s) in PLAYWRIGHT_BROWSERS: {', '.join(unknown)}. "
            f"Choose from: {', '.join(SUPPORTED_BROWSERS)}"
        )
    # keep first occurrence order
    return list(dict.fromkeys(names))


class UiTestConfig:
    """Configuration for one test run.

    Timing values are stored in milliseconds, mirroring Playwright's own
    units; the ``*_seconds`` properties exist for the anyio based polling
    helpers.
    """

    def __init__(self) -> None:
        headless_str = get_setting("PLAYWRIGHT_HEADLESS", "true")
        self.playwright_headless: bool = headless_str.lower() in {"true", "1"}

        self.default_timeout_ms: int = _int_setting("UI_DEFAULT_TIMEOUT_MS", 30000)
        self.expect_timeout_ms: int = _int_setting("UI_EXPECT_TIMEOUT_MS", 5000)
        self.stay_on_step_duration_ms: int = _int_setting("UI_STAY_ON_STEP_DURATION_MS", 1500)
        self.stay_on_step_interval_ms: int = _int_setting("UI_STAY_ON_STEP_INTERVAL_MS", 200)
        if self.stay_on_step_interval_ms <= 0:
            raise ValueError("UI_STAY_ON_STEP_INTERVAL_MS must be positive")
        if self.stay_on_step_interval_ms > self.stay_on_step_duration_ms:
            raise ValueError(
                "UI_STAY_ON_STEP_INTERVAL_MS must not exceed UI_STAY_ON_STEP_DURATION_MS "
                f"({self.stay_on_step_interval_ms} > {self.stay_on_step_duration_ms})"
            )

        self.viewport_width: int = _int_setting("UI_VIEWPORT_WIDTH", 1280)
        self.viewport_height: int = _int_setting("UI_VIEWPORT_HEIGHT", 720)
        self.screenshot_dir: str = get_setting("SCREENSHOT_DIR", "test-results/screenshots")
        self.expected_slide_count: int = _int_setting("UI_EXPECTED_SLIDE_COUNT", 8)

        base_url = get_setting("UI_BASE_URL", DEFAULT_BASE_URL)
        browsers = _parse_browsers(get_setting("PLAYWRIGHT_BROWSERS", "chromium"))

        self._profiles: Dict[str, BrowserProfile] = {
            name: BrowserProfile(name=name, browser_type=name, base_url=base_url)
            for name in browsers
        }
        self._active: BrowserProfile = self._profiles[browsers[0]]

        logger.info(
            "[CONFIG] base_url=%s browsers=%s headless=%s",
            base_url,
            ",".join(browsers),
            self.playwright_headless,
        )

    # ---- active profile helpers -------------------------------------------------
    @property
    def base_url(self) -> str:
        return self._active.base_url

    @property
    def browser_type(self) -> str:
        return self._active.browser_type

    # ---- timing helpers ---------------------------------------------------------
    @property
    def stay_on_step_duration(self) -> float:
        return self.stay_on_step_duration_ms / 1000

    @property
    def stay_on_step_interval(self) -> float:
        return self.stay_on_step_interval_ms / 1000

    # ---- profile orchestration --------------------------------------------------
    def profiles(self) -> List[BrowserProfile]:
        return list(self._profiles.values())

    @contextmanager
    def use_profile(self, profile: BrowserProfile) -> Iterator[BrowserProfile]:
        """Temporarily switch the active profile.

        The active profile is a copy, so nothing a scenario changes on it
        leaks into the next parametrized run.
        """
        previous = self._active
        self._active = deepcopy(profile)
        try:
            yield self._active
        finally:
            self._active = previous

    # ---- utility helpers --------------------------------------------------------
    def url(self, path: str = "/") -> str:
        """Return an absolute URL for the provided path."""
        return urljoin(self.base_url.rstrip("/") + "/", path.lstrip("/"))


settings = UiTestConfig()
