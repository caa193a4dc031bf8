"""
Direct Playwright client
========================

Launches one browser engine in-process and hands out an isolated
``BrowserContext`` + ``Page`` per client, so every scenario owns its own
cookies, storage and form state.

Usage:
    async with PlaywrightClient(browser_type="firefox") as client:
        await client.page.goto("https://test-qa.capslock.global")
"""

import logging
from typing import Optional

from playwright.async_api import async_playwright, Browser, BrowserContext, Page, Playwright

from walkin_ui.config import SUPPORTED_BROWSERS, settings

logger = logging.getLogger(__name__)


class PlaywrightClient:
    """
    Direct Playwright client with full API access.

    Example:
        async with PlaywrightClient() as client:
            page = client.page
            await page.goto("https://example.com")
    """

    def __init__(
        self,
        browser_type: str = "chromium",
        headless: Optional[bool] = None,
        timeout: Optional[int] = None,
        viewport: Optional[dict] = None,
        base_url: Optional[str] = None,
    ):
        """
        Initialize Playwright client.

        Args:
            browser_type: Browser to use (chromium, firefox, webkit)
            headless: Run in headless mode (None = from settings)
            timeout: Default action timeout in milliseconds (None = from settings)
            viewport: Viewport size dict (None = from settings)
            base_url: Base URL for relative navigation
        """
        if browser_type not in SUPPORTED_BROWSERS:
            raise ValueError(f"Unsupported browser_type: {browser_type}")
        self.browser_type = browser_type
        self.headless = settings.playwright_headless if headless is None else headless
        self.timeout = settings.default_timeout_ms if timeout is None else timeout
        self.viewport = viewport or {
            "width": settings.viewport_width,
            "height": settings.viewport_height,
        }
        self.base_url = base_url

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None
        self._page: Optional[Page] = None

    async def __aenter__(self):
        """Async context manager entry."""
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    async def connect(self):
        """Launch the browser and open the default context and page."""
        self._playwright = await async_playwright().start()
        try:
            launcher = getattr(self._playwright, self.browser_type)
            self._browser = await launcher.launch(headless=self.headless)
            self._context = await self.new_context()
            self._page = await self._context.new_page()
        except Exception:
            await self.close()
            raise
        logger.debug("Launched %s (headless=%s)", self.browser_type, self.headless)

    async def new_context(self, **kwargs) -> BrowserContext:
        """
        Create a new browser context with the client defaults.

        Args:
            **kwargs: Context options overriding viewport/base_url

        Returns:
            BrowserContext object
        """
        if not self._browser:
            raise RuntimeError("Client not connected. Use 'async with' or call connect()")

        options = {"viewport": self.viewport}
        if self.base_url:
            options["base_url"] = self.base_url
        options.update(kwargs)
        context = await self._browser.new_context(**options)
        context.set_default_timeout(self.timeout)
        return context

    async def close(self):
        """Close all connections and cleanup resources."""
        if self._page:
            await self._page.close()
            self._page = None

        if self._context:
            await self._context.close()
            self._context = None

        if self._browser:
            await self._browser.close()
            self._browser = None

        if self._playwright:
            await self._playwright.stop()
            self._playwright = None

    @property
    def page(self) -> Page:
        """Get the default page."""
        if not self._page:
            raise RuntimeError("Client not connected or page not created")
        return self._page
