"""Thin wrapper around direct Playwright for ergonomic, diagnosable actions.

Every primitive takes a Playwright ``Locator`` plus a short ``name`` used in
error messages. Automation failures (element missing, not interactable,
navigation errors) surface as :class:`ToolError`, never as
``AssertionError``, so a broken selector is never mistaken for a validation
outcome.
"""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from typing import Any, Dict, Optional

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Locator, Page, TimeoutError as PlaywrightTimeout, expect

from walkin_ui.config import settings

logger = logging.getLogger(__name__)

# Sets the raw value and fires the events the site's phone mask listens to.
_DISPATCH_VALUE_JS = """
(el, value) => {
    el.value = value;
    el.dispatchEvent(new Event('input', { bubbles: true }));
    el.dispatchEvent(new Event('change', { bubbles: true }));
    el.dispatchEvent(new Event('blur', { bubbles: true }));
}
"""


@dataclass
class ToolError(Exception):
    """Raised when a browser operation fails for infrastructure reasons."""

    name: str
    payload: Dict[str, Any]
    message: str

    def __str__(self) -> str:  # pragma: no cover - human readable helper
        return f"{self.name} failed ({self.message}) with payload={self.payload}"


class Browser:
    """Convenience wrapper over a Playwright ``Page``."""

    def __init__(self, page: Page) -> None:
        self._page = page
        self.current_url: str | None = None

    @property
    def page(self) -> Page:
        return self._page

    async def goto(self, url: str, wait_until: str = "networkidle", timeout: int | None = None) -> Dict[str, Any]:
        """Navigate to URL and return response status.

        "networkidle" can time out on pages with analytics beacons or long
        polling, so a timeout retries once with "domcontentloaded".
        """
        timeout = settings.default_timeout_ms if timeout is None else timeout
        try:
            response = await self._page.goto(url, wait_until=wait_until, timeout=timeout)
        except PlaywrightTimeout as exc:
            if wait_until != "networkidle":
                raise ToolError(name="goto", payload={"url": url, "wait_until": wait_until}, message=str(exc))
            logger.info("networkidle timed out for %s, retrying with domcontentloaded", url)
            try:
                response = await self._page.goto(url, wait_until="domcontentloaded", timeout=timeout)
            except PlaywrightError as retry_exc:
                raise ToolError(name="goto", payload={"url": url, "wait_until": "domcontentloaded"}, message=str(retry_exc))
        except PlaywrightError as exc:
            raise ToolError(name="goto", payload={"url": url, "wait_until": wait_until}, message=str(exc))
        self.current_url = self._page.url
        return {"url": self.current_url, "status": response.status if response else None}

    async def require_enabled(self, locator: Locator, name: str, timeout: int | None = None) -> None:
        """Fail with ``ToolError`` unless the element is present and enabled."""
        timeout = settings.expect_timeout_ms if timeout is None else timeout
        try:
            await expect(locator).to_be_enabled(timeout=timeout)
        except AssertionError as exc:
            raise ToolError(
                name="require_enabled",
                payload={"element": name, "timeout_ms": timeout},
                message=f"'{name}' is missing or not interactable: {exc}",
            ) from exc

    async def require_visible(self, locator: Locator, name: str, timeout: int | None = None) -> None:
        """Fail with ``ToolError`` unless the element becomes visible."""
        timeout = settings.expect_timeout_ms if timeout is None else timeout
        try:
            await expect(locator).to_be_visible(timeout=timeout)
        except AssertionError as exc:
            raise ToolError(
                name="require_visible",
                payload={"element": name, "timeout_ms": timeout},
                message=f"'{name}' never became visible: {exc}",
            ) from exc

    async def fill(self, locator: Locator, value: str, name: str) -> Dict[str, Any]:
        """Fill input field."""
        try:
            await locator.fill(value)
            return {"element": name, "value": value}
        except PlaywrightError as exc:
            raise ToolError(name="fill", payload={"element": name, "value": value}, message=str(exc))

    async def click(self, locator: Locator, name: str) -> Dict[str, Any]:
        """Click element."""
        try:
            await locator.click()
            self.current_url = self._page.url
            return {"element": name, "url": self.current_url}
        except PlaywrightError as exc:
            raise ToolError(name="click", payload={"element": name}, message=str(exc))

    async def check(self, locator: Locator, name: str) -> Dict[str, Any]:
        """Check a checkbox or radio (or the label bound to one)."""
        try:
            await locator.check()
            return {"element": name}
        except PlaywrightError as exc:
            raise ToolError(name="check", payload={"element": name}, message=str(exc))

    async def dispatch_value(self, locator: Locator, value: str, name: str) -> Dict[str, Any]:
        """Set a value directly and fire input/change/blur.

        Masked inputs reformat on these events; typing through ``fill`` is
        swallowed by the mask in some engines.
        """
        try:
            await locator.evaluate(_DISPATCH_VALUE_JS, value)
            return {"element": name, "value": value}
        except PlaywrightError as exc:
            raise ToolError(name="dispatch_value", payload={"element": name, "value": value}, message=str(exc))

    async def input_value(self, locator: Locator, name: str) -> str:
        """Get the current value of an input."""
        try:
            return await locator.input_value(timeout=settings.expect_timeout_ms)
        except PlaywrightError as exc:
            raise ToolError(name="input_value", payload={"element": name}, message=str(exc))

    async def is_checked(self, locator: Locator, name: str) -> bool:
        try:
            return await locator.is_checked(timeout=settings.expect_timeout_ms)
        except PlaywrightError as exc:
            raise ToolError(name="is_checked", payload={"element": name}, message=str(exc))

    async def get_attribute(self, locator: Locator, attribute: str, name: str) -> Optional[str]:
        """Get attribute value of element."""
        try:
            return await locator.get_attribute(attribute, timeout=settings.expect_timeout_ms)
        except PlaywrightError as exc:
            raise ToolError(name="get_attribute", payload={"element": name, "attribute": attribute}, message=str(exc))

    async def count(self, locator: Locator, name: str) -> int:
        try:
            return await locator.count()
        except PlaywrightError as exc:
            raise ToolError(name="count", payload={"element": name}, message=str(exc))

    async def screenshot(self, name: str) -> str:
        """Save a full-page PNG into ``settings.screenshot_dir``."""
        safe_name = re.sub(r"[^A-Za-z0-9_.-]+", "_", name)
        os.makedirs(settings.screenshot_dir, exist_ok=True)
        path = os.path.join(settings.screenshot_dir, f"{safe_name}.png")
        try:
            await self._page.screenshot(path=path, type="png", full_page=True)
        except PlaywrightError as exc:
            raise ToolError(name="screenshot", payload={"name": name}, message=str(exc))
        logger.info("Saved screenshot %s", path)
        return path

