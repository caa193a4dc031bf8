"""Homepage image slider page object.

The slider is a slick carousel: every slide carries ``data-slick-index`` and
the current one has ``.slick-active.slick-current``. Navigation wraps around
in both directions.
"""
from __future__ import annotations

import logging

from playwright.async_api import Locator, expect

from walkin_ui.browser import Browser, ToolError
from walkin_ui.config import UiTestConfig, settings

logger = logging.getLogger(__name__)

TRANSITION_TIMEOUT_MS = 10000


def next_index(current: int, count: int) -> int:
    if count <= 0:
        raise ValueError("No slides available")
    return (current + 1) % count


def previous_index(current: int, count: int) -> int:
    if count <= 0:
        raise ValueError("No slides available")
    return (current - 1 + count) % count


def steps_between(current: int, target: int, count: int) -> int:
    """Signed number of clicks from ``current`` to ``target``.

    Positive means Next, negative means Previous; the slider is walked
    directly rather than around the wrap point.
    """
    if target < 0 or target >= count:
        raise ValueError(f"Target slide index {target} is out of range (0-{count - 1})")
    return target - current


class SliderPage:
    def __init__(self, browser: Browser, config: UiTestConfig = settings) -> None:
        self.browser = browser
        self.config = config
        page = browser.page
        self.slider: Locator = page.locator("[data-main-slider]")
        self.prev_button: Locator = page.get_by_role("button", name="Previous")
        self.next_button: Locator = page.get_by_role("button", name="Next", exact=True)
        self.slides: Locator = self.slider.locator("[data-slick-index]")
        self.active_slide: Locator = self.slider.locator("[data-slick-index].slick-active.slick-current")

    async def goto(self) -> None:
        await self.browser.goto(self.config.url("/"))

    # ---- reads ---------------------------------------------------------------

    async def get_slide_count(self) -> int:
        return await self.browser.count(self.slides, "slides")

    async def get_active_slide_index(self) -> int:
        index = await self.browser.get_attribute(self.active_slide, "data-slick-index", "active_slide")
        return int(index) if index else -1

    # ---- actions -------------------------------------------------------------

    async def click_next(self) -> None:
        """Click Next and wait for the following slide to settle."""
        count = await self.get_slide_count()
        expected = next_index(await self.get_active_slide_index(), count)
        await self.browser.require_enabled(self.next_button, "next_button")
        await self.browser.click(self.next_button, "next_button")
        await self.wait_for_active_index(expected)

    async def click_previous(self) -> None:
        """Click Previous and wait for the preceding slide to settle."""
        count = await self.get_slide_count()
        expected = previous_index(await self.get_active_slide_index(), count)
        await self.browser.require_enabled(self.prev_button, "prev_button")
        await self.browser.click(self.prev_button, "prev_button")
        await self.wait_for_active_index(expected)

    async def navigate_to_slide(self, target: int) -> None:
        steps = steps_between(await self.get_active_slide_index(), target, await self.get_slide_count())
        logger.debug("Navigating slider %+d steps to index %d", steps, target)
        for _ in range(abs(steps)):
            if steps > 0:
                await self.click_next()
            else:
                await self.click_previous()

    async def wait_for_active_index(self, index: int) -> None:
        """Wait until slide ``index`` has finished animating in.

        A slide is settled once it is fully opaque and exposed to assistive
        technology.
        """
        slide = self.slider.locator(f'[data-slick-index="{index}"]')
        try:
            await expect(slide).to_have_css("opacity", "1", timeout=TRANSITION_TIMEOUT_MS)
            await expect(slide).to_have_attribute("aria-hidden", "false", timeout=TRANSITION_TIMEOUT_MS)
        except AssertionError as exc:
            raise ToolError(
                name="wait_for_active_index",
                payload={"index": index, "timeout_ms": TRANSITION_TIMEOUT_MS},
                message=f"slide {index} never became active: {exc}",
            ) from exc

    # ---- assertions ----------------------------------------------------------

    async def expect_slider_visible(self) -> None:
        await expect(self.slider).to_be_visible()

    async def expect_navigation_buttons_visible(self) -> None:
        await expect(self.prev_button).to_be_visible()
        await expect(self.next_button).to_be_visible()

    async def expect_slide_count(self, expected: int) -> None:
        count = await self.get_slide_count()
        assert count == expected, f"Expected {expected} slides, found {count}"

    async def expect_active_slide_index(self, expected: int) -> None:
        index = await self.get_active_slide_index()
        assert index == expected, f"Expected active slide {expected}, found {index}"

    async def expect_all_images_loaded(self) -> None:
        for i in range(await self.get_slide_count()):
            await expect(self.slides.nth(i).locator("img")).to_be_visible()

    async def expect_can_navigate_through_all_slides(self) -> None:
        for i in range(await self.get_slide_count()):
            await self.navigate_to_slide(i)
            await self.expect_active_slide_index(i)

    async def expect_circular_navigation(self) -> None:
        """Clicking Next ``count`` times from the first slide returns to it."""
        count = await self.get_slide_count()
        if count < 2:
            return
        await self.navigate_to_slide(0)
        for i in range(count):
            await self.click_next()
            await self.expect_active_slide_index(next_index(i, count))
