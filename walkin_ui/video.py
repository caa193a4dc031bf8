"""Embedded video page object."""
from __future__ import annotations

from playwright.async_api import Locator, expect

from walkin_ui.browser import Browser
from walkin_ui.config import UiTestConfig, settings


class VideoPage:
    def __init__(self, browser: Browser, config: UiTestConfig = settings) -> None:
        self.browser = browser
        self.config = config
        self.video_elements: Locator = browser.page.locator("video")

    async def goto(self) -> None:
        await self.browser.goto(self.config.url("/"))

    async def get_video_count(self) -> int:
        return await self.browser.count(self.video_elements, "video")

    def get_video_by_index(self, index: int) -> Locator:
        return self.video_elements.nth(index)

    async def expect_video_count_greater_than(self, minimum: int) -> None:
        count = await self.get_video_count()
        assert count > minimum, f"Expected more than {minimum} video(s), found {count}"

    async def expect_all_videos_visible(self) -> None:
        for i in range(await self.get_video_count()):
            await expect(self.get_video_by_index(i)).to_be_visible()
