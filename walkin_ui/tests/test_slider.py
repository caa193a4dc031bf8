import pytest

from walkin_ui.config import settings

pytestmark = [pytest.mark.asyncio, pytest.mark.e2e]


async def test_slider_shows_navigation_buttons(slider_page):
    await slider_page.expect_slider_visible()
    await slider_page.expect_navigation_buttons_visible()


async def test_slide_count(slider_page):
    await slider_page.expect_slide_count(settings.expected_slide_count)


async def test_all_slide_images_load(slider_page):
    await slider_page.expect_all_images_loaded()


async def test_next_moves_to_following_slide(slider_page):
    await slider_page.expect_active_slide_index(0)
    await slider_page.click_next()
    await slider_page.expect_active_slide_index(1)


async def test_previous_moves_to_preceding_slide(slider_page):
    await slider_page.navigate_to_slide(1)
    await slider_page.click_previous()
    await slider_page.expect_active_slide_index(0)


async def test_navigate_through_all_slides(slider_page):
    await slider_page.expect_can_navigate_through_all_slides()


async def test_navigation_wraps_around(slider_page):
    await slider_page.expect_circular_navigation()


async def test_navigate_to_slide_by_index(slider_page):
    await slider_page.navigate_to_slide(3)
    assert await slider_page.get_active_slide_index() == 3

    await slider_page.navigate_to_slide(0)
    assert await slider_page.get_active_slide_index() == 0
