import anyio
import pytest
from playwright.async_api import Error as PlaywrightError

from walkin_ui.waits import (
    ElementHiddenError,
    ElementShownError,
    verify_element_remains_visible,
    verify_visibility_holds,
    wait_for_value,
)

pytestmark = pytest.mark.asyncio


class ScriptedLocator:
    """Answers visibility probes from a script; the last entry repeats."""

    def __init__(self, visible=(True,), values=("",)):
        self._visible = list(visible)
        self._values = list(values)
        self.probes = 0
        self.reads = 0

    async def is_visible(self):
        answer = self._visible[min(self.probes, len(self._visible) - 1)]
        self.probes += 1
        if isinstance(answer, Exception):
            raise answer
        return answer

    async def input_value(self, timeout=None):
        value = self._values[min(self.reads, len(self._values) - 1)]
        self.reads += 1
        return value


async def test_visible_element_holds_for_whole_window():
    locator = ScriptedLocator(visible=[True])
    start = anyio.current_time()

    polls = await verify_element_remains_visible(locator, duration=0.1, interval=0.02, description="zip input")

    elapsed = anyio.current_time() - start
    assert polls >= 2
    assert locator.probes == polls
    assert elapsed >= 0.1
    assert elapsed < 1.0


async def test_hidden_on_first_poll_fails_without_sleeping():
    locator = ScriptedLocator(visible=[False])
    start = anyio.current_time()

    with pytest.raises(ElementHiddenError, match="BUG DETECTED"):
        await verify_element_remains_visible(locator, duration=5.0, interval=1.0, description="zip input")

    assert locator.probes == 1
    assert anyio.current_time() - start < 1.0


async def test_element_hiding_midway_reports_the_poll():
    locator = ScriptedLocator(visible=[True, True, False])

    with pytest.raises(ElementHiddenError, match=r"zip input became hidden .*\(poll 3\)"):
        await verify_element_remains_visible(locator, duration=2.0, interval=0.01, description="zip input")

    assert locator.probes == 3


async def test_query_error_counts_as_hidden():
    locator = ScriptedLocator(visible=[PlaywrightError("Target closed")])

    with pytest.raises(ElementHiddenError):
        await verify_element_remains_visible(locator, duration=0.5, interval=0.1)


async def test_element_that_must_stay_hidden_appearing_fails():
    current = ScriptedLocator(visible=[True])
    successor = ScriptedLocator(visible=[False, True])

    with pytest.raises(ElementShownError, match="interests marker"):
        await verify_visibility_holds(
            visible=[("zip marker", current)],
            hidden=[("interests marker", successor)],
            duration=2.0,
            interval=0.01,
        )

    assert successor.probes == 2


async def test_last_poll_is_clipped_to_the_deadline():
    locator = ScriptedLocator(visible=[True])
    start = anyio.current_time()

    polls = await verify_element_remains_visible(locator, duration=0.05, interval=0.03)

    elapsed = anyio.current_time() - start
    assert polls <= 3
    assert 0.05 <= elapsed < 0.05 + 0.03 + 0.5


async def test_hidden_errors_are_assertion_errors():
    assert issubclass(ElementHiddenError, AssertionError)
    assert issubclass(ElementShownError, AssertionError)


@pytest.mark.parametrize("interval", [0, -0.1])
async def test_interval_must_be_positive(interval):
    with pytest.raises(ValueError):
        await verify_visibility_holds(visible=[("x", ScriptedLocator())], duration=1.0, interval=interval)


async def test_wait_for_value_returns_first_accepted_value():
    locator = ScriptedLocator(values=["", "(555", "(555)123-4567"])

    value = await wait_for_value(locator, lambda v: v.endswith("4567"), timeout=2.0, interval=0.01)

    assert value == "(555)123-4567"
    assert locator.reads == 3


async def test_wait_for_value_times_out_with_last_value():
    locator = ScriptedLocator(values=["(555)123"])

    with pytest.raises(AssertionError, match=r"phone_input; last value='\(555\)123'"):
        await wait_for_value(locator, lambda v: False, timeout=0.05, interval=0.01, description="phone_input")
