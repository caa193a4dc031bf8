"""Bounded polling helpers for state changes that fire no completion event."""
from __future__ import annotations

import logging
from typing import Callable, Sequence, Tuple

import anyio
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Locator

logger = logging.getLogger(__name__)

NamedLocator = Tuple[str, Locator]


class UnexpectedTransitionError(AssertionError):
    """Visible state changed while it was required to hold."""


class ElementHiddenError(UnexpectedTransitionError):
    """An element that had to stay visible disappeared inside the wait window.

    On the lead form this means the form advanced when it should not have.
    """


class ElementShownError(UnexpectedTransitionError):
    """An element that had to stay hidden appeared inside the wait window."""


async def _probe_visible(locator: Locator) -> bool:
    try:
        return await locator.is_visible()
    except PlaywrightError:
        return False


async def verify_visibility_holds(
    visible: Sequence[NamedLocator] = (),
    hidden: Sequence[NamedLocator] = (),
    duration: float = 1.5,
    interval: float = 0.2,
) -> int:
    """Poll until ``duration`` seconds pass with every element in its state.

    The first probe happens immediately, so an element already in the wrong
    state fails without any sleep. Sleeps are clipped to the deadline: the
    last probe lands on the boundary and never after it. A query error
    counts as hidden. Returns the number of polls made.
    """
    if interval <= 0:
        raise ValueError("interval must be positive")

    deadline = anyio.current_time() + duration
    polls = 0
    while True:
        polls += 1
        for name, locator in visible:
            if not await _probe_visible(locator):
                raise ElementHiddenError(
                    f"BUG DETECTED: {name} became hidden during the {duration * 1000:.0f}ms "
                    f"wait period (poll {polls}). Form proceeded when it should not."
                )
        for name, locator in hidden:
            if await _probe_visible(locator):
                raise ElementShownError(
                    f"BUG DETECTED: {name} became visible during the {duration * 1000:.0f}ms "
                    f"wait period (poll {polls}). Form proceeded when it should not."
                )
        remaining = deadline - anyio.current_time()
        if remaining <= 0:
            break
        await anyio.sleep(min(interval, remaining))

    logger.debug("Visibility held for %.0fms (%d polls)", duration * 1000, polls)
    return polls


async def verify_element_remains_visible(
    locator: Locator,
    duration: float = 1.5,
    interval: float = 0.2,
    description: str = "element",
) -> int:
    """Fail with :class:`ElementHiddenError` as soon as ``locator`` hides."""
    return await verify_visibility_holds(
        visible=[(description, locator)], duration=duration, interval=interval
    )


async def wait_for_value(
    locator: Locator,
    predicate: Callable[[str], bool],
    timeout: float = 5.0,
    interval: float = 0.2,
    description: str = "input",
) -> str:
    """Poll an input's value until ``predicate`` accepts it."""
    deadline = anyio.current_time() + timeout
    last_value = ""
    while True:
        try:
            last_value = await locator.input_value(timeout=interval * 1000) or ""
        except PlaywrightError:
            last_value = ""
        if predicate(last_value):
            return last_value
        remaining = deadline - anyio.current_time()
        if remaining <= 0:
            break
        await anyio.sleep(min(interval, remaining))
    raise AssertionError(f"Timed out waiting for value on {description}; last value='{last_value}'")
