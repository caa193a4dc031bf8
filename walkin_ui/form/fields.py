"""Input simulation and state reads, dispatched on :class:`FieldKind`.

Values by kind:

- TEXT: ``str``
- PHONE_MASKED: ``str`` (raw digits; the site applies the mask)
- CHECKBOX: iterable of option names to check; empty checks nothing
- RADIO: option name, or ``None`` to leave the group untouched
"""
from __future__ import annotations

from typing import Any, Awaitable, Callable, Dict, Optional, Tuple

from walkin_ui.browser import Browser
from walkin_ui.form.locators import FormLocators
from walkin_ui.form.model import FieldKind, FormField

InputHandler = Callable[[Browser, FormLocators, FormField, Any], Awaitable[None]]
StateReader = Callable[[Browser, FormLocators, FormField], Awaitable[Any]]


async def _fill_text(browser: Browser, locators: FormLocators, field: FormField, value: str) -> None:
    locator = locators[field.locator]
    await browser.require_enabled(locator, field.locator)
    await browser.fill(locator, value, field.locator)


async def _dispatch_phone(browser: Browser, locators: FormLocators, field: FormField, value: str) -> None:
    locator = locators[field.locator]
    await browser.require_enabled(locator, field.locator)
    await browser.dispatch_value(locator, value, field.locator)


async def _check_options(browser: Browser, locators: FormLocators, field: FormField, value) -> None:
    if isinstance(value, str):
        value = (value,)
    for option in value:
        key = field.option_locator(option)
        # options render with a fade-in; firefox clicks through them otherwise
        await browser.require_visible(locators[key], key)
        await browser.check(locators[key], key)


async def _check_radio(browser: Browser, locators: FormLocators, field: FormField, value: Optional[str]) -> None:
    if value is None:
        return
    key = field.option_locator(value)
    await browser.require_enabled(locators[key], key)
    await browser.check(locators[key], key)


async def _read_text(browser: Browser, locators: FormLocators, field: FormField) -> str:
    return await browser.input_value(locators[field.locator], field.locator)


async def _read_checked(browser: Browser, locators: FormLocators, field: FormField) -> Tuple[str, ...]:
    checked = []
    for option, key in field.options.items():
        if await browser.is_checked(locators[key], key):
            checked.append(option)
    return tuple(checked)


async def _read_radio(browser: Browser, locators: FormLocators, field: FormField) -> Optional[str]:
    selected = await _read_checked(browser, locators, field)
    return selected[0] if selected else None


_INPUT_HANDLERS: Dict[FieldKind, InputHandler] = {
    FieldKind.TEXT: _fill_text,
    FieldKind.PHONE_MASKED: _dispatch_phone,
    FieldKind.CHECKBOX: _check_options,
    FieldKind.RADIO: _check_radio,
}

_STATE_READERS: Dict[FieldKind, StateReader] = {
    FieldKind.TEXT: _read_text,
    FieldKind.PHONE_MASKED: _read_text,
    FieldKind.CHECKBOX: _read_checked,
    FieldKind.RADIO: _read_radio,
}


async def simulate_input(browser: Browser, locators: FormLocators, field: FormField, value: Any) -> None:
    """Enter ``value`` into ``field`` the way a user would."""
    await _INPUT_HANDLERS[field.kind](browser, locators, field, value)


async def read_state(browser: Browser, locators: FormLocators, field: FormField) -> Any:
    """Current displayed state of ``field`` in the same shape ``simulate_input`` takes."""
    return await _STATE_READERS[field.kind](browser, locators, field)
