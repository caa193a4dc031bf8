"""Checks of what the lead form shows after an action.

Assertions are kept apart from the page object: actions never verify and
assertions never click.
"""
from __future__ import annotations

import logging
from typing import Iterable, Optional

from playwright.async_api import Locator, expect

from walkin_ui.browser import Browser
from walkin_ui.form.locators import THANK_YOU_URL, FormLocators
from walkin_ui.form.model import (
    INTEREST_OPTIONS,
    PROPERTY_TYPE_OPTIONS,
    FormStep,
    Outcome,
    Proceeded,
    StayedWithError,
    contract_for,
    error_region_for,
)
from walkin_ui.form.phone import PHONE_DISPLAY_PATTERN, mask_phone
from walkin_ui.waits import verify_visibility_holds, wait_for_value

logger = logging.getLogger(__name__)


class StepOutcomeError(AssertionError):
    """The form's visible state does not match the expected outcome of a step."""

    def __init__(
        self, step: FormStep, expected: str, element: str, detail: str, field: Optional[str] = None
    ) -> None:
        self.step = step
        self.expected = expected
        self.element = element
        self.detail = detail
        self.field = field
        where = f"[{step.value}] field '{field}'" if field else f"[{step.value}]"
        super().__init__(f"{where} expected {expected}: '{element}' {detail}")


class FormAssertions:
    """Visible-state checks against one session's form."""

    def __init__(
        self,
        browser: Browser,
        locators: FormLocators,
        timeout_ms: int = 5000,
        stay_duration: float = 1.5,
        stay_interval: float = 0.2,
    ) -> None:
        self._browser = browser
        self._locators = locators
        self._timeout_ms = timeout_ms
        self._stay_duration = stay_duration
        self._stay_interval = stay_interval

    # ---- generic helpers ----------------------------------------------------

    async def _expect_visible(self, step: FormStep, expected: str, key: str, field: Optional[str] = None) -> None:
        try:
            await expect(self._locators[key]).to_be_visible(timeout=self._timeout_ms)
        except AssertionError as exc:
            raise StepOutcomeError(step, expected, key, f"is not visible ({exc})", field) from exc

    async def _expect_hidden(self, step: FormStep, expected: str, key: str) -> None:
        try:
            await expect(self._locators[key]).to_be_hidden(timeout=self._timeout_ms)
        except AssertionError as exc:
            raise StepOutcomeError(step, expected, key, f"is still visible ({exc})") from exc

    async def _expect_all_visible(self, step: FormStep, expected: str, keys: Iterable[str]) -> None:
        for key in keys:
            await self._expect_visible(step, expected, key)

    async def _expect_all_hidden(self, step: FormStep, expected: str, keys: Iterable[str]) -> None:
        for key in keys:
            await self._expect_hidden(step, expected, key)

    # ---- step state -----------------------------------------------------------

    async def expect_step_active(self, step: FormStep) -> None:
        """All of ``step``'s markers are visible."""
        if step is FormStep.THANK_YOU:
            await self.expect_thank_you_page()
            return
        await self._expect_all_visible(step, "step to be active", contract_for(step).markers)

    async def assert_outcome(self, step: FormStep, outcome: Outcome, field_name: Optional[str] = None) -> None:
        """Verify what ``step`` did after ``advance``.

        ``field_name`` picks a field specific error region where the step
        has one (the email message on the contact step).
        """
        if not isinstance(outcome, (Proceeded, StayedWithError)):
            raise TypeError(f"Unknown outcome: {outcome!r}")
        if contract_for(step).is_terminal:
            raise ValueError(f"Step {step.value} is terminal and has no outcome to assert")
        logger.info("[%s] asserting outcome: %s", step.value, outcome.describe())
        if isinstance(outcome, Proceeded):
            await self._assert_proceeded(step)
        else:
            await self._assert_stayed(step, outcome, field_name)

    async def _assert_proceeded(self, step: FormStep) -> None:
        contract = contract_for(step)
        expected = Proceeded().describe()
        await self.expect_step_active(contract.successor)
        if contract.hides_on_advance:
            await self._expect_all_hidden(step, expected, contract.markers[:1])
        if contract.successor is not FormStep.THANK_YOU:
            await self._expect_all_hidden(step, expected, contract.all_error_regions)

    async def _assert_stayed(self, step: FormStep, outcome: StayedWithError, field_name: Optional[str]) -> None:
        contract = contract_for(step)
        expected = outcome.describe()
        region = error_region_for(step, outcome.kind, field_name)

        await self._expect_visible(step, expected, region, field_name)

        successor = contract_for(contract.successor)
        await verify_visibility_holds(
            visible=[(f"{step.value} marker '{key}'", self._locators[key]) for key in contract.markers],
            hidden=[(f"{successor.step.value} marker '{key}'", self._locators[key]) for key in successor.markers],
            duration=self._stay_duration,
            interval=self._stay_interval,
        )
        await self._expect_visible(step, expected, region, field_name)
        if successor.step is FormStep.THANK_YOU:
            await self.expect_not_on_thank_you_page()

    # ---- field state ----------------------------------------------------------

    async def expect_field_value(self, step: FormStep, field_name: str, value: str) -> None:
        key = contract_for(step).get_field(field_name).locator
        try:
            await expect(self._locators[key]).to_have_value(value, timeout=self._timeout_ms)
        except AssertionError as exc:
            raise StepOutcomeError(
                step, f"value {value!r}", key, f"holds a different value ({exc})", field_name
            ) from exc

    async def _expect_checked(self, step: FormStep, key: str, checked: bool) -> None:
        try:
            await expect(self._locators[key]).to_be_checked(checked=checked, timeout=self._timeout_ms)
        except AssertionError as exc:
            state = "checked" if checked else "unchecked"
            raise StepOutcomeError(step, state, key, f"is not {state} ({exc})") from exc

    async def expect_interests_selected(self, interests: Iterable[str] = tuple(INTEREST_OPTIONS)) -> None:
        for interest in interests:
            await self._expect_checked(FormStep.INTERESTS, INTEREST_OPTIONS[interest], True)

    async def expect_property_type_selected(self, selected: str) -> None:
        """Exactly ``selected`` is checked in the property type group."""
        if selected not in PROPERTY_TYPE_OPTIONS:
            raise KeyError(f"Unknown property type '{selected}'")
        for option, key in PROPERTY_TYPE_OPTIONS.items():
            await self._expect_checked(FormStep.PROPERTY_TYPE, key, option == selected)

    async def expect_property_type_options_enabled(self) -> None:
        for key in PROPERTY_TYPE_OPTIONS.values():
            try:
                await expect(self._locators[key]).to_be_enabled(timeout=self._timeout_ms)
            except AssertionError as exc:
                raise StepOutcomeError(FormStep.PROPERTY_TYPE, "enabled", key, f"is disabled ({exc})") from exc

    async def expect_phone_formatted(self, raw: Optional[str] = None) -> str:
        """Phone input shows the ``(ddd)ddd-dddd`` mask.

        With ``raw`` the displayed value must equal the mask of ``raw``
        (truncated to ten digits).
        """
        locator: Locator = self._locators.phone_input
        if raw is None:
            predicate = lambda value: bool(PHONE_DISPLAY_PATTERN.match(value))
            expected = PHONE_DISPLAY_PATTERN.pattern
        else:
            expected = mask_phone(raw)
            predicate = lambda value: value == expected
        try:
            return await wait_for_value(
                locator,
                predicate,
                timeout=self._timeout_ms / 1000,
                interval=self._stay_interval,
                description="phone_input",
            )
        except AssertionError as exc:
            raise StepOutcomeError(FormStep.PHONE, f"display {expected}", "phone_input", str(exc)) from exc

    # ---- destination ----------------------------------------------------------

    async def expect_thank_you_page(self) -> None:
        page = self._browser.page
        try:
            await expect(page).to_have_url(THANK_YOU_URL, timeout=self._timeout_ms)
        except AssertionError as exc:
            raise StepOutcomeError(FormStep.THANK_YOU, "redirect", "url", f"is {page.url} ({exc})") from exc
        await self._expect_visible(FormStep.THANK_YOU, "thank you heading", "thank_you_heading")

    async def expect_not_on_thank_you_page(self) -> None:
        page = self._browser.page
        try:
            await expect(page).not_to_have_url(THANK_YOU_URL, timeout=self._timeout_ms)
        except AssertionError as exc:
            raise StepOutcomeError(FormStep.PHONE, "no redirect", "url", f"is {page.url} ({exc})") from exc
