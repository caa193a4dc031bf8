"""Walk-In Bath form page object.

Wires the locator registry, actions, assertions and navigation together
for one browser session and exposes the operations scenarios use.
"""
from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from walkin_ui.browser import Browser
from walkin_ui.config import UiTestConfig, settings
from walkin_ui.data import FieldCase, ValidInput
from walkin_ui.form.actions import FormActions
from walkin_ui.form.assertions import FormAssertions
from walkin_ui.form.fields import read_state
from walkin_ui.form.locators import FormLocators
from walkin_ui.form.model import FormStep, Outcome, contract_for
from walkin_ui.form.navigation import FormNavigation

logger = logging.getLogger(__name__)


class WalkInBathFormPage:
    def __init__(self, browser: Browser, valid: ValidInput, config: UiTestConfig = settings) -> None:
        self.browser = browser
        self.config = config
        self.valid = valid
        self.locators = FormLocators(browser.page)
        self.actions = FormActions(browser, self.locators)
        self.assertions = FormAssertions(
            browser,
            self.locators,
            timeout_ms=config.expect_timeout_ms,
            stay_duration=config.stay_on_step_duration,
            stay_interval=config.stay_on_step_interval,
        )
        self.navigation = FormNavigation(self.actions, self.assertions, valid)

    async def goto(self) -> None:
        await self.browser.goto(self.config.url("/"))

    # ---- core operations ------------------------------------------------------

    async def enter_field(self, step: FormStep, field_name: str, value: Any) -> None:
        await self.actions.enter_field(step, field_name, value)

    async def advance(self, step: FormStep) -> None:
        await self.actions.advance(step)

    async def assert_outcome(self, step: FormStep, outcome: Outcome, field_name: Optional[str] = None) -> None:
        await self.assertions.assert_outcome(step, outcome, field_name)

    async def navigate_to(self, step: FormStep) -> None:
        await self.navigation.navigate_to(step)

    async def read_field(self, step: FormStep, field_name: str) -> Any:
        field = contract_for(step).get_field(field_name)
        return await read_state(self.browser, self.locators, field)

    async def check_field_case(self, case: FieldCase) -> None:
        """Reach the case's step, enter its input, advance and verify the outcome."""
        logger.info("Case %s: expecting %s", case.case_id, case.expected.describe())
        await self.navigate_to(case.step)
        await self.navigation.prepare_step(case.step, case.overrides())
        await self.advance(case.step)
        await self.assert_outcome(case.step, case.expected, case.field)

    # ---- step actions ---------------------------------------------------------

    async def enter_zip_code(self, zip_code: str) -> None:
        await self.actions.enter_zip_code(zip_code)

    async def click_next(self, step: FormStep) -> None:
        await self.actions.advance(step)

    async def select_all_interests(self) -> None:
        await self.actions.select_all_interests()

    async def select_interests(self, interests: Iterable[str]) -> None:
        await self.actions.select_interests(interests)

    async def select_property_type(self, property_type: str) -> None:
        await self.actions.select_property_type(property_type)

    async def enter_contact_info(self, name: str, email: str) -> None:
        await self.actions.enter_contact_info(name, email)

    async def click_go_to_estimate(self) -> None:
        await self.actions.click_go_to_estimate()

    async def enter_phone_number(self, phone: str) -> None:
        await self.actions.enter_phone_number(phone)

    async def submit_form(self) -> None:
        await self.actions.submit_form()

    # ---- verification ---------------------------------------------------------

    async def expect_step_active(self, step: FormStep) -> None:
        await self.assertions.expect_step_active(step)

    async def expect_interests_selected(self) -> None:
        await self.assertions.expect_interests_selected()

    async def expect_property_type_options_enabled(self) -> None:
        await self.assertions.expect_property_type_options_enabled()

    async def expect_property_type_selected(self, property_type: str) -> None:
        await self.assertions.expect_property_type_selected(property_type)

    async def expect_field_value(self, step: FormStep, field_name: str, value: str) -> None:
        await self.assertions.expect_field_value(step, field_name, value)

    async def expect_phone_formatted(self, raw: Optional[str] = None) -> str:
        return await self.assertions.expect_phone_formatted(raw)

    async def expect_thank_you_page(self) -> None:
        await self.assertions.expect_thank_you_page()
