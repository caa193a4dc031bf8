"""User input on the lead form: filling fields and pressing step controls."""
from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from walkin_ui.browser import Browser
from walkin_ui.form.fields import simulate_input
from walkin_ui.form.locators import FormLocators
from walkin_ui.form.model import INTEREST_OPTIONS, FormStep, contract_for

logger = logging.getLogger(__name__)


class FormActions:
    """Simulates a user on one browser session.

    Missing or disabled elements raise ``ToolError`` from the browser
    wrapper; nothing here interprets validation results.
    """

    def __init__(self, browser: Browser, locators: FormLocators) -> None:
        self._browser = browser
        self._locators = locators

    async def enter_field(self, step: FormStep, field_name: str, value: Any) -> None:
        field = contract_for(step).get_field(field_name)
        logger.debug("[%s] %s <- %r", step.value, field_name, value)
        await simulate_input(self._browser, self._locators, field, value)

    async def fill_step(self, step: FormStep, values: Mapping[str, Any]) -> None:
        """Enter every value in ``values``, in the step's declared field order."""
        contract = contract_for(step)
        unknown = set(values) - {field.name for field in contract.fields}
        if unknown:
            raise KeyError(f"Step {step.value} has no field(s): {', '.join(sorted(unknown))}")
        for field in contract.fields:
            if field.name in values:
                await self.enter_field(step, field.name, values[field.name])

    async def advance(self, step: FormStep) -> None:
        """Press the control that submits ``step``."""
        control = contract_for(step).advance_control
        if control is None:
            raise ValueError(f"Step {step.value} is terminal and has no transition control")
        locator = self._locators[control]
        await self._browser.require_enabled(locator, control)
        logger.info("[%s] advancing via %s", step.value, control)
        await self._browser.click(locator, control)

    # ---- step conveniences --------------------------------------------------

    async def enter_zip_code(self, zip_code: str) -> None:
        await self.enter_field(FormStep.ZIP_CODE, "zip_code", zip_code)

    async def select_interests(self, interests: Iterable[str]) -> None:
        await self.enter_field(FormStep.INTERESTS, "interests", tuple(interests))

    async def select_all_interests(self) -> None:
        await self.select_interests(INTEREST_OPTIONS)

    async def select_interest(self, interest: str) -> None:
        await self.select_interests((interest,))

    async def select_property_type(self, property_type: str) -> None:
        await self.enter_field(FormStep.PROPERTY_TYPE, "property_type", property_type)

    async def enter_contact_info(self, name: str, email: str) -> None:
        await self.fill_step(FormStep.CONTACT_INFO, {"name": name, "email": email})

    async def click_go_to_estimate(self) -> None:
        await self.advance(FormStep.CONTACT_INFO)

    async def enter_phone_number(self, phone: str) -> None:
        await self.enter_field(FormStep.PHONE, "phone", phone)

    async def submit_form(self) -> None:
        await self.advance(FormStep.PHONE)
