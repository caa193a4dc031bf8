"""Locators for every element of the lead form the suite touches.

Everything except the thank-you heading is scoped to ``#form-container-1``,
the first lead form on the homepage.
"""
from __future__ import annotations

import re
from typing import Dict, List

from playwright.async_api import Locator, Page

FORM_CONTAINER = "#form-container-1"
THANK_YOU_URL = re.compile(r"/thankyou", re.IGNORECASE)

# key -> (role, accessible name pattern)
_ROLE_LOCATORS = {
    "zip_input": ("textbox", r"enter zip code"),
    "next_button": ("button", r"next"),
    "name_input": ("textbox", r"name"),
    "email_input": ("textbox", r"email"),
    "go_to_estimate_button": ("button", r"go to estimate"),
    "submit_button": ("button", r"submit your request"),
}

# key -> visible text pattern
_TEXT_LOCATORS = {
    "independence_checkbox": r"independence",
    "safety_checkbox": r"safety",
    "therapy_checkbox": r"therapy",
    "other_checkbox": r"other",
    "owned_house_option": r"owned house\s*/\s*condo",
    "rental_property_option": r"rental property",
    "mobile_home_option": r"mobile home",
    "zip_code_error": r"wrong zip code",
    "phone_error": r"wrong phone number",
    "missing_name_error": r"please enter your name",
    "name_format_error": r"your name should consist only",
    "name_full_name_error": r"should contain both first and last name",
    "property_type_error": r"choose one of the variants",
    # the site shows no email or interest message today; these catch one appearing
    "email_error": r"invalid email|wrong email|please enter a valid email",
    "interest_error": r"please select at least one interest|select at least one option",
}


def _pattern(text: str) -> re.Pattern:
    return re.compile(text, re.IGNORECASE)


class FormLocators:
    """Registry of form locators addressable by key."""

    def __init__(self, page: Page) -> None:
        self.page = page
        self.form = page.locator(FORM_CONTAINER)
        self._by_key: Dict[str, Locator] = {}

        for key, (role, name) in _ROLE_LOCATORS.items():
            self._by_key[key] = self.form.get_by_role(role, name=_pattern(name))
        for key, text in _TEXT_LOCATORS.items():
            self._by_key[key] = self.form.get_by_text(_pattern(text))

        self._by_key["phone_input"] = self.form.locator('input[name="phone"]')
        self._by_key["thank_you_heading"] = page.locator("h1").filter(has_text=_pattern(r"thank you"))

    def __getitem__(self, key: str) -> Locator:
        try:
            return self._by_key[key]
        except KeyError:
            raise KeyError(f"No form locator registered for '{key}'") from None

    def __contains__(self, key: str) -> bool:
        return key in self._by_key

    def keys(self) -> List[str]:
        return list(self._by_key)

    @property
    def phone_input(self) -> Locator:
        return self["phone_input"]
