"""
Equivalence-class input data for the lead form.

Each :class:`FieldCase` is one input for one field plus the outcome the site
is expected to produce. Cases whose expectation the site currently violates
carry a ``known_defect`` description; the suite reports them as expected
failures instead of dropping them.

The data is built explicitly with :func:`build_form_test_data` and passed to
scenarios; nothing here is mutated after construction.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple

from walkin_ui.form.model import (
    INTEREST_OPTIONS,
    ErrorKind,
    FormStep,
    Outcome,
    Proceeded,
    StayedWithError,
)

EMAIL_FORMAT_DEFECT = "Site accepts malformed email addresses and advances to the phone step"
INTEREST_REQUIRED_DEFECT = (
    "Disputed requirement: site advances with no interest selected and shows no message"
)


@dataclass(frozen=True)
class ValidInput:
    """Canonical values that pass every step."""

    zip_code: str = "48104"
    interests: Tuple[str, ...] = tuple(INTEREST_OPTIONS)
    property_type: str = "mobile_home"
    name: str = "John Doe"
    email: str = "john.doe@example.com"
    phone: str = "5551234567"

    def values_for(self, step: FormStep) -> Dict[str, Any]:
        """Field values for ``step``, keyed by field name."""
        by_step = {
            FormStep.ZIP_CODE: {"zip_code": self.zip_code},
            FormStep.INTERESTS: {"interests": self.interests},
            FormStep.PROPERTY_TYPE: {"property_type": self.property_type},
            FormStep.CONTACT_INFO: {"name": self.name, "email": self.email},
            FormStep.PHONE: {"phone": self.phone},
            FormStep.THANK_YOU: {},
        }
        return dict(by_step[step])


@dataclass(frozen=True)
class FieldCase:
    step: FormStep
    field: str
    value: Any
    description: str
    expected: Outcome
    known_defect: Optional[str] = None

    @property
    def case_id(self) -> str:
        return f"{self.field}-{self.description.replace(' ', '_')}"

    @property
    def should_proceed(self) -> bool:
        return isinstance(self.expected, Proceeded)

    def overrides(self) -> Mapping[str, Any]:
        return {self.field: self.value}


@dataclass(frozen=True)
class FormTestData:
    valid: ValidInput
    zip_code_cases: Tuple[FieldCase, ...]
    interest_cases: Tuple[FieldCase, ...]
    property_type_cases: Tuple[FieldCase, ...]
    name_cases: Tuple[FieldCase, ...]
    email_cases: Tuple[FieldCase, ...]
    phone_cases: Tuple[FieldCase, ...]

    def all_cases(self) -> Iterator[FieldCase]:
        for table in (
            self.zip_code_cases,
            self.interest_cases,
            self.property_type_cases,
            self.name_cases,
            self.email_cases,
            self.phone_cases,
        ):
            yield from table


def _case(step: FormStep, field: str, value: Any, description: str, expected: Outcome, defect: Optional[str] = None) -> FieldCase:
    return FieldCase(step, field, value, description, expected, known_defect=defect)


def build_form_test_data(valid: Optional[ValidInput] = None) -> FormTestData:
    """Assemble the case tables around ``valid`` (defaults to :class:`ValidInput`)."""
    valid = valid or ValidInput()
    proceeds = Proceeded()

    zip_cases = (
        _case(FormStep.ZIP_CODE, "zip_code", valid.zip_code, "valid (5 digits)", proceeds),
        _case(FormStep.ZIP_CODE, "zip_code", "1234", "too short (4 digits)",
              StayedWithError(ErrorKind.OUT_OF_RANGE_LENGTH)),
        _case(FormStep.ZIP_CODE, "zip_code", "123456", "too long (6 digits)",
              StayedWithError(ErrorKind.OUT_OF_RANGE_LENGTH)),
    )

    interest_cases = (
        _case(FormStep.INTERESTS, "interests", (), "none selected",
              StayedWithError(ErrorKind.NO_OPTION_SELECTED), INTEREST_REQUIRED_DEFECT),
        _case(FormStep.INTERESTS, "interests", ("independence",), "one selected", proceeds),
        _case(FormStep.INTERESTS, "interests", valid.interests, "all selected", proceeds),
    )

    property_cases = (
        _case(FormStep.PROPERTY_TYPE, "property_type", None, "none selected",
              StayedWithError(ErrorKind.NO_OPTION_SELECTED)),
        _case(FormStep.PROPERTY_TYPE, "property_type", "owned_house", "owned house", proceeds),
        _case(FormStep.PROPERTY_TYPE, "property_type", "rental_property", "rental property", proceeds),
        _case(FormStep.PROPERTY_TYPE, "property_type", "mobile_home", "mobile home", proceeds),
    )

    name_cases = (
        _case(FormStep.CONTACT_INFO, "name", "", "empty",
              StayedWithError(ErrorKind.MISSING_REQUIRED_FIELD)),
        _case(FormStep.CONTACT_INFO, "name", "Joe", "first name only",
              StayedWithError(ErrorKind.MUST_SPECIFY_FULL_NAME)),
        _case(FormStep.CONTACT_INFO, "name", "Joe Doe", "first and last name", proceeds),
        _case(FormStep.CONTACT_INFO, "name", "Joe Michael Doe", "full name", proceeds),
        # digit zero in place of the letter o
        _case(FormStep.CONTACT_INFO, "name", "Joe D0e", "with invalid format (number)",
              StayedWithError(ErrorKind.FORMAT_INVALID)),
    )

    email_cases = (
        _case(FormStep.CONTACT_INFO, "email", valid.email, "valid format", proceeds),
        _case(FormStep.CONTACT_INFO, "email", "invalid.email.com", "missing @ symbol",
              StayedWithError(ErrorKind.FORMAT_INVALID), EMAIL_FORMAT_DEFECT),
        _case(FormStep.CONTACT_INFO, "email", "invalid-email@", "missing domain",
              StayedWithError(ErrorKind.FORMAT_INVALID), EMAIL_FORMAT_DEFECT),
        _case(FormStep.CONTACT_INFO, "email", "invalid-email@domain", "missing TLD",
              StayedWithError(ErrorKind.FORMAT_INVALID), EMAIL_FORMAT_DEFECT),
    )

    # Input past ten digits is truncated by the mask, so "too long" cannot
    # fail validation; test_phone_display_truncates_extra_digits covers it.
    phone_cases = (
        _case(FormStep.PHONE, "phone", valid.phone, "valid (10 digits)", proceeds),
        _case(FormStep.PHONE, "phone", "555123456", "too short (9 digits)",
              StayedWithError(ErrorKind.OUT_OF_RANGE_LENGTH)),
    )

    return FormTestData(
        valid=valid,
        zip_code_cases=zip_cases,
        interest_cases=interest_cases,
        property_type_cases=property_cases,
        name_cases=name_cases,
        email_cases=email_cases,
        phone_cases=phone_cases,
    )
