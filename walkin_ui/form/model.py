"""
Step-flow model of the walk-in bath lead form.

The form is a linear sequence of screens:

    ZIP_CODE -> INTERESTS -> PROPERTY_TYPE -> CONTACT_INFO -> PHONE -> THANK_YOU

Each screen is described by a :class:`StepContract`: the fields it owns, the
control that advances it, the elements whose visibility proves it is the
active screen, and the error region shown for each :class:`ErrorKind`.
Validation itself happens on the site; this module only names what the suite
observes.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Mapping, Optional, Tuple, Union


class FormStep(Enum):
    ZIP_CODE = "zip_code"
    INTERESTS = "interests"
    PROPERTY_TYPE = "property_type"
    CONTACT_INFO = "contact_info"
    PHONE = "phone"
    THANK_YOU = "thank_you"


class ErrorKind(Enum):
    MISSING_REQUIRED_FIELD = "missing_required_field"
    FORMAT_INVALID = "format_invalid"
    MUST_SPECIFY_FULL_NAME = "must_specify_full_name"
    OUT_OF_RANGE_LENGTH = "out_of_range_length"
    NO_OPTION_SELECTED = "no_option_selected"


class FieldKind(Enum):
    TEXT = "text"
    CHECKBOX = "checkbox"
    RADIO = "radio"
    PHONE_MASKED = "phone_masked"


@dataclass(frozen=True)
class FormField:
    """An input owned by a step.

    TEXT and PHONE_MASKED fields point at one locator key. CHECKBOX and RADIO
    fields are option groups: ``options`` maps option name to locator key.
    """

    name: str
    kind: FieldKind
    locator: Optional[str] = None
    options: Mapping[str, str] = field(default_factory=dict)
    # field specific message regions, consulted before the step-wide ones
    errors: Mapping[ErrorKind, str] = field(default_factory=dict)

    def option_locator(self, option: str) -> str:
        try:
            return self.options[option]
        except KeyError:
            raise KeyError(
                f"Field '{self.name}' has no option '{option}' (known: {', '.join(self.options)})"
            ) from None


@dataclass(frozen=True)
class StepContract:
    step: FormStep
    fields: Tuple[FormField, ...]
    advance_control: Optional[str]
    markers: Tuple[str, ...]
    errors: Mapping[ErrorKind, str] = field(default_factory=dict)
    predecessor: Optional[FormStep] = None
    successor: Optional[FormStep] = None
    # False when the next screen is rendered alongside this one
    hides_on_advance: bool = True

    @property
    def is_terminal(self) -> bool:
        return self.successor is None

    def get_field(self, name: str) -> FormField:
        for candidate in self.fields:
            if candidate.name == name:
                return candidate
        raise KeyError(f"Step {self.step.value} has no field '{name}'")

    @property
    def all_error_regions(self) -> Tuple[str, ...]:
        regions = list(self.errors.values())
        for form_field in self.fields:
            regions.extend(form_field.errors.values())
        return tuple(dict.fromkeys(regions))

    def error_region(self, kind: ErrorKind) -> str:
        try:
            return self.errors[kind]
        except KeyError:
            raise KeyError(f"Step {self.step.value} declares no error region for {kind.value}") from None


@dataclass(frozen=True)
class Proceeded:
    """The step accepted its input and the successor became active."""

    def describe(self) -> str:
        return "proceeds"


@dataclass(frozen=True)
class StayedWithError:
    """The step rejected its input and shows the message for ``kind``."""

    kind: ErrorKind

    def describe(self) -> str:
        return f"stays with {self.kind.value}"


Outcome = Union[Proceeded, StayedWithError]

INTEREST_OPTIONS: Dict[str, str] = {
    "independence": "independence_checkbox",
    "safety": "safety_checkbox",
    "therapy": "therapy_checkbox",
    "other": "other_checkbox",
}

PROPERTY_TYPE_OPTIONS: Dict[str, str] = {
    "owned_house": "owned_house_option",
    "rental_property": "rental_property_option",
    "mobile_home": "mobile_home_option",
}


FLOW: Tuple[StepContract, ...] = (
    StepContract(
        step=FormStep.ZIP_CODE,
        fields=(FormField("zip_code", FieldKind.TEXT, locator="zip_input"),),
        advance_control="next_button",
        markers=("zip_input",),
        errors={ErrorKind.OUT_OF_RANGE_LENGTH: "zip_code_error"},
        successor=FormStep.INTERESTS,
        hides_on_advance=False,
    ),
    StepContract(
        step=FormStep.INTERESTS,
        fields=(FormField("interests", FieldKind.CHECKBOX, options=INTEREST_OPTIONS),),
        advance_control="next_button",
        markers=tuple(INTEREST_OPTIONS.values()),
        errors={ErrorKind.NO_OPTION_SELECTED: "interest_error"},
        predecessor=FormStep.ZIP_CODE,
        successor=FormStep.PROPERTY_TYPE,
    ),
    StepContract(
        step=FormStep.PROPERTY_TYPE,
        fields=(FormField("property_type", FieldKind.RADIO, options=PROPERTY_TYPE_OPTIONS),),
        advance_control="next_button",
        markers=tuple(PROPERTY_TYPE_OPTIONS.values()),
        errors={ErrorKind.NO_OPTION_SELECTED: "property_type_error"},
        predecessor=FormStep.INTERESTS,
        successor=FormStep.CONTACT_INFO,
    ),
    StepContract(
        step=FormStep.CONTACT_INFO,
        fields=(
            FormField("name", FieldKind.TEXT, locator="name_input"),
            FormField(
                "email",
                FieldKind.TEXT,
                locator="email_input",
                errors={ErrorKind.FORMAT_INVALID: "email_error"},
            ),
        ),
        advance_control="go_to_estimate_button",
        markers=("name_input", "email_input"),
        errors={
            ErrorKind.MISSING_REQUIRED_FIELD: "missing_name_error",
            ErrorKind.FORMAT_INVALID: "name_format_error",
            ErrorKind.MUST_SPECIFY_FULL_NAME: "name_full_name_error",
        },
        predecessor=FormStep.PROPERTY_TYPE,
        successor=FormStep.PHONE,
        hides_on_advance=False,
    ),
    StepContract(
        step=FormStep.PHONE,
        fields=(FormField("phone", FieldKind.PHONE_MASKED, locator="phone_input"),),
        advance_control="submit_button",
        markers=("phone_input",),
        errors={ErrorKind.OUT_OF_RANGE_LENGTH: "phone_error"},
        predecessor=FormStep.CONTACT_INFO,
        successor=FormStep.THANK_YOU,
    ),
    StepContract(
        step=FormStep.THANK_YOU,
        fields=(),
        advance_control=None,
        markers=("thank_you_heading",),
        predecessor=FormStep.PHONE,
    ),
)

_CONTRACTS: Dict[FormStep, StepContract] = {contract.step: contract for contract in FLOW}


def contract_for(step: FormStep) -> StepContract:
    return _CONTRACTS[step]


def successor_of(step: FormStep) -> Optional[FormStep]:
    return contract_for(step).successor


def error_region_for(step: FormStep, kind: ErrorKind, field_name: Optional[str] = None) -> str:
    """Locator key of the message region for ``kind`` raised by ``field_name``."""
    contract = contract_for(step)
    if field_name is not None:
        region = contract.get_field(field_name).errors.get(kind)
        if region is not None:
            return region
    return contract.error_region(kind)


def path_to(target: FormStep) -> List[StepContract]:
    """Contracts that must be completed, in order, before ``target`` is active."""
    path: List[StepContract] = []
    current: Optional[FormStep] = FLOW[0].step
    while current is not None and current is not target:
        contract = contract_for(current)
        path.append(contract)
        current = contract.successor
    if current is not target:
        raise ValueError(f"{target.value} is not reachable from {FLOW[0].step.value}")
    return path
