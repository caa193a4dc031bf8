"""Walk-in bath lead form against the live site."""
import pytest

from walkin_ui.form.model import ErrorKind, FormStep, StayedWithError
from walkin_ui.form.phone import PHONE_DISPLAY_PATTERN

pytestmark = [pytest.mark.asyncio, pytest.mark.e2e]


async def test_complete_submission_redirects_to_thank_you(form_page, form_data):
    valid = form_data.valid

    await form_page.enter_zip_code(valid.zip_code)
    await form_page.click_next(FormStep.ZIP_CODE)
    await form_page.expect_step_active(FormStep.INTERESTS)

    await form_page.select_all_interests()
    await form_page.expect_interests_selected()
    await form_page.click_next(FormStep.INTERESTS)

    await form_page.expect_property_type_options_enabled()
    await form_page.select_property_type(valid.property_type)
    await form_page.expect_property_type_selected(valid.property_type)
    await form_page.click_next(FormStep.PROPERTY_TYPE)

    await form_page.enter_contact_info(valid.name, valid.email)
    await form_page.click_go_to_estimate()

    await form_page.enter_phone_number(valid.phone)
    await form_page.expect_phone_formatted()
    await form_page.submit_form()

    await form_page.expect_thank_you_page()


@pytest.mark.parametrize("zip_code", ["1234", "123456"])
async def test_zip_code_out_of_range_keeps_value(form_page, zip_code):
    await form_page.enter_zip_code(zip_code)
    await form_page.click_next(FormStep.ZIP_CODE)

    await form_page.assert_outcome(FormStep.ZIP_CODE, StayedWithError(ErrorKind.OUT_OF_RANGE_LENGTH))
    await form_page.expect_field_value(FormStep.ZIP_CODE, "zip_code", zip_code)


async def test_zip_code_cases(form_page, zip_code_case):
    await form_page.check_field_case(zip_code_case)


async def test_interest_cases(form_page, interest_case):
    await form_page.check_field_case(interest_case)


async def test_property_type_cases(form_page, property_type_case):
    await form_page.check_field_case(property_type_case)


async def test_name_cases(form_page, name_case):
    await form_page.check_field_case(name_case)


async def test_email_cases(form_page, email_case):
    await form_page.check_field_case(email_case)


async def test_phone_cases(form_page, phone_case):
    await form_page.check_field_case(phone_case)


async def test_selected_interests_read_back(form_page, form_data):
    await form_page.navigate_to(FormStep.INTERESTS)
    await form_page.select_all_interests()

    assert await form_page.read_field(FormStep.INTERESTS, "interests") == form_data.valid.interests


async def test_property_type_selection_is_exclusive(form_page):
    await form_page.navigate_to(FormStep.PROPERTY_TYPE)
    await form_page.expect_property_type_options_enabled()

    for option in ("owned_house", "rental_property", "mobile_home"):
        await form_page.select_property_type(option)
        await form_page.expect_property_type_selected(option)
        assert await form_page.read_field(FormStep.PROPERTY_TYPE, "property_type") == option


async def test_phone_display_is_masked(form_page, form_data):
    await form_page.navigate_to(FormStep.PHONE)
    await form_page.enter_phone_number(form_data.valid.phone)

    displayed = await form_page.expect_phone_formatted(form_data.valid.phone)
    assert PHONE_DISPLAY_PATTERN.match(displayed)

    # re-entering the masked text must not change it
    await form_page.enter_phone_number(displayed)
    assert await form_page.expect_phone_formatted(displayed) == displayed


async def test_phone_display_truncates_extra_digits(form_page):
    await form_page.navigate_to(FormStep.PHONE)
    await form_page.enter_phone_number("55512345678")

    assert await form_page.expect_phone_formatted("55512345678") == "(555)123-4567"
