import logging
import sys
from pathlib import Path

import httpx
import pytest
import pytest_asyncio
from playwright.async_api import Error as PlaywrightError

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from walkin_ui.browser import Browser, ToolError
from walkin_ui.config import BrowserProfile, settings
from walkin_ui.data import FieldCase, FormTestData, build_form_test_data
from walkin_ui.form.page import WalkInBathFormPage
from walkin_ui.playwright_client import PlaywrightClient
from walkin_ui.slider import SliderPage
from walkin_ui.video import VideoPage

logger = logging.getLogger(__name__)

FORM_DATA_KEY = pytest.StashKey[FormTestData]()

# fixture name -> FormTestData attribute holding its cases
_CASE_TABLES = {
    "zip_code_case": "zip_code_cases",
    "interest_case": "interest_cases",
    "property_type_case": "property_type_cases",
    "name_case": "name_cases",
    "email_case": "email_cases",
    "phone_case": "phone_cases",
}


def pytest_configure(config):
    config.addinivalue_line("markers", "e2e: drives a real browser against the site under test")
    config.addinivalue_line("markers", "known_defect(description): documents a site defect the scenario exposes")
    config.stash[FORM_DATA_KEY] = build_form_test_data()


def _case_param(case: FieldCase):
    marks = []
    if case.known_defect:
        marks = [
            pytest.mark.known_defect(case.known_defect),
            pytest.mark.xfail(reason=f"KNOWN DEFECT: {case.known_defect}", strict=False),
        ]
    return pytest.param(case, id=case.case_id, marks=marks)


def pytest_generate_tests(metafunc):
    """Parametrize ``*_case`` arguments from the stashed case tables."""
    data: FormTestData = metafunc.config.stash[FORM_DATA_KEY]
    for argname, table in _CASE_TABLES.items():
        if argname in metafunc.fixturenames:
            metafunc.parametrize(argname, [_case_param(case) for case in getattr(data, table)])


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Expose each phase's report as ``item.rep_<phase>`` for fixture teardown."""
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"rep_{report.when}", report)


@pytest.fixture(scope="session")
def form_data(pytestconfig) -> FormTestData:
    return pytestconfig.stash[FORM_DATA_KEY]


@pytest.fixture(scope="session")
def site_available():
    """Skip browser scenarios when the site under test cannot be reached."""
    try:
        with httpx.Client(timeout=15.0, follow_redirects=True) as client:
            response = client.get(settings.url("/"))
    except httpx.HTTPError as exc:
        pytest.skip(f"Site {settings.base_url} not reachable: {exc}")
    logger.info("Site %s answered with HTTP %s", settings.base_url, response.status_code)
    return settings.base_url


def _profile_id(profile: BrowserProfile) -> str:
    return profile.name


@pytest.fixture(params=settings.profiles(), ids=_profile_id)
def browser_profile(request):
    """Activate each configured browser profile for the test run."""
    profile: BrowserProfile = request.param
    with settings.use_profile(profile):
        yield profile


@pytest_asyncio.fixture()
async def browser(request, site_available, browser_profile):
    """Fresh page in the active profile's browser; screenshots failed scenarios."""
    client = PlaywrightClient(browser_type=browser_profile.browser_type, base_url=browser_profile.base_url)
    try:
        await client.connect()
    except PlaywrightError as exc:
        pytest.skip(f"{browser_profile.browser_type} could not be launched: {exc}")

    browser = Browser(client.page)
    try:
        yield browser
    finally:
        report = getattr(request.node, "rep_call", None)
        if report is not None and report.failed:
            try:
                await browser.screenshot(request.node.nodeid)
            except ToolError as exc:
                logger.warning("Failure screenshot not saved: %s", exc)
        await client.close()


@pytest_asyncio.fixture()
async def form_page(browser, form_data):
    page = WalkInBathFormPage(browser, form_data.valid)
    await page.goto()
    return page


@pytest_asyncio.fixture()
async def slider_page(browser):
    page = SliderPage(browser)
    await page.goto()
    return page


@pytest_asyncio.fixture()
async def video_page(browser):
    page = VideoPage(browser)
    await page.goto()
    return page
