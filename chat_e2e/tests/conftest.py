import sys
from pathlib import Path

import pytest
import pytest_asyncio

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from chat_e2e.api_verifier import ApiVerifier
from chat_e2e.artifacts import capture_failure_screenshot, node_failed
from chat_e2e.auth import login_as
from chat_e2e.config import settings
from chat_e2e.pages import ChatSettingsPage
from chat_e2e.playwright_client import PlaywrightClient
from chat_e2e.preflight import e2e_skip_reason


def pytest_configure(config):
    config.addinivalue_line("markers", "e2e: drives a real browser against the running application")


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Expose each phase's report on the item (``item.rep_call``) for fixtures."""
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"rep_{report.when}", report)


@pytest.fixture(scope="session")
def e2e_environment():
    """Skip browser tests unless the application is up and credentials exist."""
    reason = e2e_skip_reason(settings)
    if reason:
        pytest.skip(reason)
    return settings


@pytest_asyncio.fixture()
async def playwright_client(e2e_environment):
    """Create a Playwright client instance."""
    async with PlaywrightClient() as client:
        yield client


@pytest_asyncio.fixture()
async def page(playwright_client, request):
    """The test's browser page; screenshots it when the test fails."""
    page = playwright_client.page
    yield page

    if node_failed(request.node):
        await capture_failure_screenshot(page, request.node.nodeid)


@pytest_asyncio.fixture()
async def api_verifier(page):
    """API traffic recorder, capturing from the start of the test."""
    verifier = ApiVerifier(page)
    await verifier.start_capturing()
    yield verifier
    verifier.stop_capturing()


@pytest_asyncio.fixture()
async def chat_settings(page, api_verifier):
    """Admin session opened on the Chat Settings page."""
    await login_as(page, "admin")

    settings_page = ChatSettingsPage(page)
    await settings_page.open()
    return settings_page
