"""Offline checks of the Chat Settings page object's argument handling."""
import pytest

from chat_e2e.config import settings
from chat_e2e.pages import ChatSettingsPage


class RecordingLocator:
    def __init__(self, page, text):
        self._page = page
        self._text = text

    async def click(self):
        self._page.clicked.append(self._text)


class RecordingPage:
    def __init__(self):
        self.clicked = []

    def get_by_text(self, text):
        return RecordingLocator(self, text)


@pytest.fixture
def settings_page():
    return ChatSettingsPage(RecordingPage())


@pytest.mark.asyncio
async def test_select_visibility_mode_opens_dropdown_first(settings_page):
    await settings_page.select_visibility_mode("All customers")
    await settings_page.select_visibility_mode("Customers with value greater than", current="All customers")

    assert settings_page.page.clicked == [
        "Select when to show chat icon",
        "All customers",
        "All customers",
        "Customers with value greater than",
    ]


@pytest.mark.asyncio
async def test_expand_guide_returns_marker(settings_page):
    await settings_page.expand_guide("Authenticate your users")

    assert settings_page.page.clicked == ["Authenticate your users"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "action, argument",
    [
        ("select_visibility_mode", "Nobody"),
        ("set_email_response", "Forward"),
        ("show_installation_tab", "Vue"),
        ("expand_guide", "Style the launcher"),
    ],
)
async def test_unknown_choices_are_rejected(settings_page, action, argument):
    with pytest.raises(ValueError):
        await getattr(settings_page, action)(argument)

    assert settings_page.page.clicked == []


class WaitingPage:
    def __init__(self):
        self.waits = []

    async def wait_for_selector(self, selector, timeout=None):
        self.waits.append((selector, timeout))


@pytest.mark.asyncio
async def test_wait_for_saved_timeouts():
    page = WaitingPage()
    settings_page = ChatSettingsPage(page)

    await settings_page.wait_for_saved()
    await settings_page.wait_for_saved(timeout=2500)
    await settings_page.wait_for_saved(timeout=0)

    assert page.waits == [
        ("text=Saved", settings.save_timeout_ms),
        ("text=Saved", 2500),
        ("text=Saved", 0),
    ]
