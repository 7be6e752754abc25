"""Page object for the Chat Settings screen (``/settings/chat``).

Every control on this page saves on change and then shows a transient
"Saved" marker. Actions here only perform the change; callers decide
when to ``wait_for_saved()``.
"""
from __future__ import annotations

from typing import Dict, Optional, Tuple

from playwright.async_api import Locator, Page

from chat_e2e.config import settings


class ChatSettingsPage:
    PATH = "/settings/chat"
    SAVED_TEXT = "Saved"

    SECTIONS: Dict[str, str] = {
        "Chat Icon Visibility": "Choose when your customers can see the chat widget",
        "Chat widget host URL": "The URL where your chat widget is installed",
        "Respond to email inquiries with chat": (
            "Automatically respond to emails as if the customer was using the chat widget"
        ),
    }
    INSTALLATION_HEADINGS: Tuple[str, ...] = ("Widget Installation", "Documentation")

    MODE_SELECTOR_LABEL = "Show chat icon for"
    MODE_PLACEHOLDER = "Select when to show chat icon"
    VISIBILITY_MODES: Tuple[str, ...] = ("All customers", "Customers with value greater than")

    EMAIL_RESPONSE_HEADING = "Respond to email inquiries with chat"
    EMAIL_RESPONSE_MODES: Tuple[str, ...] = ("Off", "Draft", "Reply")

    INSTALLATION_TABS: Tuple[str, ...] = ("HTML/JavaScript", "React/Next.js")
    INSTALLATION_GUIDES: Dict[str, str] = {
        "Customize the widget": "Supported options:",
        "Add contextual help buttons": "data-helper-prompt",
        "Authenticate your users": "HMAC secret",
    }

    def __init__(self, page: Page) -> None:
        self.page = page

    async def open(self) -> None:
        await self.page.goto(self.PATH)
        await self.page.wait_for_load_state("networkidle")

    async def wait_for_saved(self, timeout: Optional[int] = None) -> None:
        """Wait for the "Saved" marker; ``timeout`` is in milliseconds."""
        await self.page.wait_for_selector(
            f"text={self.SAVED_TEXT}",
            timeout=settings.save_timeout_ms if timeout is None else timeout,
        )

    # ---- chat icon visibility ---------------------------------------------------
    @property
    def visibility_switch(self) -> Locator:
        return self.page.locator("[data-testid='switch-section-wrapper']").first

    @property
    def visibility_input(self) -> Locator:
        return self.visibility_switch.locator("input[type='checkbox']")

    async def is_visibility_enabled(self) -> bool:
        return await self.visibility_input.is_checked()

    async def toggle_visibility(self) -> bool:
        """Click the visibility switch and return its new state."""
        await self.visibility_switch.click()
        return await self.is_visibility_enabled()

    async def enable_visibility(self) -> None:
        if not await self.is_visibility_enabled():
            await self.visibility_switch.click()

    async def wait_for_mode_selector(self) -> None:
        await self.page.wait_for_selector(
            f"text={self.MODE_SELECTOR_LABEL}",
            timeout=settings.reveal_timeout_ms,
        )

    async def select_visibility_mode(self, option: str, current: str = MODE_PLACEHOLDER) -> None:
        """Open the mode dropdown (showing ``current``) and pick ``option``."""
        if option not in self.VISIBILITY_MODES:
            raise ValueError(f"Unknown visibility mode {option!r}; expected one of {self.VISIBILITY_MODES}")
        await self.page.get_by_text(current).click()
        await self.page.get_by_text(option).click()

    @property
    def min_value_input(self) -> Locator:
        return self.page.locator("input[type='number']")

    async def set_min_customer_value(self, value: int | float | str) -> None:
        await self.page.wait_for_selector("input[type='number']", timeout=settings.reveal_timeout_ms)
        await self.min_value_input.fill(str(value))

    # ---- host URL ---------------------------------------------------------------
    @property
    def host_url_input(self) -> Locator:
        return self.page.locator("#widgetHost")

    async def set_host_url(self, url: str) -> None:
        await self.host_url_input.clear()
        await self.host_url_input.fill(url)

    # ---- email response ---------------------------------------------------------
    @property
    def email_response_tabs(self) -> Locator:
        return (
            self.page.locator("div")
            .filter(has_text=self.EMAIL_RESPONSE_HEADING)
            .locator(".. >> div")
            .last
        )

    async def set_email_response(self, mode: str) -> None:
        if mode not in self.EMAIL_RESPONSE_MODES:
            raise ValueError(f"Unknown email response mode {mode!r}; expected one of {self.EMAIL_RESPONSE_MODES}")
        await self.email_response_tabs.get_by_text(mode).click()

    # ---- widget installation ----------------------------------------------------
    @property
    def code_block(self) -> Locator:
        return self.page.locator("code").first

    async def show_installation_tab(self, name: str) -> Locator:
        """Select an installation snippet tab and return its code block."""
        if name not in self.INSTALLATION_TABS:
            raise ValueError(f"Unknown installation tab {name!r}; expected one of {self.INSTALLATION_TABS}")
        await self.page.get_by_text(name).click()
        return self.code_block

    async def expand_guide(self, title: str) -> Locator:
        """Expand an installation guide accordion and return its marker text."""
        try:
            marker = self.INSTALLATION_GUIDES[title]
        except KeyError:
            raise ValueError(f"Unknown installation guide {title!r}") from None
        await self.page.get_by_text(title).click()
        return self.page.get_by_text(marker)
