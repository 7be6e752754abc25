"""
Direct Playwright Client
========================

Owns the Playwright lifecycle for one test: playwright driver, browser,
context and page. The context is created with ``base_url`` so pages can
navigate with application-relative paths (``page.goto("/settings/chat")``).

Usage:
    async with PlaywrightClient() as client:
        await client.page.goto("/settings/chat")
"""
from __future__ import annotations

import logging
from typing import Optional

from playwright.async_api import async_playwright, Browser, BrowserContext, Page, Playwright

from chat_e2e.config import BROWSER_TYPES, settings

logger = logging.getLogger(__name__)


class PlaywrightClient:
    """
    In-process Playwright client.

    Example:
        async with PlaywrightClient(headless=True) as client:
            page = client.page
            await page.goto("/settings/chat")
    """

    def __init__(
        self,
        browser_type: Optional[str] = None,
        headless: Optional[bool] = None,
        base_url: Optional[str] = None,
        timeout: Optional[int] = None,
    ):
        """
        Args:
            browser_type: chromium, firefox or webkit (default from settings)
            headless: Run in headless mode (default from settings)
            base_url: Application root used for relative navigation
            timeout: Default action timeout in milliseconds
        """
        self.browser_type = browser_type or settings.browser_type
        if self.browser_type not in BROWSER_TYPES:
            raise ValueError(f"Unsupported browser type: {self.browser_type}")
        self.headless = settings.playwright_headless if headless is None else headless
        self.base_url = base_url or settings.base_url
        self.timeout = timeout or settings.default_timeout_ms

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None
        self._page: Optional[Page] = None

    async def __aenter__(self) -> "PlaywrightClient":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def connect(self) -> None:
        """Launch the browser and open a context with one page."""
        self._playwright = await async_playwright().start()

        launcher = getattr(self._playwright, self.browser_type)
        self._browser = await launcher.launch(headless=self.headless)

        self._context = await self._browser.new_context(base_url=self.base_url)
        self._context.set_default_timeout(self.timeout)

        self._page = await self._context.new_page()
        logger.debug(f"Launched {self.browser_type} (headless={self.headless}) for {self.base_url}")

    async def close(self) -> None:
        """Close all connections and cleanup resources."""
        if self._page:
            await self._page.close()
            self._page = None

        if self._context:
            await self._context.close()
            self._context = None

        if self._browser:
            await self._browser.close()
            self._browser = None

        if self._playwright:
            await self._playwright.stop()
            self._playwright = None

    @property
    def browser(self) -> Browser:
        if not self._browser:
            raise RuntimeError("Client not connected. Use 'async with' or call connect()")
        return self._browser

    @property
    def context(self) -> BrowserContext:
        if not self._context:
            raise RuntimeError("Client not connected. Use 'async with' or call connect()")
        return self._context

    @property
    def page(self) -> Page:
        if not self._page:
            raise RuntimeError("Client not connected or page not created")
        return self._page
