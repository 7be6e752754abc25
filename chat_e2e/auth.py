"""Log a browser page into the application as a named role."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from urllib.parse import urlparse

from playwright.async_api import Page, TimeoutError as PlaywrightTimeout

from chat_e2e.auth_state import clear_auth_state, load_auth_state, save_auth_state
from chat_e2e.config import settings

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class AuthError(Exception):
    """Raised when a role cannot be logged in."""

    role: str
    url: str
    message: str

    def __str__(self) -> str:
        return f"login as {self.role} failed at {self.url}: {self.message}"


def _on_login_page(url: str) -> bool:
    """True when the path of ``url`` is the login path or below it."""
    login_path = settings.login_path.rstrip("/") or "/"
    path = urlparse(url).path.rstrip("/") or "/"
    if path == login_path:
        return True
    return login_path != "/" and path.startswith(login_path + "/")


async def _restore_session(page: Page, role: str) -> bool:
    if not await load_auth_state(page.context, role):
        return False
    await page.goto("/", wait_until="domcontentloaded")
    if _on_login_page(page.url):
        logger.info(f"Saved {role} session expired, logging in again")
        clear_auth_state(role)
        return False
    return True


async def login_as(page: Page, role: str, force_login: bool = False) -> None:
    """Authenticate ``page`` as ``role``.

    Saved storage state is tried first; the login form is only used when
    there is none or it no longer grants a session. ``force_login`` skips
    the saved state.
    """
    credentials = settings.credentials_for(role)
    if not credentials.complete:
        raise AuthError(
            role=role,
            url=page.url,
            message=f"set UI_{role.upper()}_EMAIL and UI_{role.upper()}_PASSWORD",
        )

    if not force_login and await _restore_session(page, role):
        logger.debug(f"Reused saved session for {role}")
        return

    await page.goto(settings.login_path)
    await page.fill(settings.login_email_selector, credentials.email)
    await page.fill(settings.login_password_selector, credentials.password)
    await page.click(settings.login_submit_selector)

    try:
        await page.wait_for_url(lambda url: not _on_login_page(url))
    except PlaywrightTimeout as exc:
        raise AuthError(role=role, url=page.url, message=f"still on login page ({exc})") from exc

    await save_auth_state(page.context, role)
    logger.info(f"Logged in as {role} ({credentials.email})")
