"""
Authentication state persistence for browser sessions.

Saves Playwright storage state (cookies, localStorage) per role so later
tests can skip the login form. Files are keyed by application host and
role, so switching ``UI_BASE_URL`` never reuses another deployment's
cookies.
"""
from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

from playwright.async_api import BrowserContext

from chat_e2e.config import settings

logger = logging.getLogger(__name__)


def get_auth_state_path(role: str, base_url: Optional[str] = None, state_dir: Optional[Path] = None) -> Path:
    """Return the storage state file used for ``role`` on ``base_url``."""
    host = urlparse(base_url or settings.base_url).netloc or "default"
    host = re.sub(r"[^A-Za-z0-9.-]+", "_", host)
    return (state_dir or settings.auth_state_dir) / f"{host}_{role}_auth_state.json"


async def save_auth_state(context: BrowserContext, role: str, state_dir: Optional[Path] = None) -> Path:
    """Save the context's storage state after a successful login.

    Returns:
        Path to saved state file
    """
    state_file = get_auth_state_path(role, state_dir=state_dir)
    state_file.parent.mkdir(parents=True, exist_ok=True)
    await context.storage_state(path=str(state_file))
    logger.info(f"Saved {role} auth state to {state_file}")
    return state_file


async def load_auth_state(context: BrowserContext, role: str, state_dir: Optional[Path] = None) -> bool:
    """Load saved cookies for ``role`` into ``context``.

    Returns:
        True if cookies were loaded, False if no usable state exists
    """
    state_file = get_auth_state_path(role, state_dir=state_dir)
    if not state_file.exists():
        return False

    try:
        with open(state_file, encoding="utf-8") as f:
            state = json.load(f)
    except json.JSONDecodeError:
        logger.warning(f"Ignoring corrupt auth state file: {state_file}")
        return False

    cookies = state.get("cookies") or []
    if not cookies:
        return False

    await context.add_cookies(cookies)
    logger.debug(f"Loaded {len(cookies)} cookies from {state_file}")
    return True


def clear_auth_state(role: str, state_dir: Optional[Path] = None) -> None:
    """Delete saved authentication state for ``role``."""
    state_file = get_auth_state_path(role, state_dir=state_dir)
    if state_file.exists():
        state_file.unlink()
        logger.info(f"Cleared {role} auth state: {state_file}")
