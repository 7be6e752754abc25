"""Decide whether browser tests can run against the configured application."""
from __future__ import annotations

import logging
from typing import Optional

import httpx

from chat_e2e.config import UiTestConfig, settings

logger = logging.getLogger(__name__)


def e2e_skip_reason(cfg: Optional[UiTestConfig] = None, timeout: float = 5.0) -> Optional[str]:
    """Return why browser tests must be skipped, or None when they can run.

    Any HTTP answer from the base URL counts as reachable; only transport
    errors (refused connection, DNS failure, timeout) do not.
    """
    cfg = cfg or settings
    try:
        httpx.get(cfg.base_url, timeout=timeout, follow_redirects=True)
    except httpx.HTTPError as exc:
        return f"Application not reachable at {cfg.base_url}: {exc}"

    if not cfg.credentials_for("admin").complete:
        return "Admin credentials not configured - set UI_ADMIN_EMAIL and UI_ADMIN_PASSWORD"

    logger.debug(f"Application reachable at {cfg.base_url}")
    return None
