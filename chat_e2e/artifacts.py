"""Failure artifacts for browser tests."""
from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Optional

from playwright.async_api import Page

from chat_e2e.config import settings

logger = logging.getLogger(__name__)


def screenshot_path(name: str, screenshot_dir: Optional[Path] = None) -> Optional[Path]:
    """Return where a screenshot called ``name`` goes, or None if disabled."""
    directory = screenshot_dir or settings.screenshot_dir
    if directory is None:
        return None
    safe_name = re.sub(r"[^A-Za-z0-9_.-]+", "_", name).strip("_")
    return directory / f"{safe_name}.png"


async def capture_failure_screenshot(page: Page, name: str) -> Optional[Path]:
    """Save a full-page PNG of ``page`` when ``SCREENSHOT_DIR`` is set."""
    path = screenshot_path(name)
    if path is None:
        return None
    path.parent.mkdir(parents=True, exist_ok=True)
    await page.screenshot(path=str(path), type="png", full_page=True)
    logger.info(f"Saved failure screenshot: {path}")
    return path


def node_failed(node) -> bool:
    """True when the setup or call phase of a pytest item failed.

    Relies on the ``rep_<phase>`` attributes set by the conftest
    ``pytest_runtest_makereport`` hook.
    """
    for phase in ("setup", "call"):
        report = getattr(node, f"rep_{phase}", None)
        if report is not None and report.failed:
            return True
    return False
