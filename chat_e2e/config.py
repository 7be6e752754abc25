"""Shared configuration for the Chat Settings E2E suite.

Values are resolved in this order:
1. Environment variables (``UI_BASE_URL``, ``UI_ADMIN_EMAIL``, ...)
2. ``.env.defaults`` at the repository root
3. Built-in defaults below

Credentials are never defaulted: browser tests skip when the admin
credentials are missing.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Literal, Optional, Tuple, get_args
from urllib.parse import urljoin

from chat_e2e.env_defaults import get_env_default

Role = Literal["admin", "member"]
BrowserType = Literal["chromium", "firefox", "webkit"]

ROLES: Tuple[str, ...] = get_args(Role)
BROWSER_TYPES: Tuple[str, ...] = get_args(BrowserType)

REPO_ROOT = Path(__file__).resolve().parents[1]

_TRUTHY = {"1", "true", "yes", "on"}


def _env(key: str, default: str = "") -> str:
    value = os.getenv(key)
    if value is None or value == "":
        value = get_env_default(key)
    if value is None or value == "":
        return default
    return value


def _env_bool(key: str, default: bool) -> bool:
    raw = _env(key, "true" if default else "false")
    return raw.strip().lower() in _TRUTHY


def _env_ms(key: str, default: int) -> int:
    raw = _env(key, str(default))
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{key} must be an integer number of milliseconds, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{key} must be positive, got {value}")
    return value


@dataclass
class RoleCredentials:
    """Login credentials for one application role."""

    role: str
    email: str
    password: str

    @property
    def complete(self) -> bool:
        return bool(self.email and self.password)


class UiTestConfig:
    """Configuration for one run of the suite.

    Instantiate directly in tests that need a fresh view of the
    environment; everything else uses the module-level ``settings``.
    """

    def __init__(self) -> None:
        self.base_url: str = _env("UI_BASE_URL", "http://localhost:3000")

        self.playwright_headless: bool = _env_bool("PLAYWRIGHT_HEADLESS", True)
        self.browser_type: str = _env("PLAYWRIGHT_BROWSER", "chromium").lower()
        if self.browser_type not in BROWSER_TYPES:
            raise ValueError(
                f"PLAYWRIGHT_BROWSER must be one of {', '.join(BROWSER_TYPES)}, got {self.browser_type!r}"
            )

        # Playwright timeouts are milliseconds
        self.default_timeout_ms: int = _env_ms("UI_DEFAULT_TIMEOUT_MS", 30000)
        self.save_timeout_ms: int = _env_ms("UI_SAVE_TIMEOUT_MS", 10000)
        self.reveal_timeout_ms: int = _env_ms("UI_REVEAL_TIMEOUT_MS", 5000)

        self.login_path: str = _env("UI_LOGIN_PATH", "/login")
        self.login_email_selector: str = _env("UI_LOGIN_EMAIL_SELECTOR", "input[type='email']")
        self.login_password_selector: str = _env("UI_LOGIN_PASSWORD_SELECTOR", "input[type='password']")
        self.login_submit_selector: str = _env("UI_LOGIN_SUBMIT_SELECTOR", "button[type='submit']")

        self.api_path_prefix: str = _env("UI_API_PATH_PREFIX", "/api/")
        self.verify_api_calls: bool = _env_bool("UI_VERIFY_API_CALLS", False)

        auth_state_dir = Path(_env("UI_AUTH_STATE_DIR", "tmp/auth-states"))
        if not auth_state_dir.is_absolute():
            auth_state_dir = REPO_ROOT / auth_state_dir
        self.auth_state_dir: Path = auth_state_dir

        screenshot_dir = _env("SCREENSHOT_DIR")
        self.screenshot_dir: Optional[Path] = Path(screenshot_dir) if screenshot_dir else None

        self._credentials: Dict[str, RoleCredentials] = {
            role: RoleCredentials(
                role=role,
                email=_env(f"UI_{role.upper()}_EMAIL"),
                password=_env(f"UI_{role.upper()}_PASSWORD"),
            )
            for role in ROLES
        }

        print(f"[CONFIG] base_url={self.base_url} browser={self.browser_type} headless={self.playwright_headless}")

    # ---- credentials ------------------------------------------------------------
    def credentials_for(self, role: str) -> RoleCredentials:
        """Return the credentials configured for ``role``."""
        try:
            return self._credentials[role]
        except KeyError:
            raise ValueError(f"Unknown role {role!r}; expected one of {', '.join(ROLES)}") from None

    # ---- utility helpers --------------------------------------------------------
    def url(self, path: str) -> str:
        """Return an absolute URL for the provided path."""
        return urljoin(self.base_url.rstrip("/") + "/", path.lstrip("/"))


# Singleton instance - initialized on first import
settings = UiTestConfig()
