import httpx
import pytest

from chat_e2e import preflight
from chat_e2e.config import RoleCredentials, settings
from chat_e2e.preflight import e2e_skip_reason


@pytest.fixture
def admin_configured(monkeypatch):
    monkeypatch.setitem(
        settings._credentials,
        "admin",
        RoleCredentials(role="admin", email="admin@example.com", password="secret"),
    )


def _reachable(url, **kwargs):
    return httpx.Response(302, request=httpx.Request("GET", url))


def _refused(url, **kwargs):
    raise httpx.ConnectError("Connection refused", request=httpx.Request("GET", url))


def test_runs_when_app_up_and_admin_configured(monkeypatch, admin_configured):
    monkeypatch.setattr(preflight.httpx, "get", _reachable)

    assert e2e_skip_reason(settings) is None


def test_skips_when_app_unreachable(monkeypatch, admin_configured):
    monkeypatch.setattr(preflight.httpx, "get", _refused)

    reason = e2e_skip_reason(settings)

    assert reason.startswith(f"Application not reachable at {settings.base_url}")
    assert "Connection refused" in reason


def test_skips_when_admin_credentials_missing(monkeypatch):
    monkeypatch.setattr(preflight.httpx, "get", _reachable)
    monkeypatch.setitem(settings._credentials, "admin", RoleCredentials(role="admin", email="admin@example.com", password=""))

    assert "UI_ADMIN_EMAIL" in e2e_skip_reason(settings)


def test_probes_the_configured_base_url(monkeypatch, admin_configured):
    seen = []

    def recording_get(url, **kwargs):
        seen.append((url, kwargs))
        return _reachable(url)

    monkeypatch.setattr(preflight.httpx, "get", recording_get)

    e2e_skip_reason(settings, timeout=1.5)

    assert seen == [(settings.base_url, {"timeout": 1.5, "follow_redirects": True})]
