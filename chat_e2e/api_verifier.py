"""Capture and assert on the API traffic a page produces.

``ApiVerifier`` listens to a page's network events and records every
request under the API path prefix, together with its response status or
transport failure. Tests then assert that a given call happened:

    verifier = ApiVerifier(page)
    await verifier.start_capturing()
    ...
    await verifier.verify_mailbox_update_api_call()
"""
from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Pattern, Union
from urllib.parse import urlparse

import anyio
from playwright.async_api import Page, Request, Response

from chat_e2e.config import settings

logger = logging.getLogger(__name__)

UrlPattern = Union[str, Pattern[str]]

# Procedure that persists mailbox-level settings, chat settings included
MAILBOX_UPDATE_PROCEDURE = "mailbox.update"


@dataclass
class CapturedCall:
    """One API request seen on the page."""

    method: str
    url: str
    path: str
    post_data: Optional[str] = None
    resource_type: str = ""
    status: Optional[int] = None
    failure: Optional[str] = None

    @property
    def json_body(self) -> Any:
        if not self.post_data:
            return None
        try:
            return json.loads(self.post_data)
        except ValueError:
            return None

    @property
    def failed(self) -> bool:
        return self.failure is not None or (self.status is not None and self.status >= 400)

    def matches(self, pattern: UrlPattern, method: Optional[str] = None) -> bool:
        if method and self.method.upper() != method.upper():
            return False
        if isinstance(pattern, str):
            return pattern in self.url
        return pattern.search(self.url) is not None

    def __str__(self) -> str:
        outcome = self.failure or (self.status if self.status is not None else "pending")
        return f"{self.method} {self.url} -> {outcome}"


class ApiVerifier:
    """Record API calls made by ``page`` and verify them."""

    def __init__(self, page: Page, path_prefix: Optional[str] = None) -> None:
        self._page = page
        self.path_prefix = path_prefix or settings.api_path_prefix
        self._calls: List[CapturedCall] = []
        self._in_flight: Dict[Request, CapturedCall] = {}
        self._capturing = False

    # ---- capture lifecycle ------------------------------------------------------
    async def start_capturing(self) -> None:
        if self._capturing:
            return
        self._page.on("request", self._on_request)
        self._page.on("response", self._on_response)
        self._page.on("requestfailed", self._on_request_failed)
        self._capturing = True
        logger.debug(f"Capturing API calls under {self.path_prefix}")

    def stop_capturing(self) -> None:
        if not self._capturing:
            return
        self._page.remove_listener("request", self._on_request)
        self._page.remove_listener("response", self._on_response)
        self._page.remove_listener("requestfailed", self._on_request_failed)
        self._capturing = False

    def clear(self) -> None:
        self._calls.clear()
        self._in_flight.clear()

    @property
    def capturing(self) -> bool:
        return self._capturing

    @property
    def calls(self) -> List[CapturedCall]:
        return list(self._calls)

    # ---- event handlers ---------------------------------------------------------
    def _on_request(self, request: Request) -> None:
        path = urlparse(request.url).path
        if not path.startswith(self.path_prefix):
            return
        call = CapturedCall(
            method=request.method,
            url=request.url,
            path=path,
            post_data=request.post_data,
            resource_type=request.resource_type,
        )
        self._calls.append(call)
        self._in_flight[request] = call

    def _on_response(self, response: Response) -> None:
        call = self._in_flight.pop(response.request, None)
        if call is not None:
            call.status = response.status
            if call.failed:
                logger.warning(f"API call failed: {call}")

    def _on_request_failed(self, request: Request) -> None:
        call = self._in_flight.pop(request, None)
        if call is not None:
            call.failure = request.failure or "request failed"
            logger.warning(f"API call failed: {call}")

    # ---- queries and assertions -------------------------------------------------
    def find_calls(self, pattern: UrlPattern, method: Optional[str] = None) -> List[CapturedCall]:
        return [call for call in self._calls if call.matches(pattern, method)]

    def _summary(self) -> str:
        if not self._calls:
            return "no API calls captured"
        return "captured:\n" + "\n".join(f"  {call}" for call in self._calls)

    def verify_api_call(
        self,
        pattern: UrlPattern,
        method: Optional[str] = None,
        status: Optional[int] = None,
    ) -> CapturedCall:
        """Return the latest call matching ``pattern`` (and ``method``/``status``)."""
        matches = self.find_calls(pattern, method)
        if status is not None:
            matches = [call for call in matches if call.status == status]
        if not matches:
            wanted = f"{method or 'ANY'} {getattr(pattern, 'pattern', pattern)}"
            if status is not None:
                wanted += f" with status {status}"
            raise AssertionError(f"Expected API call {wanted}; {self._summary()}")
        return matches[-1]

    async def wait_for_api_call(
        self,
        pattern: UrlPattern,
        method: Optional[str] = None,
        timeout: Optional[float] = None,
        interval: float = 0.2,
    ) -> CapturedCall:
        """Poll until a matching call is captured.

        ``timeout`` is in seconds and defaults to the save timeout.
        """
        if timeout is None:
            timeout = settings.save_timeout_ms / 1000
        deadline = anyio.current_time() + timeout
        while anyio.current_time() <= deadline:
            matches = self.find_calls(pattern, method)
            if matches:
                return matches[-1]
            await anyio.sleep(interval)
        return self.verify_api_call(pattern, method)

    async def verify_mailbox_update_api_call(self, timeout: Optional[float] = None) -> CapturedCall:
        return await self.wait_for_api_call(MAILBOX_UPDATE_PROCEDURE, method="POST", timeout=timeout)

    def verify_no_failed_calls(self) -> None:
        failed = [call for call in self._calls if call.failed]
        if failed:
            raise AssertionError("Failed API calls:\n" + "\n".join(f"  {call}" for call in failed))
