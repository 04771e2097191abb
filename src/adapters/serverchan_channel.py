"""ServerChan push notification channel."""

from __future__ import annotations

import asyncio
import logging

import aiohttp

from adapters.http_errors import describe_failure
from core.models import Outcome, UnitResult

LOGGER = logging.getLogger(__name__)

# ServerChan rejects longer titles.
MAX_TITLE_CHARS = 100


class ServerChanChannel:
    """Pushes the consolidated reminder through ServerChan."""

    name = "serverchan"

    def __init__(self, session: aiohttp.ClientSession, token: str, base_url: str) -> None:
        self._session = session
        self._token = token
        self._base_url = base_url.rstrip("/")

    def endpoint(self) -> str:
        return f"{self._base_url}/{self._token}.send"

    async def send(self, title: str, body: str) -> UnitResult:
        form = {"title": title[:MAX_TITLE_CHARS], "desp": body}
        try:
            async with self._session.post(self.endpoint(), data=form) as resp:
                if resp.status >= 400:
                    reason = await describe_failure(resp)
                    LOGGER.error("[Notification - ServerChan] Failed to send: %s", reason)
                    return UnitResult(self.name, Outcome.FAILED, reason)
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            LOGGER.error("[Notification - ServerChan] Network or other error: %r", exc)
            return UnitResult(self.name, Outcome.FAILED, repr(exc))

        LOGGER.info("[Notification - ServerChan] Consolidated message sent successfully.")
        return UnitResult(self.name, Outcome.SUCCESS)
