"""Notification dispatcher.

Sends one consolidated message to every configured channel at once. Channels
are independent: an unconfigured channel is skipped, and a failing channel
only produces a failed result for itself.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

import aiohttp

from adapters.serverchan_channel import ServerChanChannel
from adapters.telegram_channel import TelegramBotChannel
from core.config import ChannelConfig
from core.models import Outcome, UnitResult

LOGGER = logging.getLogger(__name__)

DEFAULT_TIMEOUT = aiohttp.ClientTimeout(total=20)


class NotificationDispatcher:
    """Fans a message out to Telegram and ServerChan. Satisfies DispatcherPort."""

    def __init__(
        self,
        *,
        session: Optional[aiohttp.ClientSession] = None,
        timeout: aiohttp.ClientTimeout = DEFAULT_TIMEOUT,
    ) -> None:
        self._own_session = session is None
        self._session = session
        self._timeout = timeout

    def _get_session(self) -> aiohttp.ClientSession:
        # Created lazily so the session binds to the running event loop.
        if self._session is None:
            self._session = aiohttp.ClientSession(timeout=self._timeout)
        return self._session

    async def close(self) -> None:
        if self._own_session and self._session is not None and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> "NotificationDispatcher":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    def build_channels(self, config: ChannelConfig) -> tuple[list, list[UnitResult]]:
        """Return (configured channels, skipped results for unconfigured ones)."""

        channels = []
        skipped: list[UnitResult] = []
        if config.telegram_url:
            channels.append(TelegramBotChannel(self._get_session(), config.telegram_url))
        else:
            skipped.append(UnitResult(TelegramBotChannel.name, Outcome.SKIPPED, "not configured"))
        if config.serverchan_token:
            channels.append(
                ServerChanChannel(self._get_session(), config.serverchan_token, config.serverchan_base_url)
            )
        else:
            skipped.append(UnitResult(ServerChanChannel.name, Outcome.SKIPPED, "not configured"))
        return channels, skipped

    async def dispatch(self, title: str, body: str, config: ChannelConfig) -> list[UnitResult]:
        """Send to all configured channels concurrently. Never raises."""

        channels, results = self.build_channels(config)
        if not channels:
            LOGGER.info("No notification channel configured, nothing sent")
            return results

        outcomes = await asyncio.gather(
            *(channel.send(title, body) for channel in channels),
            return_exceptions=True,
        )
        for channel, outcome in zip(channels, outcomes):
            if isinstance(outcome, BaseException):
                LOGGER.error("[Notification - %s] Unexpected error: %r", channel.name, outcome)
                outcome = UnitResult(channel.name, Outcome.FAILED, repr(outcome))
            results.append(outcome)
        return results
