"""Telegram Bot API notification channel.

The channel is configured with a full sendMessage URL that carries the
recipient as a query parameter, e.g.
``https://api.telegram.org/bot<TOKEN>/sendMessage?chat_id=<CHAT_ID>``.
"""

from __future__ import annotations

import asyncio
import logging
import re
from typing import Optional, Tuple
from urllib.parse import parse_qs, urlsplit

import aiohttp

from adapters.http_errors import describe_failure
from core.models import Outcome, UnitResult

LOGGER = logging.getLogger(__name__)

_BOT_TOKEN_SEGMENT = re.compile(r"/bot[^/?#\s'\"]+")


def mask_bot_token(text: str) -> str:
    """Hide the bot<TOKEN> path segment of Bot API URLs."""

    return _BOT_TOKEN_SEGMENT.sub("/bot***", text)


def split_bot_url(url: str) -> Tuple[str, Optional[str]]:
    """Return (post endpoint without query, chat_id or None)."""

    parts = urlsplit(url)
    endpoint = f"{parts.scheme}://{parts.netloc}{parts.path}"
    chat_ids = parse_qs(parts.query).get("chat_id") or []
    chat_id = chat_ids[0].strip() if chat_ids else ""
    return endpoint, chat_id or None


class TelegramBotChannel:
    """Sends the consolidated reminder through a Telegram bot."""

    name = "telegram"

    def __init__(self, session: aiohttp.ClientSession, url: str) -> None:
        self._session = session
        self._url = url

    async def send(self, title: str, body: str) -> UnitResult:
        endpoint, chat_id = split_bot_url(self._url)
        if not chat_id:
            reason = "chat_id not found in TELEGRAM_URL; expected ?chat_id=<id>"
            LOGGER.error("[Notification - Telegram] Configuration error: %s", reason)
            return UnitResult(self.name, Outcome.FAILED, reason)

        payload = {
            "chat_id": chat_id,
            "text": f"{title}\n{body}",
            "parse_mode": "Markdown",
        }
        try:
            async with self._session.post(endpoint, json=payload) as resp:
                if resp.status >= 400:
                    reason = await describe_failure(resp)
                    LOGGER.error("[Notification - Telegram] Failed to send: %s", reason)
                    return UnitResult(self.name, Outcome.FAILED, reason)
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            reason = mask_bot_token(repr(exc))
            LOGGER.error("[Notification - Telegram] Error sending notification: %s", reason)
            return UnitResult(self.name, Outcome.FAILED, reason)

        LOGGER.info("[Notification - Telegram] Consolidated message sent successfully.")
        return UnitResult(self.name, Outcome.SUCCESS)
