"""Application entry point for the renewbot reminder cycle."""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Iterable, Optional
from urllib.parse import urlsplit

import settings
from adapters.dispatcher import NotificationDispatcher
from adapters.notion_store import NotionRecordStore
from adapters.telegram_channel import mask_bot_token
from client import build_notion_client
from core.aggregator import ReminderAggregator
from core.config import ChannelConfig
from core.models import RunSummary
from core.resetter import RenewalFlagResetter

SECRET_ENV_NAMES = ("NOTION_TOKEN", "TELEGRAM_URL", "SERVERCHAN_TOKEN")
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


class _RedactingFormatter(logging.Formatter):
    """Masks configured secrets and Bot API token segments in every record."""

    def __init__(self, secrets: Iterable[str]) -> None:
        super().__init__(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)
        # Longest first so a full URL is masked before the token inside it.
        self._secrets = sorted({secret for secret in secrets if secret}, key=len, reverse=True)

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        for secret in self._secrets:
            message = message.replace(secret, "***")
        return mask_bot_token(message)


def _secret_values(redact_cfg: dict) -> list[str]:
    """Return the values of the named environment variables to mask."""

    if not redact_cfg.get("enabled", True):
        return []
    values = []
    for name in redact_cfg.get("patterns", SECRET_ENV_NAMES):
        value = (os.getenv(name) or "").strip()
        if not value:
            continue
        values.append(value)
        # The bot token also shows up on its own once the query is stripped.
        for segment in urlsplit(value).path.split("/"):
            if segment.startswith("bot") and len(segment) > 3:
                values.extend([segment, segment[3:]])
    return values


def _log_file_handler(file_cfg: dict) -> RotatingFileHandler:
    path = file_cfg.get("path", "logs/renewbot.log")
    if not os.path.isabs(path):
        path = os.path.join(settings.PROJECT_ROOT, path)
    os.makedirs(os.path.dirname(path), exist_ok=True)
    return RotatingFileHandler(
        path,
        maxBytes=int(file_cfg.get("max_bytes", 5 * 1024 * 1024)),
        backupCount=int(file_cfg.get("backup_count", 5)),
        encoding="utf-8",
    )


def _configure_logging() -> None:
    config = settings.LOGGING or {}
    if not config.get("enabled", True):
        return

    level = getattr(logging, str(config.get("level", "INFO")).upper(), logging.INFO)

    handlers: list[logging.Handler] = []
    if config.get("console", True):
        handlers.append(logging.StreamHandler())
    file_cfg = config.get("file", {})
    if file_cfg.get("enabled", False):
        handlers.append(_log_file_handler(file_cfg))
    if not handlers:
        return

    formatter = _RedactingFormatter(_secret_values(config.get("redact", {})))
    for handler in handlers:
        handler.setFormatter(formatter)
    logging.basicConfig(level=level, handlers=handlers)


async def run_cycle(command: str) -> list[RunSummary]:
    """Run the requested workflow(s) against the configured database."""

    if not settings.DATABASE_ID:
        raise RuntimeError("Missing NOTION_DATABASE_ID in environment")

    client = build_notion_client()
    store = NotionRecordStore(client)
    channels = ChannelConfig.from_env(os.environ, serverchan_base_url=settings.SERVERCHAN_BASE_URL)
    summaries: list[RunSummary] = []

    async with NotificationDispatcher() as dispatcher:
        try:
            if command in {"reset", "run"}:
                resetter = RenewalFlagResetter(store, settings.DATABASE_ID, settings.SCHEMA)
                summaries.append(await resetter.run())
            if command in {"remind", "run"}:
                aggregator = ReminderAggregator(
                    store,
                    settings.DATABASE_ID,
                    dispatcher,
                    settings.SCHEMA,
                    title=settings.NOTIFICATION_TITLE,
                )
                summaries.append(await aggregator.run(channels))
        finally:
            await client.aclose()
    return summaries


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog="renewbot")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("reset", help="Clear the renewed flag on subscriptions out of the reminder cycle")
    subparsers.add_parser("remind", help="Send one consolidated renewal reminder")
    subparsers.add_parser("run", help="Reset, then remind (default)")

    args = parser.parse_args(argv)
    _configure_logging()
    logger = logging.getLogger(__name__)

    command = args.command or "run"
    logger.info("Starting renewbot (%s)", command)
    for summary in asyncio.run(run_cycle(command)):
        logger.info("%s", summary.describe())


if __name__ == "__main__":
    main()
