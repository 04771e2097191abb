"""Core configuration dataclasses.

We keep config parsing outside the core, but these dataclasses define the
shape the core expects so adapters and app layers can build safely.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_SERVERCHAN_BASE_URL = "https://sctapi.ftqq.com"


def _clean(value: Optional[str]) -> Optional[str]:
    # Blank and whitespace-only values count as absent.
    if value is None:
        return None
    value = value.strip()
    return value or None


@dataclass(frozen=True)
class RecordSchema:
    """Property names and status value shared by both workflows."""

    status_property: str = "subscriptionStatus"
    reminder_property: str = "needsReminder"
    renewed_property: str = "alreadyRenewed"
    title_property: str = "name"
    manual_status: str = "manually subscribing"

    @classmethod
    def from_dict(cls, raw: Optional[Mapping[str, str]]) -> "RecordSchema":
        """Build a schema from config.json, keeping defaults for missing keys."""

        raw = raw or {}
        defaults = cls()
        return cls(
            status_property=raw.get("status_property", defaults.status_property),
            reminder_property=raw.get("reminder_property", defaults.reminder_property),
            renewed_property=raw.get("renewed_property", defaults.renewed_property),
            title_property=raw.get("title_property", defaults.title_property),
            manual_status=raw.get("manual_status", defaults.manual_status),
        )


@dataclass(frozen=True)
class ChannelConfig:
    """Per-channel delivery settings resolved once per run."""

    telegram_url: Optional[str] = None
    serverchan_token: Optional[str] = None
    serverchan_base_url: str = DEFAULT_SERVERCHAN_BASE_URL

    def __post_init__(self) -> None:
        object.__setattr__(self, "telegram_url", _clean(self.telegram_url))
        object.__setattr__(self, "serverchan_token", _clean(self.serverchan_token))
        base_url = _clean(self.serverchan_base_url) or DEFAULT_SERVERCHAN_BASE_URL
        object.__setattr__(self, "serverchan_base_url", base_url.rstrip("/"))

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str],
        serverchan_base_url: str = DEFAULT_SERVERCHAN_BASE_URL,
    ) -> "ChannelConfig":
        return cls(
            telegram_url=environ.get("TELEGRAM_URL"),
            serverchan_token=environ.get("SERVERCHAN_TOKEN"),
            serverchan_base_url=serverchan_base_url,
        )
