"""Consolidated reminder message building.

Formatting lives here so every channel receives the same body regardless of
delivery transport.
"""

from __future__ import annotations

from typing import Iterable, Optional

from core.models import ConsolidatedMessage, Record

DEFAULT_NOTIFICATION_TITLE = "🔔 Subscription renewal reminder"
TITLE_PLACEHOLDER = "title unavailable"


def extract_title(record: Record, title_property: str) -> str:
    """Return the first text span of the title property, or the placeholder."""

    prop = record.get_property(title_property)
    if not prop or prop.get("type") != "title":
        return TITLE_PLACEHOLDER

    spans = prop.get("title")
    if not isinstance(spans, list) or not spans:
        return TITLE_PLACEHOLDER

    first = spans[0]
    text: Optional[str] = first.get("plain_text") if isinstance(first, dict) else None
    if not text:
        return TITLE_PLACEHOLDER
    return text


def format_header(count: int) -> str:
    noun = "subscription" if count == 1 else "subscriptions"
    verb = "needs" if count == 1 else "need"
    return f"You have {count} {noun} that {verb} attention:\n"


def build_consolidated_message(titles: Iterable[str]) -> ConsolidatedMessage:
    """Build the reminder body from titles, keeping their order."""

    lines = tuple(f"- {title}" for title in titles)
    return ConsolidatedMessage(header=format_header(len(lines)), lines=lines)
