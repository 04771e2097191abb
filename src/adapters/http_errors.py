"""Shared helpers for describing failed HTTP responses."""

from __future__ import annotations

import json

import aiohttp


async def describe_failure(resp: aiohttp.ClientResponse) -> str:
    """Return "<status> <reason> - <body>", with the body re-encoded when it is JSON."""

    summary = f"{resp.status} {resp.reason or ''}".strip()
    try:
        text = await resp.text()
    except (aiohttp.ClientError, UnicodeDecodeError):
        return summary
    if not text:
        return summary
    try:
        body = json.dumps(json.loads(text), ensure_ascii=False)
    except ValueError:
        body = text
    return f"{summary} - {body}"
