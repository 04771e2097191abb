"""Notion client factory for renewbot."""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv
from notion_client import AsyncClient


def build_notion_client() -> AsyncClient:
    """Create an async Notion client from environment variables.

    We read NOTION_TOKEN via python-dotenv to keep secrets out of the repo.
    """

    load_dotenv()

    token = (os.getenv("NOTION_TOKEN") or "").strip()

    # Fail fast on missing credentials instead of a 401 on the first query.
    if not token:
        raise RuntimeError("Missing NOTION_TOKEN in environment")

    logging.getLogger(__name__).info("Initializing Notion client")

    return AsyncClient(auth=token)
