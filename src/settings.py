"""Static configuration for renewbot.

Non-secret settings (property names, notification title, logging) live in an
optional config.json so a database with different column names can be used
without touching Python. Secrets stay in the environment / .env file.
"""

import json
import os

from dotenv import load_dotenv

from core.config import DEFAULT_SERVERCHAN_BASE_URL, RecordSchema
from core.message import DEFAULT_NOTIFICATION_TITLE

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))

CONFIG_PATH = os.environ.get("RENEWBOT_CONFIG", os.path.join(PROJECT_ROOT, "config.json"))


def _load_json_config() -> dict:
    """Load config.json if present; every key has a default."""

    if not os.path.exists(CONFIG_PATH):
        return {}

    with open(CONFIG_PATH, "r", encoding="utf-8") as handle:
        return json.load(handle)


load_dotenv()

_CONFIG = _load_json_config()

# Property names and status value used to select subscription records.
SCHEMA = RecordSchema.from_dict(_CONFIG.get("schema"))

_notifications = _CONFIG.get("notifications", {})
NOTIFICATION_TITLE = _notifications.get("title", DEFAULT_NOTIFICATION_TITLE)
SERVERCHAN_BASE_URL = _notifications.get("serverchan_base_url", DEFAULT_SERVERCHAN_BASE_URL)

DATABASE_ID = os.getenv("NOTION_DATABASE_ID", "").strip()

# Logging configuration (optional).
LOGGING = _CONFIG.get("logging", {})
