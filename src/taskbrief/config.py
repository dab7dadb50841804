"""Configuration management for taskbrief."""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from .core.enrichment import DEFAULT_CATEGORIES

logger = logging.getLogger(__name__)

TASKBRIEF_HOME = Path(os.environ.get("TASKBRIEF_HOME", Path.home() / "taskbrief"))
CONFIG_FILE = TASKBRIEF_HOME / "config" / "taskbrief.conf"
TOKEN_FILE = TASKBRIEF_HOME / "config" / ".google_token.json"
CONTEXT_DIR = TASKBRIEF_HOME / "context"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass
class Config:
    """taskbrief configuration."""

    openai_api_key: str = ""
    openai_model: str = "gpt-5-mini"
    google_client_id: str = ""
    google_client_secret: str = ""
    google_refresh_token: str = ""
    google_client_secret_file: str = ""
    category_list: list[str] = field(default_factory=lambda: list(DEFAULT_CATEGORIES))
    summary_enabled: bool = True
    summary_include_completed: bool = False
    summary_max_tasks: int = 0
    summary_time: str = "07:00"
    summary_chat_id: str = ""
    timezone: str = "UTC"
    # Telegram bot settings
    telegram_bot_token: str = ""
    telegram_allowed_users: list[int] = field(default_factory=list)
    context_dir: str = ""

    @property
    def context_path(self) -> Path:
        if self.context_dir:
            return Path(self.context_dir).expanduser()
        return CONTEXT_DIR


def _parse_bool(key: str, value: str, default: bool) -> bool:
    lowered = value.lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    logger.warning(f"Invalid boolean for {key.upper()}: {value!r}")
    return default


def _parse_int(key: str, value: str, default: int) -> int:
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Invalid integer for {key.upper()}: {value!r}")
        return default


def _parse_categories(value: str, default: list[str]) -> list[str]:
    # JSON format: ["Finance", "HR"]
    # Simple format: Finance, HR
    if value.startswith("["):
        try:
            data = json.loads(value)
        except json.JSONDecodeError as e:
            logger.warning(f"Failed to parse CATEGORY_LIST JSON: {e}")
            return default
        if not isinstance(data, list):
            logger.warning("CATEGORY_LIST JSON must be an array")
            return default
        return [str(c) for c in data]
    return [c.strip() for c in value.split(",") if c.strip()]


def _unquote(value: str) -> str:
    # Handle quoted values with inline comments: "value" # comment
    if value.startswith('"') or value.startswith("'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        if end_quote != -1:
            return value[1:end_quote]
        return value[1:]
    # Unquoted: strip inline comments
    if "#" in value:
        return value.split("#")[0].strip()
    return value


def load_config(path: Path | None = None) -> Config:
    """Load configuration from taskbrief.conf file."""
    config = Config()
    path = path or CONFIG_FILE

    if not path.exists():
        return config

    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        match key:
            case "openai_api_key":
                config.openai_api_key = value
            case "openai_model":
                config.openai_model = value or config.openai_model
            case "google_client_id":
                config.google_client_id = value
            case "google_client_secret":
                config.google_client_secret = value
            case "google_refresh_token":
                config.google_refresh_token = value
            case "google_client_secret_file":
                config.google_client_secret_file = value
            case "category_list":
                config.category_list = _parse_categories(value, config.category_list)
            case "summary_enabled":
                config.summary_enabled = _parse_bool(key, value, config.summary_enabled)
            case "summary_include_completed":
                config.summary_include_completed = _parse_bool(key, value, config.summary_include_completed)
            case "summary_max_tasks":
                config.summary_max_tasks = _parse_int(key, value, config.summary_max_tasks)
            case "summary_time":
                config.summary_time = value
            case "summary_chat_id":
                config.summary_chat_id = value
            case "timezone":
                config.timezone = value
            case "telegram_bot_token":
                config.telegram_bot_token = value
            case "telegram_allowed_users":
                users = []
                for u in value.split(","):
                    if not u.strip():
                        continue
                    try:
                        users.append(int(u.strip()))
                    except ValueError:
                        logger.warning(f"Ignoring invalid Telegram user id: {u.strip()!r}")
                config.telegram_allowed_users = users
            case "context_dir":
                config.context_dir = value
            case _:
                logger.debug(f"Unknown config key: {key}")

    return config
