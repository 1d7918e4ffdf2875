"""Configuration loader."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

import yaml
from dotenv import load_dotenv

from .errors import ConfigError

LOGGER = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path("~/.cogdispatch").expanduser()
ENV_FILE_NAME = ".env"
BOT_FILE = "bot.yaml"
DEFAULT_PREFIX = "."


@dataclass(frozen=True)
class Config:
    prefix: str
    slack_bot_token: str
    slack_app_token: str
    slack_allowed_user_ids: list[str]
    config_dir: Path
    permissions: Dict[str, list[str]] = field(default_factory=dict)


def resolve_config_dir(config_dir: Path | str | None) -> Path:
    """Resolve and validate the directory containing .env + bot.yaml."""
    target = (
        Path(config_dir).expanduser() if config_dir else DEFAULT_CONFIG_DIR
    ).resolve()
    if not target.exists():
        raise ConfigError(
            f"Config directory {target} does not exist. "
            "Create it and add .env and bot.yaml."
        )
    if not target.is_dir():
        raise ConfigError(f"Config directory {target} is not a directory")
    return target


def load_config(config_dir: Path | str | None = None) -> Config:
    """Load bot configuration from the provided or default directory."""
    root = resolve_config_dir(config_dir)
    _load_env_file(root / ENV_FILE_NAME)
    settings = _load_bot_settings(root / BOT_FILE)

    config = Config(
        prefix=resolve_prefix(settings),
        slack_bot_token=_require_env("SLACK_BOT_TOKEN"),
        slack_app_token=_require_env("SLACK_APP_TOKEN"),
        slack_allowed_user_ids=_load_allowed_user_ids(),
        config_dir=root,
        permissions=_load_permissions(settings),
    )
    LOGGER.info("Using command prefix %r", config.prefix)
    return config


def resolve_prefix(settings: Dict[str, Any]) -> str:
    """Pick the command prefix: env var, then bot.yaml, then the default."""
    raw = os.getenv("COMMAND_PREFIX")
    if raw is None:
        raw = settings.get("prefix", DEFAULT_PREFIX)
    if not isinstance(raw, str) or not raw:
        raise ConfigError(f"Command prefix must be a non-empty string, got {raw!r}")
    if any(ch.isspace() for ch in raw):
        raise ConfigError(f"Command prefix may not contain whitespace: {raw!r}")
    return raw


def _load_permissions(settings: Dict[str, Any]) -> Dict[str, list[str]]:
    """Read the `permissions` mapping of Slack user id to permission names."""
    raw = settings.get("permissions") or {}
    if not isinstance(raw, dict):
        raise ConfigError("permissions in bot.yaml must map user ids to lists")
    permissions: Dict[str, list[str]] = {}
    for user_id, names in raw.items():
        if isinstance(names, str):
            names = [names]
        if not isinstance(names, list) or not all(isinstance(n, str) for n in names):
            raise ConfigError(f"permissions for {user_id} must be a list of names")
        permissions[str(user_id)] = names
    return permissions


def _load_env_file(path: Path) -> None:
    if not path.exists():
        LOGGER.warning("No .env file found at %s; relying on shell environment.", path)
        return
    load_dotenv(dotenv_path=path, override=False)


def _require_env(name: str) -> str:
    value = os.getenv(name)
    if not value:
        raise ConfigError(f"{name} is not set")
    return value


def _load_allowed_user_ids() -> list[str]:
    raw_value = os.getenv("SLACK_ALLOWED_USER_IDS")
    if not raw_value:
        raise ConfigError("SLACK_ALLOWED_USER_IDS must be set")
    return [uid.strip() for uid in raw_value.split(",") if uid.strip()]


def _load_bot_settings(path: Path) -> Dict[str, Any]:
    if not path.exists():
        LOGGER.warning("No %s found at %s; using defaults.", BOT_FILE, path)
        return {}
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"Failed to read {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid {BOT_FILE} structure at {path}")
    return data
