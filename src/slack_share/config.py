"""Configuration loading from environment variables and config.yaml."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

from .errors import ConfigurationError
from .utils.const import BASE_URL, CACHE_FILE, CONFIG_FILE, DEFAULT_LOG_LEVEL, DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)


@dataclass
class ShareConfig:
    """Everything a DirectoryClient needs to talk to Slack."""

    token: str
    cache_path: Path = CACHE_FILE
    base_url: str = BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    log_level: str = DEFAULT_LOG_LEVEL


def _read_config_file(path: Path) -> dict:
    """Load config.yaml, returning an empty dict if it does not exist."""
    if not path.exists():
        return {}
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Failed to load config file {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping")
    logger.debug(f"Loaded config from {path}")
    return data


def _setting(data: dict, env_key: str, key: str, default):
    """Environment value, else the config file value, else the default."""
    value = os.environ.get(env_key) or data.get(key)
    if value is None or value == "":
        return default
    if not isinstance(value, str):
        raise ConfigurationError(f"Invalid {key}: {value!r} (expected a string)")
    return value


def load_config(config_file: Optional[Path] = None, require_token: bool = True) -> ShareConfig:
    """
    Build a ShareConfig.

    Values come from config.yaml (the given path, or the default location)
    and are overridden by environment variables. The token is only ever read
    from SLACK_TOKEN. With require_token=False a missing token is left empty,
    for commands that never call Slack.
    """
    data = _read_config_file(Path(config_file) if config_file else CONFIG_FILE)

    token = os.environ.get("SLACK_TOKEN", "").strip()
    if not token and require_token:
        raise ConfigurationError(
            "SLACK_TOKEN is missing. Please set it as an environment variable."
        )

    cache_path = _setting(data, "SLACK_SHARE_CACHE", "cache_path", CACHE_FILE)
    base_url = _setting(data, "SLACK_API_URL", "base_url", BASE_URL)
    if not base_url.endswith("/"):
        base_url += "/"

    timeout = os.environ.get("SLACK_SHARE_TIMEOUT") or data.get("timeout", DEFAULT_TIMEOUT)
    try:
        timeout = float(timeout)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid timeout: {timeout!r}") from e

    log_level = _setting(data, "SLACK_SHARE_LOG_LEVEL", "log_level", DEFAULT_LOG_LEVEL)

    return ShareConfig(
        token=token,
        cache_path=Path(cache_path).expanduser(),
        base_url=base_url,
        timeout=timeout,
        log_level=log_level.upper(),
    )
