"""Constants for slack-share."""

import os
from pathlib import Path

BASE_URL = "https://slack.com/api/"
DEFAULT_TIMEOUT = 60.0
DEFAULT_LOG_LEVEL = "WARNING"

CACHE_ROOT = Path(os.environ.get("XDG_CACHE_HOME") or Path.home() / ".cache")
CONFIG_ROOT = Path(os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config")
CACHE_FILE = CACHE_ROOT / "slack-share" / "slack_users_cache.json"
CONFIG_FILE = CONFIG_ROOT / "slack-share" / "config.yaml"

USERS_LIST_ENDPOINT = "users.list"
POST_MESSAGE_ENDPOINT = "chat.postMessage"

ATTRIBUTION = "Shared with *IDEShare*"
