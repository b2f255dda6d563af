"""
Storage module for the local Slack user directory.

Keeps exactly one value on disk: the last Directory fetched from Slack,
serialized as a JSON array of {id, team, name} objects. There is no expiry;
the file is valid until cleared or overwritten by a refresh.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from .errors import WriteFailure
from .models import Directory, directory_adapter

logger = logging.getLogger(__name__)


class DirectoryCache:
    """Flat-file cache for the workspace member list."""

    def __init__(self, path: Path):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.exists()

    def load(self) -> Optional[Directory]:
        """
        Read the cached Directory.

        Returns None when the file is missing, empty, unreadable or does not
        hold a valid Directory. All of these mean "fetch again".
        """
        try:
            content = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug(f"No cache file at {self._path}")
            return None
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not read cache file {self._path}: {e}")
            return None

        if not content.strip():
            logger.debug(f"Cache file {self._path} is empty")
            return None

        try:
            return directory_adapter.validate_python(json.loads(content))
        except (json.JSONDecodeError, ValidationError, RecursionError) as e:
            logger.warning(f"Ignoring corrupt cache file {self._path}: {e}")
            return None

    def save(self, directory: Directory):
        """
        Replace the cached Directory.

        The new content goes to a temporary file next to the cache and is
        renamed over it, so readers never see a partial write.
        """
        data = directory_adapter.dump_json(directory)
        tmp_name = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self._path.name}.", suffix=".tmp", dir=self._path.parent
            )
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            os.replace(tmp_name, self._path)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise WriteFailure(f"Unable to write cache file {self._path}: {e}") from e
        logger.debug(f"Saved {len(directory)} users to {self._path}")

    def clear(self):
        """Remove the cache file. Clearing a missing cache is a no-op."""
        try:
            self._path.unlink()
            logger.debug(f"Removed cache file {self._path}")
        except FileNotFoundError:
            pass
