"""Share snippets to Slack users and channels."""

from .client import DirectoryClient
from .config import ShareConfig, load_config
from .models import DirectoryEntry
from .storage import DirectoryCache

__version__ = "0.1.0"
