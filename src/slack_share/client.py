"""
Slack directory client.

Provides the workspace member list (cache first, Slack on demand) and posts
shared snippets to a user or channel.
"""

import logging
from typing import Dict, Optional

import httpx
from pydantic import ValidationError

from .config import ShareConfig
from .errors import (
    DeliveryFailure,
    RemoteApplicationFailure,
    RemoteAuthFailure,
    RemoteProtocolFailure,
    WriteFailure,
)
from .models import Directory, DirectoryEntry, SlackEnvelope, UsersListResponse
from .storage import DirectoryCache
from .utils import (
    POST_MESSAGE_ENDPOINT,
    USERS_LIST_ENDPOINT,
    api_get,
    api_post,
    as_mapping,
    build_message_payload,
    decode_json,
    get_client,
)

logger = logging.getLogger(__name__)


class DirectoryClient:
    """Cache-aside access to the Slack user directory, plus message posting."""

    def __init__(
        self,
        config: ShareConfig,
        cache: Optional[DirectoryCache] = None,
        http: Optional[httpx.Client] = None,
    ):
        self.config = config
        self.cache = cache or DirectoryCache(config.cache_path)
        self._owns_http = http is None
        self._http = http or get_client(config.token, config.base_url, config.timeout)
        self.last_save_error: Optional[WriteFailure] = None

    def close(self):
        if self._owns_http:
            self._http.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    # =========================================================================
    # Directory
    # =========================================================================

    def get_directory(self, force_refresh: bool = False) -> Directory:
        """
        Return the member list, from the cache unless it is missing or
        force_refresh is set.

        A freshly fetched list is written back to the cache. If that write
        fails the list is still returned; the error is kept on
        last_save_error.
        """
        self.last_save_error = None
        if not force_refresh:
            cached = self.cache.load()
            if cached is not None:
                logger.debug(f"Using {len(cached)} cached users from {self.cache.path}")
                return cached

        directory = self.fetch_directory()
        try:
            self.cache.save(directory)
        except WriteFailure as e:
            logger.warning(f"Fetched users could not be cached: {e}")
            self.last_save_error = e
        return directory

    def get_directory_map(self, force_refresh: bool = False) -> Dict[str, DirectoryEntry]:
        """Member list keyed by display name."""
        return as_mapping(self.get_directory(force_refresh))

    def fetch_directory(self) -> Directory:
        """Fetch active workspace members from users.list."""
        logger.info("Fetching users...")
        response = api_get(self._http, USERS_LIST_ENDPOINT)

        if response.status_code in (401, 403):
            raise RemoteAuthFailure(
                f"Slack API Error: {USERS_LIST_ENDPOINT} rejected the token (HTTP {response.status_code})"
            )
        if not response.is_success:
            raise RemoteProtocolFailure(
                f"Slack API Error: {USERS_LIST_ENDPOINT} returned HTTP {response.status_code}"
            )

        data = decode_json(response)
        envelope = self._parse(SlackEnvelope, data)
        if not envelope.ok:
            error = envelope.error or "Unknown error"
            raise RemoteApplicationFailure(f"Slack API Error: {error}", error=error)

        members = self._parse(UsersListResponse, data).members
        directory = [member.to_entry() for member in members if not member.deleted]
        logger.info(f"Fetched {len(directory)} users ({len(members) - len(directory)} deleted skipped)")
        return directory

    @staticmethod
    def _parse(model, data):
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise RemoteProtocolFailure(f"Unexpected response from Slack: {e}") from e

    # =========================================================================
    # Messages
    # =========================================================================

    def post_message(self, content: str, recipient_id: str):
        """
        Post content as a code block to a user or channel.

        Any status other than 200 is a delivery failure. A 200 whose JSON
        body says ok=false is one too.
        """
        payload = build_message_payload(content, recipient_id)
        response = api_post(self._http, POST_MESSAGE_ENDPOINT, payload)

        if response.status_code != 200:
            raise DeliveryFailure(
                f"Some error during sending the message (HTTP {response.status_code})",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError:
            data = None
        if isinstance(data, dict) and data.get("ok") is False:
            error = data.get("error") or "Unknown error"
            raise DeliveryFailure(
                f"Some error during sending the message: {error}",
                error=error,
                status_code=response.status_code,
            )

        logger.info(f"Message sent to {recipient_id}")
