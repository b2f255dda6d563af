"""Utility functions for slack-share."""

from .const import (
    BASE_URL,
    CACHE_FILE,
    CONFIG_FILE,
    ATTRIBUTION,
    USERS_LIST_ENDPOINT,
    POST_MESSAGE_ENDPOINT,
)

from .api import (
    get_client,
    api_get,
    api_post,
    decode_json,
)

from .formatting import (
    build_message_blocks,
    build_message_payload,
    generate_user_url,
    format_entry_line,
    truncate_text,
)

from .resolution import (
    ResolutionError,
    is_slack_id,
    as_mapping,
    find_by_id,
    resolve_recipient,
)
