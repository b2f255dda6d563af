"""Formatting and Parsing."""

import urllib.parse

from .const import ATTRIBUTION


def build_message_blocks(content: str) -> list:
    """Wrap content in a code block followed by the attribution footer."""
    return [
        {
            "type": "section",
            "text": {"type": "mrkdwn", "text": f"```\n{content}```"},
        },
        {
            "type": "context",
            "elements": [{"type": "mrkdwn", "text": ATTRIBUTION}],
        },
    ]


def build_message_payload(content: str, recipient_id: str) -> dict:
    """Body for chat.postMessage."""
    return {"channel": recipient_id, "blocks": build_message_blocks(content)}


def generate_user_url(team_id: str, user_id: str) -> str:
    """Deep link that opens a conversation with a user in the Slack app."""
    query = urllib.parse.urlencode({"team": team_id, "id": user_id})
    return f"slack://user?{query}"


def format_entry_line(entry) -> str:
    """Format a directory entry for plain listing."""
    return f"{entry.name}\t{entry.id}"


def truncate_text(text: str, max_len: int = 50) -> str:
    """Truncate text to max length."""
    if len(text) <= max_len:
        return text
    return text[:max_len - 3] + "..."
