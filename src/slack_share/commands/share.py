"""Share and open commands."""

import sys
from typing import Optional

import typer
import yaml

from ..utils import (
    find_by_id,
    format_entry_line,
    generate_user_url,
    is_slack_id,
    resolve_recipient,
    truncate_text,
)
from .common import handle_errors, open_client, report_save_error


# @app.command - exported("share")
def share_command(
    ctx: typer.Context,
    recipient: str = typer.Argument(..., help="User name, user ID or channel ID"),
    text: Optional[str] = typer.Argument(None, help="Text to share (read from stdin if omitted)"),
    refresh: bool = typer.Option(False, "--refresh", "-r", help="Refetch the user directory first"),
):
    """Share a snippet with a Slack user or channel.

    The text is posted as a code block. Names are resolved through the
    cached user directory; IDs are used as-is.

    Examples:

        slack-share share "Alice Smith" "print(1)"

        git diff | slack-share share U012ABCDEF

        slack-share share C0A7RJWRZPT "deploy done" --refresh
    """
    recipient = recipient.strip()
    if text is None:
        text = sys.stdin.read()
    if not text.strip():
        print("⚠️  Cannot share an empty snippet", file=sys.stderr)
        sys.exit(1)

    with open_client(ctx) as client, handle_errors():
        directory = []
        if refresh or not is_slack_id(recipient):
            directory = client.get_directory(force_refresh=refresh)
            report_save_error(client)

        if is_slack_id(recipient):
            # channel IDs are not in the directory
            entry = find_by_id(directory, recipient)
            recipient_id, label = recipient, entry.name if entry else recipient
        else:
            entry = resolve_recipient(directory, recipient)
            recipient_id, label = entry.id, entry.name

        client.post_message(text, recipient_id)
        print(f"✅ Message Sent to {label}: {truncate_text(text.strip().splitlines()[0])}")


# @app.command - exported("users")
def users_command(
    ctx: typer.Context,
    refresh: bool = typer.Option(False, "--refresh", "-r", help="Refetch the user directory first"),
    as_yaml: bool = typer.Option(False, "--yaml", help="Print as YAML"),
):
    """List the workspace members available as share targets."""
    with open_client(ctx) as client, handle_errors():
        users = client.get_directory(force_refresh=refresh)
        report_save_error(client)

    if as_yaml:
        print(yaml.dump([u.model_dump() for u in users], indent=2, sort_keys=False, allow_unicode=True), end="")
        return
    for user in users:
        print(format_entry_line(user))


# @app.command - exported("open")
def open_command(
    ctx: typer.Context,
    recipient: str = typer.Argument(..., help="User name or user ID"),
    print_only: bool = typer.Option(False, "--print-only", help="Print the link instead of opening it"),
):
    """Open a direct conversation with a user in the Slack app."""
    with open_client(ctx) as client, handle_errors():
        entry = resolve_recipient(client.get_directory(), recipient)
        report_save_error(client)

    url = generate_user_url(entry.team, entry.id)
    print(url)
    if not print_only:
        typer.launch(url)
