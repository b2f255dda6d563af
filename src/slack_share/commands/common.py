"""Shared helpers for slack-share commands."""

import logging
import sys
from contextlib import contextmanager

import typer

from ..client import DirectoryClient
from ..config import ShareConfig, load_config
from ..errors import SlackShareError
from ..utils import ResolutionError


def configure_logging(level: str):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


@contextmanager
def handle_errors():
    """Report slack-share errors on stderr and exit with status 1."""
    try:
        yield
    except (SlackShareError, ResolutionError) as e:
        print(f"❌ {e}", file=sys.stderr)
        sys.exit(1)


def open_config(ctx: typer.Context, require_token: bool = True) -> ShareConfig:
    """Load configuration for the current invocation and set up logging."""
    options = ctx.find_root().obj or {}
    with handle_errors():
        config = load_config(options.get("config_file"), require_token=require_token)
    configure_logging("DEBUG" if options.get("verbose") else config.log_level)
    return config


def open_client(ctx: typer.Context) -> DirectoryClient:
    """Build a client for the current invocation."""
    return DirectoryClient(open_config(ctx))


def report_save_error(client: DirectoryClient):
    if client.last_save_error:
        print(f"⚠️  {client.last_save_error}", file=sys.stderr)
