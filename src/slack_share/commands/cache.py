"""Directory cache commands."""

import typer

from .common import handle_errors, open_client, open_config, report_save_error

# Create Typer app for cache commands
app = typer.Typer(help="Manage the cached user directory")


@app.command("update")
def cache_update(ctx: typer.Context):
    """Refetch the user directory from Slack and overwrite the cache."""
    with open_client(ctx) as client, handle_errors():
        users = client.get_directory(force_refresh=True)
        report_save_error(client)
        print(f"Saved {len(users)} users")


@app.command("clear")
def cache_clear(ctx: typer.Context):
    """Delete the cached user directory."""
    with open_client(ctx) as client, handle_errors():
        existed = client.cache.exists()
        client.cache.clear()
        if existed:
            print(f"Removed {client.cache.path}")
        else:
            print("Cache already empty")


@app.command("path")
def cache_path(ctx: typer.Context):
    """Show where the user directory is cached. Does not need SLACK_TOKEN."""
    config = open_config(ctx, require_token=False)
    print(config.cache_path)
