import typer
from pathlib import Path
from typing import Optional

from .commands.cache import app as cache_app
from .commands.share import open_command, share_command, users_command

app = typer.Typer(help="Share snippets to Slack users and channels")

app.add_typer(cache_app, name="cache")

app.command("share")(share_command)
app.command("users")(users_command)
app.command("open")(open_command)


@app.callback()
def main_callback(
    ctx: typer.Context,
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Path to config.yaml"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Share snippets to Slack users and channels."""
    ctx.obj = {"config_file": config_file, "verbose": verbose}


def main():
    app()


if __name__ == "__main__":
    main()
