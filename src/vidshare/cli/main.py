"""
``vidshare`` console script.
"""

from __future__ import annotations

import typer
from rich.console import Console
from rich.panel import Panel

from vidshare import __version__
from vidshare.cli.commands.api import api_app
from vidshare.cli.commands.db import db_app
from vidshare.cli.commands.session import session_app

console = Console()

app = typer.Typer(
    name="vidshare",
    help="Video sharing backend",
    no_args_is_help=True,
    rich_markup_mode="rich",
)
app.add_typer(api_app, name="api")
app.add_typer(db_app, name="db", help="Create or drop the schema")
app.add_typer(session_app, name="session", help="Mint session tokens for local testing")


def _banner() -> str:
    return f"vidshare v{__version__}"


@app.command()
def version() -> None:
    """Print the installed version."""
    console.print(Panel(f"[bold blue]{_banner()}[/bold blue]", border_style="blue"))


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    show_version: bool = typer.Option(
        False, "--version", "-v", help="Print the version and exit"
    ),
) -> None:
    """
    Videos, reactions, follows, comments, playlists and announcements
    behind one procedure-style HTTP API.
    """
    if show_version:
        console.print(_banner())
        raise typer.Exit()
    if ctx.invoked_subcommand is None:
        console.print("[yellow]Run 'vidshare --help' to list commands[/yellow]")
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
