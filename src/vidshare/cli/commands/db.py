"""CLI commands for schema management during development."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from sqlalchemy.exc import SQLAlchemyError

from vidshare.config.database import DatabaseManager
from vidshare.exceptions import EXIT_CODE_DATABASE_ERROR

console = Console()

db_app = typer.Typer(
    name="db",
    help="Database schema commands (use alembic for managed migrations)",
    no_args_is_help=True,
)


async def _run(action: str) -> None:
    manager = DatabaseManager()
    try:
        if action == "create":
            await manager.create_tables()
        else:
            await manager.drop_tables()
    finally:
        await manager.close()


@db_app.command("create-tables")
def create_tables() -> None:
    """Create every table from the ORM metadata."""
    try:
        asyncio.run(_run("create"))
    except SQLAlchemyError as e:
        console.print(f"[red]Failed to create tables:[/red] {e}")
        raise typer.Exit(code=EXIT_CODE_DATABASE_ERROR)
    console.print("[green]✓[/green] Tables created")


@db_app.command("drop-tables")
def drop_tables(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Drop every table. All data is lost."""
    if not yes:
        typer.confirm("Drop all vidshare tables?", abort=True)
    try:
        asyncio.run(_run("drop"))
    except SQLAlchemyError as e:
        console.print(f"[red]Failed to drop tables:[/red] {e}")
        raise typer.Exit(code=EXIT_CODE_DATABASE_ERROR)
    console.print("[yellow]Tables dropped[/yellow]")
