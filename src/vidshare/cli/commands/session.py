"""CLI command that issues a session token for local development."""

from __future__ import annotations

import asyncio
import datetime
import secrets
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table
from sqlalchemy.exc import SQLAlchemyError

from vidshare.config.database import DatabaseManager
from vidshare.config.settings import settings
from vidshare.exceptions import (
    EXIT_CODE_DATABASE_ERROR,
    EXIT_CODE_INVALID_ARGS,
)
from vidshare.models.session import SessionCreate
from vidshare.repositories import SessionRepository, UserRepository

console = Console()

session_app = typer.Typer(
    name="session",
    help="Development session helpers",
    no_args_is_help=True,
)


async def issue_session(
    manager: DatabaseManager, user_id: str, days: int
) -> Optional[SessionCreate]:
    """
    Store a new session for ``user_id``.

    Returns
    -------
    Optional[SessionCreate]
        The stored session, or None if the user does not exist.
    """
    issued: Optional[SessionCreate] = None
    async for session in manager.get_session():
        if await UserRepository().exists(session, user_id):
            issued = SessionCreate(
                session_token=secrets.token_urlsafe(32),
                user_id=user_id,
                expires=datetime.datetime.now(datetime.timezone.utc)
                + datetime.timedelta(days=days),
            )
            await SessionRepository().create(session, obj_in=issued)
    return issued


@session_app.command("issue")
def issue(
    user_id: str = typer.Argument(..., help="User the session belongs to"),
    days: int = typer.Option(
        settings.session_default_days, "--days", "-d", min=1, help="Lifetime in days"
    ),
) -> None:
    """Issue a session token, usable as a Bearer token or session cookie."""

    async def _issue() -> Optional[SessionCreate]:
        manager = DatabaseManager()
        try:
            return await issue_session(manager, user_id, days)
        finally:
            await manager.close()

    try:
        issued = asyncio.run(_issue())
    except SQLAlchemyError as e:
        console.print(f"[red]Failed to issue session:[/red] {e}")
        raise typer.Exit(code=EXIT_CODE_DATABASE_ERROR)

    if issued is None:
        console.print(f"[red]User '{user_id}' not found[/red]")
        raise typer.Exit(code=EXIT_CODE_INVALID_ARGS)

    table = Table(title="Session issued", show_header=False)
    table.add_row("User", issued.user_id)
    table.add_row("Token", issued.session_token)
    table.add_row("Expires", issued.expires.isoformat())
    table.add_row("Cookie", settings.session_cookie_name)
    console.print(table)
