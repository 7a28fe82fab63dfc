"""`vidshare api` commands."""

from __future__ import annotations

import typer

from vidshare.config.settings import settings

api_app = typer.Typer(name="api", help="Run the HTTP API", no_args_is_help=True)

APP_IMPORT_PATH = "vidshare.api.main:app"


@api_app.command()
def start(
    port: int = typer.Option(settings.api_port, "--port", "-p", help="Listen port"),
    production: bool = typer.Option(
        False, "--production", help="Two workers, no reload, warning-level logs"
    ),
) -> None:
    """
    Serve the procedures with uvicorn on ``api_host``.

    Without ``--production`` the server reloads on source changes.

    Examples:
        vidshare api start -p 8080
    """
    import uvicorn

    mode = (
        {"workers": 2, "log_level": "warning"}
        if production
        else {"reload": True, "log_level": "info"}
    )
    uvicorn.run(APP_IMPORT_PATH, host=settings.api_host, port=port, **mode)
