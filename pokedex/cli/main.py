"""CLI Entry Point — pick the backend from flags, then serve the API or run the shell.

Invariants:
    - --airtable takes precedence over --sqlite, which takes precedence over env settings
    - Backend construction failure exits non-zero before anything is served;
      errors raised after startup propagate unchanged
    - The repository is closed when the shell ends

Design Decisions:
    - typer for flags, uvicorn for serving: the API app is built by create_app(settings)
      so flag overrides reach the lifespan without touching the environment
"""

import asyncio
import logging
from typing import Optional, Tuple

import typer
import uvicorn
from rich.console import Console

from pokedex.cli.shell import run_shell
from pokedex.config import Settings, get_settings
from pokedex.core.errors import StorageError
from pokedex.infrastructure.observability import setup_logging
from pokedex.infrastructure.repository_factory import build_repository
from pokedex.main import create_app

logger = logging.getLogger(__name__)

app = typer.Typer(add_completion=False, help="Pokedex catalog: HTTP API or interactive shell.")

_console = Console()


def resolve_settings(
    base: Settings,
    sqlite: str | None = None,
    airtable: tuple[str | None, str | None] | None = None,
) -> Settings:
    """Apply --sqlite / --airtable on top of environment settings."""
    if airtable and all(airtable):
        api_key, workspace_id = airtable
        return base.model_copy(update={
            "repository_backend": "airtable",
            "airtable_api_key": api_key,
            "airtable_workspace_id": workspace_id,
        })
    if sqlite:
        return base.model_copy(update={
            "repository_backend": "sqlite",
            "database_url": f"sqlite+aiosqlite:///{sqlite}",
        })
    return base


async def _shell(settings: Settings) -> None:
    backend = settings.repository_backend
    try:
        repo = await build_repository(settings)
    except (StorageError, ValueError) as e:
        logger.error(f"Cannot start {backend} repository: {e}")
        _console.print(f"[red]Cannot start the {backend} repository[/red]")
        raise typer.Exit(code=1) from e
    try:
        await run_shell(repo, _console)
    finally:
        await repo.close()


@app.command()
def run(
    cli: bool = typer.Option(False, "--cli", help="Runs in CLI mode"),
    sqlite: Optional[str] = typer.Option(
        None, "--sqlite", metavar="PATH", help="Use a SQLite database file",
    ),
    airtable: Tuple[str, str] = typer.Option(
        (None, None), "--airtable", metavar="API_KEY WORKSPACE_ID",
        help="Use an Airtable base",
    ),
) -> None:
    """Serve the HTTP API (default) or run the interactive shell."""
    settings = resolve_settings(get_settings(), sqlite, airtable)

    if not cli:
        uvicorn.run(
            create_app(settings), host=settings.api_host, port=settings.api_port,
        )
        return

    setup_logging(settings.log_level, "text")
    asyncio.run(_shell(settings))
