"""Command-line entry point: settings, logging, initial load, then the TUI."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer
from rich.console import Console
from rich.markup import escape
from textual.logging import TextualHandler

from .client import build_client
from .config import Settings, get_settings, require_settings
from .exceptions import ConfigError, DirectoryError

if TYPE_CHECKING:
    from .client import OktaDirectoryClient
    from .models import DirectoryEntry

logger = logging.getLogger(__name__)

console = Console(stderr=True)

cli = typer.Typer(
    name="okta-browser",
    help="Okta Browser - browse Okta users and their profiles in the terminal.",
    add_completion=False,
    rich_markup_mode="rich",
)


def configure_logging(settings: Settings) -> None:
    """Send logs to a file or to the Textual devtools console."""
    handler: logging.Handler
    if settings.log_file is not None:
        try:
            handler = logging.FileHandler(settings.log_file, encoding="utf-8")
        except OSError as e:
            raise ConfigError(
                ["LOG_FILE"], detail=f"Cannot open log file {settings.log_file}: {e.strerror or e}"
            ) from e
    else:
        handler = TextualHandler()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.WARNING),
        format="%(levelname)s:%(name)s:%(message)s",
        handlers=[handler],
        force=True,
    )


async def _load_entries(client: OktaDirectoryClient) -> list[DirectoryEntry]:
    async with client:
        return await client.list_entries()


def bootstrap(settings: Settings) -> list[DirectoryEntry]:
    """Validate settings and load the initial user list.

    Raises ConfigError, ClientConstructionError or InitialLoadError; all are
    fatal and must stop the program before the UI starts.
    """
    require_settings(settings)
    client = build_client(settings)
    return asyncio.run(_load_entries(client))


@cli.command()
def run(
    org_url: Annotated[
        str | None, typer.Option("--org-url", help="Okta org URL (default: $OKTA_ORG_URL)")
    ] = None,
    token: Annotated[
        str | None, typer.Option("--token", help="Okta API token (default: $OKTA_API_TOKEN)")
    ] = None,
    log_level: Annotated[str | None, typer.Option("--log-level", help="Logging level")] = None,
    log_file: Annotated[Path | None, typer.Option("--log-file", help="Write logs here")] = None,
    timeout: Annotated[
        float | None, typer.Option("--timeout", min=0.1, help="Per-request timeout in seconds")
    ] = None,
) -> None:
    """Browse the users of an Okta organization."""
    from .app import DirectoryBrowserApp

    try:
        settings = get_settings().with_overrides(
            okta_org_url=org_url,
            okta_api_token=token,
            log_level=log_level,
            log_file=log_file,
            fetch_timeout_seconds=timeout,
        )
        configure_logging(settings)
        entries = bootstrap(settings)
    except DirectoryError as e:
        logger.debug("Startup failed: %s", e.message)
        console.print(f"[red]Error:[/] {escape(e.message)}")
        raise typer.Exit(code=1) from e

    app = DirectoryBrowserApp(
        entries,
        lambda: build_client(settings),
        fetch_timeout=settings.fetch_timeout_seconds,
    )
    app.run(mouse=False)


def main() -> None:
    """Run the CLI."""
    cli()
