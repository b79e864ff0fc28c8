"""CLI interface for MediaSilo uploads."""

import asyncio
from pathlib import Path
from typing import Annotated, Any

import httpx
import typer
import yaml  # type: ignore[import-untyped]
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from . import __version__
from .config import MediaSiloConfig, load_config
from .logging_utils import setup_logging
from .mediasilo_client import MediaSiloError
from .pipeline import run_upload

app = typer.Typer(
    name="mediasilo-upload",
    help="Upload a local file to MediaSilo and register it as an asset",
    add_completion=False,
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)


def run_async(coro: Any) -> Any:
    """Run an async function synchronously."""
    return asyncio.run(coro)


def get_config(config_path: Path | None = None, **overrides: Any) -> MediaSiloConfig:
    """Load configuration from file, environment and command-line values."""
    try:
        return load_config(config_path, **overrides)
    except (ValidationError, yaml.YAMLError, OSError) as e:
        err_console.print(f"[red]Error loading config: {escape(str(e))}[/red]")
        raise typer.Exit(2) from None


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"mediasilo-upload {__version__}")
        raise typer.Exit()


@app.command()
def upload(
    hostname: Annotated[
        str,
        typer.Argument(help="Subdomain you log into MediaSilo with (YOURCOMPANY.mediasilo.com)"),
    ],
    username: Annotated[
        str,
        typer.Argument(help="MediaSilo user with the Asset.Create permission"),
    ],
    password: Annotated[str, typer.Argument(help="Password for the user")],
    project_id: Annotated[
        str,
        typer.Argument(help="ID of the project the file is uploaded to"),
    ],
    file_path: Annotated[Path, typer.Argument(help="Local file to upload")],
    api_url: Annotated[
        str | None,
        typer.Option("--api-url", help="MediaSilo API base URL (default: latest v3 API)"),
    ] = None,
    config_path: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to a YAML config file"),
    ] = None,
    log_file: Annotated[
        Path | None,
        typer.Option("--log-file", help="Also write the run log to this file"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            help="Show version and exit.",
            callback=_version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """Upload FILE_PATH to MediaSilo and create an asset for it in PROJECT_ID."""
    setup_logging(verbose, secret=password, log_file=log_file, console=err_console)

    config = get_config(
        config_path,
        host_context=hostname,
        username=username,
        password=password,
        project_id=project_id,
        api_url=api_url,
    )

    try:
        result = run_async(run_upload(config, file_path))
    except (MediaSiloError, httpx.HTTPError, OSError) as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]", soft_wrap=True)
        err_console.print_exception()
        raise typer.Exit(1) from None

    asset_id = "(no id returned)" if result.asset.id is None else escape(str(result.asset.id))
    source = escape(str(result.context.file_path))
    asset_url = escape(result.context.upload_ticket.asset_url)
    console.print(f"[green]Created asset[/green] {asset_id} from {source}", soft_wrap=True)
    console.print(f"  Asset URL: {asset_url}", soft_wrap=True)


if __name__ == "__main__":
    app()
