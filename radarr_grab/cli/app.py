"""
Defines the command-line interface for the application using Typer.
"""

import asyncio
import logging
import os
from pathlib import Path

import aiohttp
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from radarr_grab import __version__
from radarr_grab.api.client import RadarrAPIClient
from radarr_grab.core.grab_manager import GrabManager
from radarr_grab.core.retry import RetryPolicy
from radarr_grab.core.selector import find_best_release, rank_releases
from radarr_grab.exceptions import FetchError, RadarrGrabError
from radarr_grab.models.config import GrabConfig
from radarr_grab.storage.config_manager import ConfigManager

from .formatters import (
    format_error_with_suggestions,
    format_movie_title,
    print_config,
    print_release_table,
    print_validation_table,
)

console = Console()

logging.basicConfig(
    level="INFO",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[
        RichHandler(
            console=console,
            rich_tracebacks=True,
            show_path=False,
            show_level=False,
            markup=True,
        )
    ],
)
log = logging.getLogger("radarr_grab")

app = typer.Typer(
    name="radarr-grab",
    help=(
        "Pick the best release Radarr can find for a movie and grab it. Use"
        " 'radarr-grab <command> --help' for more info."
    ),
    rich_markup_mode="rich",
    pretty_exceptions_show_locals=False,
    add_completion=False,
)


def get_config_dir() -> Path:
    if os.name == "nt":
        base_dir = Path(os.getenv("APPDATA", "~\\AppData\\Roaming"))
    else:
        base_dir = Path(os.getenv("XDG_CONFIG_HOME", "~/.config"))
    return base_dir.expanduser() / "radarr-grab"


CONFIG_DIR = get_config_dir()
CONFIG_FILE = CONFIG_DIR / "config.ini"


def _report_error(message: str) -> None:
    console.print(f"[red]✗ {escape(message)}[/red]")


def _build_client(config: GrabConfig) -> RadarrAPIClient:
    return RadarrAPIClient(config.radarr_url, config.api_key, timeout=config.timeout)


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase logging verbosity (-vv for debug).",
    ),
    version: bool = typer.Option(
        False, "--version", help="Show version and exit.", is_eager=True
    ),
    show_config: bool = typer.Option(
        False, "--show-config", help="Display the current configuration."
    ),
):
    """Radarr release grabber"""
    if version:
        console.print(f"[bold]radarr-grab[/bold] version [cyan]{__version__}[/cyan]")
        raise typer.Exit()

    log_level = "INFO"
    if verbose >= 2:
        log_level = "DEBUG"
    logging.getLogger("radarr_grab").setLevel(log_level)

    if show_config:
        if not CONFIG_FILE.is_file():
            console.print(
                "[red]✗ Config file not found.[/] Run [cyan]radarr-grab init[/cyan]"
                " first."
            )
            raise typer.Exit(code=1)
        config_manager = ConfigManager(CONFIG_FILE)
        config = config_manager.load_config()
        print_config(CONFIG_FILE, config.model_dump(exclude={"config_path"}))
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


@app.command()
def init(
    radarr_url: str = typer.Argument(..., help="Base URL of the Radarr instance."),
    api_key: str = typer.Argument(..., help="Radarr API key."),
    force: bool = typer.Option(
        False, "--force", "-f", help="Overwrite an existing configuration."
    ),
):
    """Initialize configuration with the Radarr URL and API key."""
    if (
        CONFIG_FILE.exists()
        and not force
        and not typer.confirm("Configuration file already exists. Overwrite it?")
    ):
        raise typer.Abort()

    config_manager = ConfigManager(CONFIG_FILE)
    config_manager.save_new_config({"radarr_url": radarr_url, "api_key": api_key})
    # Validate right away so a typo is caught here rather than on first grab
    config_manager.load_config()
    console.print(f"\n[bold green]✓ Configuration saved to '{CONFIG_FILE}'[/bold green]")
    console.print("Ready! Try: [cyan]radarr-grab grab <MOVIE_ID>[/cyan]")


@app.command(name="grab")
def grab_command(
    movie_id: int = typer.Argument(..., help="Radarr's internal movie ID."),
    retries: int | None = typer.Option(
        None,
        "-r",
        "--retries",
        help="Extra attempts when the release search comes back empty.",
    ),
):
    """Search releases for a movie and grab the best one."""
    cli_options = {"fetch_retries": retries} if retries is not None else {}
    config = ConfigManager(CONFIG_FILE).load_config(cli_options)

    async def _grab_async():
        async with _build_client(config) as client:
            with console.status("Starting...") as status:
                manager = GrabManager(
                    client,
                    on_progress=status.update,
                    on_error=_report_error,
                    retry_policy=RetryPolicy(
                        retries=config.fetch_retries, delay=config.retry_delay
                    ),
                )
                return await manager.grab(movie_id)

    try:
        release = asyncio.run(_grab_async())
    except RadarrGrabError as e:
        log.debug("Grab failed", exc_info=True)
        raise typer.Exit(code=1) from e

    console.print(
        f"[bold green]✓ Sent to download client:[/bold green] {escape(release.title)}"
    )


@app.command(name="releases")
def releases_command(
    movie_id: int = typer.Argument(..., help="Radarr's internal movie ID."),
    limit: int = typer.Option(20, "-n", "--limit", min=1, help="Rows to display."),
):
    """List ranked releases for a movie without grabbing anything."""
    config = ConfigManager(CONFIG_FILE).load_config()

    async def _list_async():
        async with _build_client(config) as client:
            with console.status("Starting...") as status:
                manager = GrabManager(
                    client,
                    on_progress=status.update,
                    on_error=_report_error,
                    retry_policy=RetryPolicy(
                        retries=config.fetch_retries, delay=config.retry_delay
                    ),
                )
                movie = await client.get_movie(movie_id)
                return movie, await manager.list_releases(movie_id)

    try:
        movie, releases = asyncio.run(_list_async())
    except FetchError as e:
        raise typer.Exit(code=1) from e

    print_release_table(
        rank_releases(releases),
        find_best_release(releases),
        title=f"Releases for {format_movie_title(movie, movie_id)}",
        limit=limit,
    )


@app.command()
def validate():
    """Validate the current configuration."""
    try:
        config_manager = ConfigManager(CONFIG_FILE)
        config = config_manager.load_config()
        print_validation_table(config)
    except RadarrGrabError as e:
        console.print(f"[red]✗ Configuration is invalid: {e}[/red]")
        raise typer.Exit(code=1) from e


@app.command()
def diagnose():
    """Diagnose common configuration and connectivity issues."""
    console.print("\n[bold cyan]Running diagnostics...[/bold cyan]\n")
    if CONFIG_FILE.is_file():
        console.print(f"[green]✓[/] Config file exists at: [dim]{CONFIG_FILE}[/dim]")
    else:
        console.print(
            "[red]✗ Config file not found.[/] Run [cyan]radarr-grab init[/cyan]."
        )
        raise typer.Exit(code=1)
    try:
        config = ConfigManager(CONFIG_FILE).load_config()
        console.print("[green]✓[/] Configuration file is valid and can be loaded.")
    except RadarrGrabError as e:
        console.print(f"[red]✗ Configuration validation failed: {e}[/red]")
        raise typer.Exit(code=1) from e

    console.print(f"\n[dim]Testing connectivity to {config.radarr_url}...[/dim]")

    async def test_connection() -> bool:
        async with _build_client(config) as client:
            try:
                status = await client.system_status()
            except (RadarrGrabError, aiohttp.ClientError, asyncio.TimeoutError) as e:
                console.print(format_error_with_suggestions(e))
                return False
        console.print(
            f"[green]✓[/] Connected to Radarr {status.get('version', '?')}."
        )
        return True

    if asyncio.run(test_connection()):
        console.print(
            "\n[bold green]✓ All checks passed! Your setup looks good.[/bold green]\n"
        )
    else:
        console.print(
            "\n[bold red]✗ Some issues were found. "
            "Please review the messages above.[/bold red]\n"
        )
        raise typer.Exit(code=1)
