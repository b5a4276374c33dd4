"""
Rich renderables for errors, configuration and release tables.
"""

from pathlib import Path
from typing import Any, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from radarr_grab.models.config import GrabConfig
from radarr_grab.models.release import Release


def format_size(size_bytes: int) -> str:
    """Formats a byte count as a human-readable string."""
    if size_bytes <= 0:
        return "-"
    size = float(size_bytes)
    for unit in ("B", "KB", "MB", "GB"):
        if size < 1024:
            return f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} TB"


def format_movie_title(movie: dict[str, Any] | None, movie_id: int) -> str:
    """Builds "Title (Year)" from a Radarr movie record, escaped for markup."""
    if not movie or not movie.get("title"):
        return f"movie {movie_id}"
    title = movie["title"]
    if movie.get("year"):
        title += f" ({movie['year']})"
    return escape(title)


def format_error_with_suggestions(
    error: Exception, context: dict | None = None
) -> Panel:
    """Formats an error with actionable suggestions into a Rich Panel."""
    error_type = type(error).__name__
    error_msg = str(error)

    suggestions_map = {
        "AuthenticationError": [
            "• Check the API key under Settings > General in Radarr.",
            "• Run `radarr-grab init <URL> <API_KEY> --force` to replace it.",
        ],
        "ConfigurationError": [
            "• Run `radarr-grab --show-config` to inspect the current values.",
            "• Run `radarr-grab init <URL> <API_KEY>` to recreate the file.",
        ],
        "FetchError": [
            "• Make sure at least one indexer is enabled in Radarr.",
            "• The movie may not be released yet.",
            "• Try again with more retries: `--retries 4`.",
        ],
        "NoSuitableReleaseError": [
            "• Every candidate was filtered out. Review your quality profile.",
        ],
        "GrabFailedError": [
            "• Radarr refused the release. It may have expired from the cache.",
            "• Run the grab again to refresh the release list.",
        ],
        "GrabError": [
            "• Check that Radarr's download client is reachable.",
            "• Look at Radarr's System > Logs page for details.",
        ],
        "ClientConnectorError": [
            "• Radarr could not be reached. Verify the URL and that it is running.",
        ],
        "TimeoutError": [
            "• Release searches query every indexer and can be slow.",
            "• Raise `timeout` in the configuration file.",
        ],
    }

    suggestions = suggestions_map.get(
        error_type, ["• Run the command with -vv for detailed logs."]
    )

    error_text = Text()
    error_text.append(f"{error_type}: ", style="bold red")
    error_text.append(error_msg)

    suggestion_text = Text("\n".join(suggestions))

    content = Table.grid(padding=(1, 0))
    content.add_row(error_text)
    content.add_row()
    content.add_row(Text("Suggestions", style="bold yellow"))
    content.add_row(suggestion_text)

    if context:
        content.add_row()
        content.add_row(Text(f"Context: {context}", style="dim"))

    return Panel(
        content,
        title="[bold red]An Error Occurred[/bold red]",
        border_style="red",
        expand=False,
    )


def print_config(config_path: Path, config_data: dict[str, Any]):
    """Displays the current configuration, hiding sensitive data."""
    console = Console()
    content = ""
    for key, value in config_data.items():
        if key == "api_key":
            value = "[hidden]"
        content += f"{key} = {value}\n"

    console.print(
        Panel(
            content.strip(),
            title=f"Configuration ([dim]{config_path}[/dim])",
            border_style="cyan",
        )
    )


def print_validation_table(config: GrabConfig):
    """Prints a table summarizing a validated configuration."""
    console = Console()
    table = Table(title="Configuration Validation", show_header=True)
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    table.add_column("Status", justify="center")

    table.add_row("Radarr URL", config.radarr_url, "[green]✓[/green]")
    table.add_row("API key", f"{config.api_key[:4]}…", "[green]✓[/green]")
    table.add_row("Fetch retries", str(config.fetch_retries), "[green]✓[/green]")
    table.add_row("Retry delay", f"{config.retry_delay:g}s", "[green]✓[/green]")
    table.add_row("Timeout", f"{config.timeout}s", "[green]✓[/green]")

    console.print(table)


def print_release_table(
    ranked: list[tuple[Release, float]],
    selected: Optional[Release],
    title: str = "Releases",
    limit: int = 20,
):
    """Prints ranked releases, marking the one the selector would grab."""
    console = Console()
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("", width=1)
    table.add_column("Title", overflow="fold")
    table.add_column("Quality")
    table.add_column("CF score", justify="right")
    table.add_column("Points", justify="right")
    table.add_column("Size", justify="right")
    table.add_column("Indexer", style="dim")

    for release, points in ranked[:limit]:
        marker = "[green]★[/green]" if release is selected else ""
        score = (
            "-"
            if release.custom_format_score is None
            else f"{release.custom_format_score:g}"
        )
        style = "dim" if release.rejected else None
        table.add_row(
            marker,
            escape(release.title),
            release.quality_name,
            score,
            f"{points:g}",
            format_size(release.size),
            escape(release.indexer),
            style=style,
        )

    console.print(table)
    if len(ranked) > limit:
        console.print(f"[dim]… and {len(ranked) - limit} more[/dim]")
