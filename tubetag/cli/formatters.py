"""
Functions for formatting and displaying data in the console using Rich.
"""

from pathlib import Path

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from tubetag.models.config import UserSettings
from tubetag.models.stats import PostProcessStats
from tubetag.utils.formatting import format_duration, pluralize

# The most failures listed in the summary before the rest are counted instead
MAX_LISTED_FAILURES = 20


def format_error_with_suggestions(
    error: Exception, context: dict | None = None
) -> Panel:
    """Formats an error with actionable suggestions into a Rich Panel."""
    error_type = type(error).__name__
    error_msg = str(error)

    suggestions_map = {
        "ConfigurationError": [
            "• Run `tubetag --show-config` to review your settings.",
            "• Run `tubetag init --force` to write a fresh configuration file.",
            "• The working and move-to directories must both be set and must differ.",
        ],
        "NoTaggingSetsError": [
            "• Check that the downloader wrote its files to the working directory.",
            "• Every video needs an audio file, an .info.json file and a .jpg image.",
            "• Download with thumbnails and metadata written to disk.",
        ],
        "DestinationDirectoryError": [
            "• Check that the move-to directory is on a mounted, writable drive.",
            "• Check the permissions of the move-to directory.",
        ],
        "PermissionError": [
            "• Check the permissions of the working and move-to directories.",
        ],
    }

    suggestions = suggestions_map.get(
        error_type, ["• Run the command with -v for detailed logs."]
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


def print_config(config_path: Path, settings: UserSettings):
    """Displays the current configuration."""
    console = Console()
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="bold cyan")
    table.add_column()

    for key in UserSettings.get_ini_keys():
        value = getattr(settings, key)
        if isinstance(value, bool):
            value = "[green]✓ Enabled[/green]" if value else "[dim]✗ Disabled[/dim]"
        elif isinstance(value, list):
            value = escape(", ".join(value)) if value else "[dim](none)[/dim]"
        else:
            value = escape(str(value))
        table.add_row(f"{key}:", value)

    console.print(
        Panel(
            table,
            title=f"Configuration ([dim]{escape(str(config_path))}[/dim])",
            border_style="cyan",
        )
    )


def _stage_table(stats: PostProcessStats) -> Table:
    table = Table(box=box.SIMPLE_HEAD, padding=(0, 2))
    table.add_column("Stage", style="bold cyan")
    table.add_column("✓ Done", justify="right", style="green")
    table.add_column("○ Skipped", justify="right", style="yellow")
    table.add_column("✗ Failed", justify="right", style="red")
    table.add_column("Time", justify="right", style="blue")

    for name, stage in stats.stages().items():
        table.add_row(
            name,
            str(stage.succeeded),
            str(stage.skipped),
            str(stage.failed),
            format_duration(stage.elapsed_s),
        )
    return table


def _failures_table(stats: PostProcessStats) -> Table | None:
    failures = [
        (stage_name, item, error)
        for stage_name, stage in stats.stages().items()
        for item, error in stage.failures.items()
    ]
    if not failures:
        return None

    table = Table(title="[bold red]Failures[/bold red]", box=box.ROUNDED)
    table.add_column("Stage", style="bold")
    table.add_column("Item", style="cyan")
    table.add_column("Error")
    for stage_name, item, error in failures[:MAX_LISTED_FAILURES]:
        table.add_row(stage_name, escape(item), escape(error))
    if len(failures) > MAX_LISTED_FAILURES:
        table.add_row("", f"... plus {len(failures) - MAX_LISTED_FAILURES} more", "")
    return table


def print_summary_panel(stats: PostProcessStats):
    """Displays the final summary of a post-processing run."""
    console = Console()

    details = Table(show_header=False, box=None, padding=(0, 2))
    details.add_column(style="bold cyan", justify="right", width=20)
    details.add_column(style="white", justify="left")

    details.add_row("Tagging Sets:", f"[bold]{stats.tagging_sets}[/bold]")
    if stats.collection_title:
        details.add_row("Collection:", escape(stats.collection_title))
    if stats.destination:
        details.add_row("Destination:", f"[dim]{escape(stats.destination)}[/dim]")
    if stats.source_files_deleted > 0:
        details.add_row(
            "Split Sources Deleted:", f"[yellow]{stats.source_files_deleted}[/yellow]"
        )
    details.add_row(
        "Cover Image:",
        escape(stats.cover_promoted) if stats.cover_promoted else "[dim](none)[/dim]",
    )
    if stats.leftover_files:
        details.add_row(
            "⚠ Leftovers:",
            f"[yellow]{pluralize(len(stats.leftover_files), 'file')}[/yellow]",
        )
    details.add_row("Time Elapsed:", f"[blue]{format_duration(stats.elapsed_s)}[/blue]")

    content = Table.grid(padding=(1, 0))
    content.add_row(details)

    if stats.is_fatal:
        content.add_row(Text(f"✗ {stats.fatal_error}", style="bold red"))
        title = "✗ [bold]Post-Processing Aborted[/bold]"
        border_color = "red"
    else:
        content.add_row(_stage_table(stats))
        if stats.total_failures > 0:
            title = "⚠ [bold]Finished With Errors[/bold]"
            border_color = "yellow"
        else:
            title = "🎵 [bold]Post-Processing Complete![/bold]"
            border_color = "green"

    console.print()
    console.print(
        Panel(
            content,
            title=title,
            border_style=border_color,
            box=box.DOUBLE,
            expand=False,
            padding=(1, 2),
        )
    )

    if failures := _failures_table(stats):
        console.print(failures)

    console.print()
