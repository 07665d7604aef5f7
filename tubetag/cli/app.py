"""
Defines the command-line interface for the application using Typer.
"""

import logging
import os
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from tubetag import __version__
from tubetag.core.post_processor import PostProcessor
from tubetag.exceptions import TubeTagError
from tubetag.models.media import MediaType
from tubetag.storage.config_manager import ConfigManager

from .formatters import print_config, print_summary_panel

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
log = logging.getLogger("tubetag")

app = typer.Typer(
    name="tubetag",
    help=(
        "Tags, renames and files the audio of downloaded videos into your music"
        " library. Use 'tubetag <command> --help' for more info."
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
    return base_dir.expanduser() / "tubetag"


DEFAULT_CONFIG_FILE = get_config_dir() / "config.ini"


def _config_file(ctx: typer.Context) -> Path:
    return (ctx.obj or {}).get("config_file", DEFAULT_CONFIG_FILE)


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase logging verbosity (show debug output).",
    ),
    version: bool = typer.Option(
        False, "--version", help="Show version and exit.", is_eager=True
    ),
    show_config: bool = typer.Option(
        False, "--show-config", help="Display the current configuration."
    ),
    config: Path | None = typer.Option(  # noqa: B008
        None,
        "--config",
        "-c",
        help="Use a configuration file other than the default one.",
        dir_okay=False,
    ),
):
    """Post-processor for downloaded video audio"""
    if version:
        console.print(f"[bold]tubetag[/bold] version [cyan]{__version__}[/cyan]")
        raise typer.Exit()

    log_level = "DEBUG" if verbose >= 1 else "INFO"
    logging.getLogger("tubetag").setLevel(log_level)

    config_file = config.expanduser() if config else DEFAULT_CONFIG_FILE
    ctx.obj = {"config_file": config_file}

    if show_config:
        if not config_file.is_file():
            console.print(
                "[red]✗ Config file not found.[/] Run [cyan]tubetag init[/cyan]"
                " first."
            )
            raise typer.Exit(code=1)
        settings = ConfigManager(config_file).load_config()
        print_config(config_file, settings)
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


@app.command()
def init(
    ctx: typer.Context,
    working_dir: Path = typer.Option(  # noqa: B008
        ...,
        "--working-dir",
        "-w",
        help="Directory the downloader saves its files to.",
        file_okay=False,
    ),
    move_to_dir: Path = typer.Option(  # noqa: B008
        ...,
        "--move-to-dir",
        "-m",
        help="Root directory of the music library to move finished files into.",
        file_okay=False,
    ),
    force: bool = typer.Option(
        False, "--force", "-f", help="Overwrite an existing configuration file."
    ),
):
    """Initialize a configuration file with default settings."""
    config_file = _config_file(ctx)
    if (
        config_file.exists()
        and not force
        and not typer.confirm("Configuration file already exists. Overwrite it?")
    ):
        raise typer.Abort()

    settings = {
        "working_directory": str(working_dir.expanduser()),
        "move_to_directory": str(move_to_dir.expanduser()),
    }
    ConfigManager(config_file).save_new_config(settings)
    console.print(
        f"\n[bold green]✓ Configuration saved to "
        f"'{escape(str(config_file))}'[/bold green]"
    )
    console.print("Ready to go! Try: [cyan]tubetag process[/cyan]")


@app.command()
def process(
    ctx: typer.Context,
    media_type: MediaType = typer.Option(  # noqa: B008
        MediaType.VIDEO,
        "--media-type",
        "-t",
        help="The kind of resource the working directory's files were downloaded from.",
        case_sensitive=False,
    ),
    embed_images: bool | None = typer.Option(
        None,
        "--embed-images/--no-embed-images",
        help="Embed video thumbnails into the audio files.",
    ),
    verbose_output: bool | None = typer.Option(
        None,
        "--verbose-output/--no-verbose-output",
        help="Log every step taken for every file.",
    ),
):
    """Tag, rename and move the files in the working directory."""
    cli_options = {
        "embed_images": embed_images,
        "verbose_output": verbose_output,
    }

    try:
        settings = ConfigManager(_config_file(ctx)).load_config(cli_options)
    except TubeTagError as e:
        console.print(f"[bold red]Error: {escape(str(e))}[/bold red]")
        raise typer.Exit(code=1) from e

    if settings.verbose_output:
        logging.getLogger("tubetag").setLevel("DEBUG")

    console.print(
        f"[bold cyan]🎵 Post-processing '{escape(settings.working_directory)}' "
        f"({media_type.value})...[/bold cyan]"
    )
    stats = PostProcessor(settings).run(media_type)
    print_summary_panel(stats)

    if stats.is_fatal:
        raise typer.Exit(code=1)
