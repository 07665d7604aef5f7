"""
Entry point for `python -m tubetag` and the `tubetag` console script.

Errors that escape the Typer application are rendered as a panel with
suggestions instead of a traceback.
"""

import logging
import os
import sys

import typer
from rich.console import Console

from tubetag.cli.app import app
from tubetag.cli.formatters import format_error_with_suggestions
from tubetag.exceptions import TubeTagError

log = logging.getLogger("tubetag")


def _use_utf8_streams() -> None:
    # File names from video titles routinely contain characters outside the
    # Windows console code page.
    for stream in (sys.stdout, sys.stderr):
        try:
            stream.reconfigure(encoding="utf-8")
        except (TypeError, AttributeError):
            pass


def main() -> None:
    if os.name == "nt":
        _use_utf8_streams()

    console = Console(stderr=True)

    try:
        app()
    except (typer.Exit, typer.Abort):
        pass
    except KeyboardInterrupt:
        console.print(
            "\n[yellow]⚠️  Interrupted. Files already moved stay in the library;"
            " the rest remain in the working directory.[/yellow]"
        )
        sys.exit(0)
    except TubeTagError as e:
        console.print(f"\n{format_error_with_suggestions(e)}")
        sys.exit(1)
    except OSError as e:
        context = {"type": "Filesystem", "path": e.filename} if e.filename else None
        console.print(f"\n{format_error_with_suggestions(e, context)}")
        log.debug("Full traceback:", exc_info=True)
        sys.exit(1)
    except Exception as e:
        console.print(f"\n{format_error_with_suggestions(e, {'type': 'Unexpected'})}")
        log.debug("Full traceback:", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
