"""
Utilities for handling file paths and working directory contents.
"""

import logging
import os
from pathlib import Path

from pathvalidate import sanitize_filename

log = logging.getLogger(__name__)


def create_dir(directory_path: Path) -> None:
    """Creates a directory if it does not already exist."""
    directory_path.mkdir(parents=True, exist_ok=True)


def sanitize_dir_name(name: str | None, replacement_text: str = "_") -> str:
    """Makes a single, valid directory name out of arbitrary metadata text."""
    if not name:
        return ""
    return sanitize_filename(
        name, replacement_text=replacement_text, platform="universal"
    ).strip()


def list_files(directory: Path) -> list[Path]:
    """Lists the regular files directly within a directory, sorted by name."""
    return sorted(p for p in directory.iterdir() if p.is_file())


def describe_leftover_files(
    directory: Path, file_paths: list[Path], show_max: int = 20
) -> str:
    """Builds a report listing (some of) the files left in a directory."""
    label = "file" if len(file_paths) == 1 else "files"
    lines = [
        f"Unexpectedly found {len(file_paths)} {label} in working directory "
        f"'{directory}':"
    ]
    lines.extend(f"• {p.name}" for p in file_paths[:show_max])
    if len(file_paths) > show_max:
        lines.append(f"... plus {len(file_paths) - show_max} more.")
    return "\n".join(lines)


def delete_all_files(directory: Path) -> tuple[int, list[str]]:
    """
    Deletes every file directly within a directory.

    Returns:
        The number of deleted files and the error messages of failed deletions.
    """
    deleted, errors = 0, []
    for path in list_files(directory):
        try:
            os.remove(path)
            deleted += 1
        except OSError as e:
            errors.append(f"{path.name}: {e}")
    return deleted, errors
