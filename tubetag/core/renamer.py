"""
Renames audio files using an ordered list of rename patterns.
"""

import logging
import os
import time
from collections.abc import Iterable, Sequence
from functools import reduce
from pathlib import Path

from rich.markup import escape

from tubetag.models.stats import StageStats
from tubetag.tagging.tagging_set import TaggingSet

from .rename_patterns import PLACEHOLDER, RENAME_PATTERNS, RenamePattern

log = logging.getLogger(__name__)


def build_replacement(template: str, match) -> str:
    """
    Fills each placeholder of a replacement template with the trimmed text of the
    match group with the same number. Groups that did not match yield empty text.
    """

    def replacer(placeholder) -> str:
        group_number = int(placeholder.group(1))
        if group_number > (match.re.groups or 0):
            return ""
        return (match.group(group_number) or "").strip()

    return PLACEHOLDER.sub(replacer, template)


def apply_rename_pattern(file_name: str, rename_pattern: RenamePattern) -> str:
    """Replaces the first match of a single rename pattern, if any."""
    match = rename_pattern.pattern.search(file_name)
    if not match:
        return file_name

    log.debug(
        f"Rename pattern "
        f"{rename_pattern.description or rename_pattern.pattern.pattern!r} matched."
    )
    replacement = build_replacement(rename_pattern.replacement, match)
    return file_name[: match.start()] + replacement + file_name[match.end() :]


def apply_rename_patterns(
    file_name: str, rename_patterns: Sequence[RenamePattern] = RENAME_PATTERNS
) -> str:
    """Runs every rename pattern, in order, over the result of the previous one."""
    return reduce(apply_rename_pattern, rename_patterns, file_name)


class Renamer:
    """Renames the audio files of tagging sets in place."""

    def __init__(self, rename_patterns: Sequence[RenamePattern] = RENAME_PATTERNS):
        self.rename_patterns = rename_patterns

    def run(
        self, tagging_sets: Iterable[TaggingSet], stats: StageStats
    ) -> list[TaggingSet]:
        """
        Renames every audio file of the given tagging sets.

        Returns:
            The tagging sets with their audio paths updated. Files that could not
            be renamed keep their original paths.
        """
        start = time.monotonic()
        tagging_sets = list(tagging_sets)
        audio_count = sum(len(s.audio_file_paths) for s in tagging_sets)
        if audio_count == 0:
            log.warning("[yellow]⚠ No audio files to rename were found.[/yellow]")
            return tagging_sets

        log.debug(f"Renaming {audio_count} audio file(s)...")
        renamed_sets = [
            tagging_set.with_audio_files(
                self.rename_file(path, stats) for path in tagging_set.audio_file_paths
            )
            for tagging_set in tagging_sets
        ]

        stats.elapsed_s = time.monotonic() - start
        return renamed_sets

    def rename_file(self, audio_path: Path, stats: StageStats) -> Path:
        new_name = apply_rename_patterns(audio_path.name, self.rename_patterns)
        if new_name == audio_path.name:
            stats.record_skip()
            return audio_path
        if new_name.strip().startswith("."):
            stats.record_skip()
            log.warning(
                f"[yellow]⚠ Keeping '{escape(audio_path.name)}': renaming would "
                f"leave only '{escape(new_name)}'.[/yellow]"
            )
            return audio_path

        new_path = audio_path.with_name(new_name)
        try:
            if new_path.exists():
                raise FileExistsError(f"'{new_name}' already exists")
            os.rename(audio_path, new_path)
        except OSError as e:
            stats.record_failure(audio_path.name, e)
            log.error(
                f"  [red]✗ Could not rename '{escape(audio_path.name)}':[/] "
                f"{escape(str(e))}"
            )
            return audio_path

        stats.record_success()
        log.debug(f"• From: '{escape(audio_path.name)}'")
        log.debug(f"    To: '{escape(new_name)}'")
        return new_path
