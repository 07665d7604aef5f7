"""
Cleans up the working directory once the audio files have been moved away.
"""

import logging
import os
import time
from collections.abc import Sequence
from pathlib import Path
from typing import Optional

from rich.markup import escape

from tubetag.models.config import UserSettings
from tubetag.models.metadata import CollectionMetadata
from tubetag.models.stats import PostProcessStats
from tubetag.tagging.tagging_set import TaggingSet
from tubetag.utils.path import delete_all_files, describe_leftover_files, list_files

log = logging.getLogger(__name__)


class Deleter:
    """Deletes sidecar files and checks that nothing else was left behind."""

    def __init__(self, settings: UserSettings):
        self.settings = settings

    def run(
        self,
        tagging_sets: Sequence[TaggingSet],
        collection: Optional[CollectionMetadata],
        stats: PostProcessStats,
    ) -> None:
        start = time.monotonic()
        paths = self.collect_sidecar_files(tagging_sets, collection)
        if not paths:
            log.debug("No sidecar files to delete.")
            return

        log.info(f"Deleting {len(paths)} leftover sidecar file(s)...")
        for path in paths:
            self.delete_file(path, stats)

        stats.deletion.elapsed_s = time.monotonic() - start
        if stats.deletion.failed:
            log.warning(
                f"[yellow]⚠ {stats.deletion.failed} file(s) could not be deleted."
                "[/yellow]"
            )

    def collect_sidecar_files(
        self,
        tagging_sets: Sequence[TaggingSet],
        collection: Optional[CollectionMetadata],
    ) -> list[Path]:
        """
        Lists the metadata and image files of the tagging sets, followed by any
        working directory file named after the collection, without duplicates.
        """
        paths = {}
        for tagging_set in tagging_sets:
            paths[tagging_set.json_file_path] = None
            paths[tagging_set.image_file_path] = None

        if collection and collection.id:
            try:
                for path in list_files(self.settings.working_path):
                    if f"[{collection.id}]" in path.name:
                        paths[path] = None
            except OSError as e:
                log.error(
                    f"  [red]✗ Could not list collection files:[/] "
                    f"{escape(str(e))}"
                )

        return list(paths)

    @staticmethod
    def delete_file(path: Path, stats: PostProcessStats) -> None:
        if not path.exists():
            stats.deletion.record_skip()
            return

        try:
            os.remove(path)
        except OSError as e:
            stats.deletion.record_failure(path.name, e)
            log.error(
                f"  [red]✗ Error deleting file '{escape(path.name)}':[/] "
                f"{escape(str(e))}"
            )
            return

        stats.deletion.record_success()
        log.debug(f"• Deleted '{escape(path.name)}'")

    def check_working_directory(self, stats: PostProcessStats) -> None:
        """
        Warns about any file still in the working directory, deleting them all
        when leftover files are configured to be cleared.
        """
        working_path = self.settings.working_path
        try:
            leftovers = list_files(working_path)
        except OSError as e:
            log.error(
                f"  [red]✗ Could not check the working directory:[/] "
                f"{escape(str(e))}"
            )
            return

        stats.leftover_files = [p.name for p in leftovers]
        if not leftovers:
            log.debug("The working directory is empty.")
            return

        log.warning(
            "[yellow]⚠ "
            + escape(describe_leftover_files(working_path, leftovers))
            + "[/yellow]"
        )

        if self.settings.clear_leftover_files:
            deleted, errors = delete_all_files(working_path)
            log.info(f"Deleted {deleted} leftover file(s).")
            for error in errors:
                log.error(f"  [red]✗ Error deleting leftover file:[/] {escape(error)}")
