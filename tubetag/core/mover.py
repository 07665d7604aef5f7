"""
Moves finished audio files (and a cover image) into the music library.
"""

import logging
import os
import re
import shutil
import time
from collections.abc import Sequence
from pathlib import Path
from typing import Optional

from rich.markup import escape

from tubetag.exceptions import DestinationDirectoryError, MetadataError
from tubetag.models.config import UserSettings
from tubetag.models.metadata import CollectionMetadata, VideoMetadata
from tubetag.models.stats import PostProcessStats
from tubetag.tagging.tagging_set import IMAGE_EXTENSION, TaggingSet
from tubetag.utils.path import create_dir, list_files, sanitize_dir_name

log = logging.getLogger(__name__)

COVER_FILE_NAME = "cover.jpg"
PLAYLIST_IMAGE = re.compile(r"\[[OP]L[\w-]+\]")


def is_playlist_image(path: Path) -> bool:
    return bool(PLAYLIST_IMAGE.search(path.name))


class Mover:
    """Relocates the audio files of processed tagging sets."""

    def __init__(self, settings: UserSettings):
        self.settings = settings

    def run(
        self,
        tagging_sets: Sequence[TaggingSet],
        collection: Optional[CollectionMetadata],
        stats: PostProcessStats,
    ) -> Optional[Path]:
        """
        Moves all audio files of the tagging sets to the destination directory.

        Returns:
            The destination directory, or None if there was nothing to move.

        Raises:
            DestinationDirectoryError: If the destination directory cannot be created.
        """
        start = time.monotonic()
        if not tagging_sets:
            log.warning("[yellow]⚠ No tagged audio files to move were found.[/yellow]")
            return None

        destination = self.get_destination(tagging_sets[0], collection)
        stats.destination = str(destination)
        self._ensure_destination(destination)

        audio_paths = [p for s in tagging_sets for p in s.audio_file_paths]
        log.info(
            f"Moving {len(audio_paths)} audio file(s) to "
            f"'{escape(str(destination))}'..."
        )

        for audio_path in audio_paths:
            try:
                self.move_file(audio_path, destination / audio_path.name)
                stats.moving.record_success()
                log.debug(f"• Moved '{escape(audio_path.name)}'")
            except OSError as e:
                stats.moving.record_failure(audio_path.name, e)
                log.error(
                    f"  [red]✗ Error moving file '{escape(audio_path.name)}':[/] "
                    f"{escape(str(e))}"
                )

        stats.cover_promoted = self.promote_cover_image(
            destination, len(audio_paths)
        )

        stats.moving.elapsed_s = time.monotonic() - start
        log.info(f"{stats.moving.succeeded} file(s) moved.")
        if stats.moving.failed:
            log.warning(
                f"[yellow]⚠ However, {stats.moving.failed} file(s) could not be moved."
                "[/yellow]"
            )
        return destination

    def get_destination(
        self, tagging_set: TaggingSet, collection: Optional[CollectionMetadata]
    ) -> Path:
        """Builds '<move-to>/<uploader>/<collection title>' for this batch."""
        uploader_dir = sanitize_dir_name(self._get_uploader_name(tagging_set, collection))
        collection_dir = sanitize_dir_name(collection.title if collection else None)
        return self.settings.move_to_path / uploader_dir / collection_dir

    @staticmethod
    def _get_uploader_name(
        tagging_set: TaggingSet, collection: Optional[CollectionMetadata]
    ) -> str:
        if collection and collection.uploader and collection.title:
            return collection.uploader

        try:
            video = VideoMetadata.from_file(tagging_set.json_file_path)
        except MetadataError as e:
            log.warning(
                f"[yellow]⚠ Could not read the uploader name:[/yellow] "
                f"{escape(str(e))}"
            )
            return ""
        return video.uploader or ""

    @staticmethod
    def _ensure_destination(destination: Path) -> None:
        if destination.is_dir():
            return
        log.info(f"Creating move-to directory '{escape(str(destination))}'...")
        try:
            create_dir(destination)
        except OSError as e:
            raise DestinationDirectoryError(
                f"Error creating move-to directory '{destination}': {e}"
            ) from e

    def move_file(self, source: Path, target: Path) -> None:
        if target.exists():
            if not self.settings.overwrite_existing_files:
                raise FileExistsError(f"'{target}' already exists")
            os.remove(target)
        shutil.move(source, target)

    def select_cover_image(self, audio_count: int) -> Optional[Path]:
        """
        Picks the one image worth keeping as the cover of the moved files.

        A playlist or album image is always preferred. Otherwise, a lone image
        is only used when several audio files were handled (e.g., a video split
        into chapters). Anything else is ambiguous, so no image is chosen.
        """
        images = [
            p
            for p in list_files(self.settings.working_path)
            if p.name.lower().endswith(IMAGE_EXTENSION)
        ]

        if playlist_images := [p for p in images if is_playlist_image(p)]:
            return playlist_images[0]
        if audio_count > 1 and len(images) == 1:
            return images[0]
        return None

    def promote_cover_image(self, destination: Path, audio_count: int) -> Optional[str]:
        try:
            image = self.select_cover_image(audio_count)
        except OSError as e:
            log.error(
                f"  [red]✗ Could not look for a cover image:[/] "
                f"{escape(str(e))}"
            )
            return None

        if image is None:
            log.debug("No unambiguous cover image was found, so none will be kept.")
            return None

        try:
            self.move_file(image, destination / COVER_FILE_NAME)
        except OSError as e:
            log.error(
                f"  [red]✗ Error moving cover image '{escape(image.name)}':[/] "
                f"{escape(str(e))}"
            )
            return None

        log.debug(f"• Moved '{escape(image.name)}' as '{COVER_FILE_NAME}'")
        return image.name
