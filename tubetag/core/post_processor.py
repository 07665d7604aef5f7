"""
The main orchestrator that turns a working directory of downloaded files into
tagged audio files in the music library.
"""

import logging
import re
import time
from pathlib import Path
from typing import Optional

from rich.markup import escape

from tubetag.exceptions import (
    DestinationDirectoryError,
    MetadataError,
    NoTaggingSetsError,
)
from tubetag.media import ImageProcessor, Tagger
from tubetag.models.config import UserSettings
from tubetag.models.media import MediaType
from tubetag.models.metadata import CollectionMetadata
from tubetag.models.stats import PostProcessStats
from tubetag.tagging.tag_detector import TagDetector
from tubetag.tagging.tagging_set import TaggingSet, create_tagging_sets
from tubetag.utils.formatting import format_duration
from tubetag.utils.path import list_files

from .deleter import Deleter
from .mover import Mover
from .renamer import Renamer

log = logging.getLogger(__name__)

# Playlist and channel IDs are longer than the IDs of individual videos
COLLECTION_METADATA_FILE = re.compile(r"\[([\w-]{17,})\]\.info\.json$")


class PostProcessor:
    """Orchestrates the whole post-processing pipeline for one working directory."""

    def __init__(
        self, settings: UserSettings, tag_detector: Optional[TagDetector] = None
    ):
        self.settings = settings
        self.tagger = Tagger(settings, tag_detector)
        self.renamer = Renamer()
        self.mover = Mover(settings)
        self.deleter = Deleter(settings)

    def run(self, media_type: MediaType) -> PostProcessStats:
        """
        Processes every tagging set found in the working directory.

        Only a working directory without tagging sets or a move-to directory that
        cannot be created abort the run; the error is stored in the returned stats.
        Every other failure is counted and the run continues.
        """
        stats = PostProcessStats()
        try:
            self._run(media_type, stats)
        except (NoTaggingSetsError, DestinationDirectoryError) as e:
            stats.fatal_error = str(e)
            log.error(f"[red]✗ Post-processing aborted:[/] {escape(str(e))}")
            return stats

        log.info(f"Finished post-processing in {format_duration(stats.elapsed_s)}.")
        return stats

    def _run(self, media_type: MediaType, stats: PostProcessStats) -> None:
        tagging_sets = self.build_tagging_sets()
        stats.tagging_sets = len(tagging_sets)

        collection = self.load_collection_metadata()
        if collection:
            stats.collection_title = collection.title

        embed_images = self.settings.embed_images and media_type.allows_image_embedding
        if embed_images:
            ImageProcessor(self.settings.working_path).run()

        start = time.monotonic()
        tagged_sets = self.tagger.run(tagging_sets, collection, embed_images, stats)
        stats.tagging.elapsed_s = time.monotonic() - start
        log.info(
            f"Tagged {stats.tagging.succeeded} audio file(s) in "
            f"{format_duration(stats.tagging.elapsed_s)}."
        )

        renamed_sets = self.renamer.run(tagged_sets, stats.renaming)
        self.mover.run(renamed_sets, collection, stats)
        self.deleter.run(renamed_sets, collection, stats)
        self.deleter.check_working_directory(stats)

    def build_tagging_sets(self) -> list[TaggingSet]:
        """
        Raises:
            NoTaggingSetsError: If the working directory cannot be read or holds
                no complete tagging set.
        """
        working_path = self.settings.working_path
        try:
            file_paths = list_files(working_path)
        except OSError as e:
            raise NoTaggingSetsError(
                f"Could not read working directory '{working_path}': {e}"
            ) from e

        tagging_sets = create_tagging_sets(file_paths)
        if not tagging_sets:
            raise NoTaggingSetsError(
                f"No tagging sets were found in '{working_path}' "
                f"({len(file_paths)} file(s) present)."
            )

        log.info(f"Found {len(tagging_sets)} tagging set(s).")
        return tagging_sets

    def load_collection_metadata(self) -> Optional[CollectionMetadata]:
        """
        Reads the metadata of the playlist or channel the videos were downloaded
        from. There must be exactly one such file for it to be used.
        """
        try:
            json_paths = [
                p
                for p in list_files(self.settings.working_path)
                if COLLECTION_METADATA_FILE.search(p.name)
            ]
        except OSError as e:
            log.debug(f"Could not look for collection metadata: {escape(str(e))}")
            return None

        if not json_paths:
            log.debug("No collection metadata file was found.")
            return None
        if len(json_paths) > 1:
            log.warning(
                f"[yellow]⚠ Found {len(json_paths)} collection metadata files, "
                "so none will be used.[/yellow]"
            )
            return None

        return self._read_collection_metadata(json_paths[0])

    @staticmethod
    def _read_collection_metadata(json_path: Path) -> Optional[CollectionMetadata]:
        try:
            collection = CollectionMetadata.from_file(json_path)
        except MetadataError as e:
            log.debug(f"Ignoring collection metadata: {escape(str(e))}")
            return None

        log.debug(f"Using collection metadata for '{escape(collection.title or '')}'.")
        return collection
