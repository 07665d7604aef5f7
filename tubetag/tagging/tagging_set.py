"""
Groups the files of a working directory into tagging sets.

Files are related when they share the same resource ID. Usually only a single
downloaded video has a given ID, but when a video is split by chapters, every
audio file split out of it carries the ID of the source video too.
"""

import re
from collections.abc import Iterable
from dataclasses import dataclass, replace
from pathlib import Path

AUDIO_EXTENSIONS = frozenset(
    {".aac", ".alac", ".flac", ".m4a", ".mp3", ".ogg", ".vorbis", ".opus", ".wav"}
)
JSON_EXTENSION = ".json"
IMAGE_EXTENSION = ".jpg"

# Group 1 is the resource ID
FILE_NAME_WITH_RESOURCE_ID = re.compile(r".+\[([\w-]{11})\](?:.*)?\.(\w+)")


def is_audio_file(path: Path) -> bool:
    return path.suffix.lower() in AUDIO_EXTENSIONS


def _has_extension(path: Path, extension: str) -> bool:
    return path.name.lower().endswith(extension)


@dataclass(frozen=True)
class TaggingSet:
    """All the files necessary for tagging the audio of one resource ID."""

    resource_id: str
    audio_file_paths: tuple[Path, ...]
    json_file_path: Path
    image_file_path: Path

    def __post_init__(self):
        if not self.resource_id.strip():
            raise ValueError("The resource ID must be provided.")
        if not self.audio_file_paths:
            raise ValueError("At least one audio file path must be provided.")

    @property
    def all_files(self) -> list[Path]:
        return [*self.audio_file_paths, self.json_file_path, self.image_file_path]

    @property
    def is_split(self) -> bool:
        """Whether the source video was split into several audio files."""
        return len(self.audio_file_paths) > 1

    def without_audio_file(self, audio_path: Path) -> "TaggingSet":
        remaining = tuple(p for p in self.audio_file_paths if p != audio_path)
        return replace(self, audio_file_paths=remaining)

    def with_audio_files(self, audio_paths: Iterable[Path]) -> "TaggingSet":
        return replace(self, audio_file_paths=tuple(audio_paths))


def create_tagging_sets(file_paths: Iterable[Path]) -> list[TaggingSet]:
    """
    Creates tagging sets from a collection of file paths related to several
    resource IDs. Each ID needs at least one audio file, exactly one JSON file,
    and exactly one image file; groups that don't meet that are ignored.

    Collection (playlist or channel) metadata files are never included, since
    their IDs are longer than a resource ID.
    """
    groups: dict[str, list[Path]] = {}
    for path in sorted(Path(p) for p in file_paths):
        if match := FILE_NAME_WITH_RESOURCE_ID.fullmatch(path.name):
            groups.setdefault(match.group(1), []).append(path)

    tagging_sets = []
    for resource_id, paths in groups.items():
        audio_paths = [p for p in paths if is_audio_file(p)]
        json_paths = [p for p in paths if _has_extension(p, JSON_EXTENSION)]
        image_paths = [p for p in paths if _has_extension(p, IMAGE_EXTENSION)]

        if not audio_paths or len(json_paths) != 1 or len(image_paths) != 1:
            continue

        tagging_sets.append(
            TaggingSet(
                resource_id=resource_id,
                audio_file_paths=tuple(audio_paths),
                json_file_path=json_paths[0],
                image_file_path=image_paths[0],
            )
        )

    return tagging_sets
