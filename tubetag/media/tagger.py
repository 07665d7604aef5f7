"""
Resolves tag values from downloaded video metadata and writes them to audio files.
"""

import base64
import logging
import os
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import mutagen.id3 as id3
from mutagen.flac import FLAC, Picture
from mutagen.id3 import ID3NoHeaderError
from mutagen.mp4 import MP4, MP4Cover
from mutagen.oggopus import OggOpus
from mutagen.oggvorbis import OggVorbis
from mutagen.wave import WAVE
from rich.markup import escape

from tubetag.exceptions import MetadataError, UnsupportedAudioFormatError
from tubetag.models.config import UserSettings
from tubetag.models.metadata import CollectionMetadata, VideoMetadata
from tubetag.models.stats import PostProcessStats
from tubetag.tagging.tag_detector import TagDetector
from tubetag.tagging.tagging_set import TaggingSet

log = logging.getLogger(__name__)

# --- Constants ---
FLAC_MAX_BLOCKSIZE = 16777215  # ~16.7MB, max size for a FLAC metadata block
IMAGE_MIME = "image/jpeg"
FRONT_COVER = 3
ARTIST_SEPARATOR = ", "

MP4_EXTENSIONS = {".m4a", ".alac"}
VORBIS_EXTENSIONS = {".ogg", ".vorbis"}


@dataclass(frozen=True)
class TrackTags:
    """The final tag values for every audio file of a tagging set."""

    title: Optional[str]
    artist: Optional[str]
    album: Optional[str]
    composers: Optional[str]
    track_number: Optional[int]
    year: Optional[int]
    comment: str


class Tagger:
    """Writes metadata tags to the audio files of tagging sets."""

    def __init__(
        self, settings: UserSettings, tag_detector: Optional[TagDetector] = None
    ):
        self.settings = settings
        self.tag_detector = tag_detector or TagDetector()

    def run(
        self,
        tagging_sets: Iterable[TaggingSet],
        collection: Optional[CollectionMetadata],
        embed_images: bool,
        stats: PostProcessStats,
    ) -> list[TaggingSet]:
        """
        Tags every audio file of every tagging set.

        Returns:
            The tagging sets that were processed, without any deleted pre-split
            source files. Sets whose metadata could not be read are left out.
        """
        log.info("Adding file tags...")
        processed = []
        for tagging_set in tagging_sets:
            if result := self.process_set(tagging_set, collection, embed_images, stats):
                processed.append(result)
        return processed

    def process_set(
        self,
        tagging_set: TaggingSet,
        collection: Optional[CollectionMetadata],
        embed_images: bool,
        stats: PostProcessStats,
    ) -> Optional[TaggingSet]:
        log.debug(
            f"{len(tagging_set.audio_file_paths)} audio file(s) with resource ID "
            f"'{tagging_set.resource_id}'"
        )

        try:
            video = VideoMetadata.from_file(tagging_set.json_file_path)
        except MetadataError as e:
            stats.tagging.record_failure(tagging_set.resource_id, e)
            log.error(
                f"  [red]✗ Skipping '{tagging_set.resource_id}':[/] "
                f"{escape(str(e))}"
            )
            return None

        if tagging_set.is_split:
            tagging_set = self.delete_source_file(tagging_set, stats)

        tags = self.resolve_tags(video, collection)

        image_path = None
        if (
            embed_images
            and self.settings.embeds_images_for(video.uploader)
            and len(tagging_set.audio_file_paths) == 1
        ):
            image_path = tagging_set.image_file_path

        for audio_path in tagging_set.audio_file_paths:
            if self.tag_file(audio_path, tags, image_path):
                stats.tagging.record_success()
            else:
                stats.tagging.record_failure(audio_path.name, "Could not write tags")

        return tagging_set

    def delete_source_file(
        self, tagging_set: TaggingSet, stats: PostProcessStats
    ) -> TaggingSet:
        """
        Deletes the pre-split source audio of a split video, which is always the
        largest of the set's audio files. Returns the set without that file.
        """
        try:
            largest = max(tagging_set.audio_file_paths, key=lambda p: p.stat().st_size)
        except OSError as e:
            log.error(
                f"  [red]✗ Could not find the pre-split source file:[/] "
                f"{escape(str(e))}"
            )
            return tagging_set

        try:
            os.remove(largest)
        except OSError as e:
            log.error(
                f"  [red]✗ Error deleting pre-split source file "
                f"'{escape(largest.name)}':[/] {escape(str(e))}"
            )
            return tagging_set

        stats.source_files_deleted += 1
        log.debug(f"Deleted pre-split source file '{escape(largest.name)}'")
        return tagging_set.without_audio_file(largest)

    def resolve_tags(
        self, video: VideoMetadata, collection: Optional[CollectionMetadata]
    ) -> TrackTags:
        """
        Decides the value of each tag. Explicit metadata fields take precedence
        over detected values, which take precedence over defaults.
        """
        if video.track:
            title = video.track
            log.debug(f"• Using metadata title '{escape(str(title))}'")
        else:
            title = self.tag_detector.detect_title(video, video.title)
            log.debug(f"• Found title '{escape(str(title))}'")

        if video.artist:
            artist = video.artist.split(ARTIST_SEPARATOR)[0]
            log.debug(f"• Using metadata artist '{escape(str(artist))}'")
        elif artist := self.tag_detector.detect_artist(video):
            log.debug(f"• Found artist '{escape(str(artist))}'")

        if video.album:
            album = video.album
            log.debug(f"• Using metadata album '{escape(str(album))}'")
        elif album := self.tag_detector.detect_album(
            video, collection.title if collection else None
        ):
            log.debug(f"• Found album '{escape(str(album))}'")

        if composers := self.tag_detector.detect_composers(video):
            log.debug(f"• Found composer(s) '{escape(str(composers))}'")

        if video.release_year:
            year = video.release_year
            log.debug(f"• Using metadata release year '{year}'")
        else:
            default_year = (
                video.upload_year
                if self.settings.uses_upload_year_for(video.uploader)
                else None
            )
            if year := self.tag_detector.detect_release_year(video, default_year):
                log.debug(f"• Found year '{year}'")

        if video.playlist_index is not None:
            log.debug(f"• Using playlist index of {video.playlist_index} for track number")

        return TrackTags(
            title=title,
            artist=artist,
            album=album,
            composers=composers,
            track_number=video.playlist_index,
            year=year,
            comment=video.generate_comment(collection),
        )

    def tag_file(
        self, audio_path: Path, tags: TrackTags, image_path: Optional[Path] = None
    ) -> bool:
        log.debug(f"Current audio file: '{escape(audio_path.name)}'")
        try:
            self._write_tags(audio_path, tags, image_path)
            log.debug(f"Wrote tags to '{escape(audio_path.name)}'.")
            return True
        except Exception as e:
            log.error(
                f"  [red]✗ Failed to tag file '{escape(audio_path.name)}':[/] {escape(str(e))}",
                exc_info=log.getEffectiveLevel() == logging.DEBUG,
            )
            return False

    def _write_tags(
        self, audio_path: Path, tags: TrackTags, image_path: Optional[Path]
    ) -> None:
        image_data = self._read_image(image_path) if image_path else None
        suffix = audio_path.suffix.lower()

        if suffix in MP4_EXTENSIONS:
            self._tag_mp4(audio_path, tags, image_data)
        elif suffix == ".mp3":
            self._tag_mp3(audio_path, tags, image_data)
        elif suffix == ".wav":
            self._tag_wave(audio_path, tags, image_data)
        elif suffix == ".flac":
            audio = FLAC(audio_path)
            self._apply_vorbis_comments(audio, tags)
            if image_data:
                self._embed_flac_cover(audio, image_data)
            audio.save()
        elif suffix in VORBIS_EXTENSIONS or suffix == ".opus":
            audio = OggOpus(audio_path) if suffix == ".opus" else OggVorbis(audio_path)
            self._apply_vorbis_comments(audio, tags)
            if image_data:
                self._embed_ogg_cover(audio, image_data)
            audio.save()
        else:
            raise UnsupportedAudioFormatError(
                f"Writing tags to '{suffix}' files is not supported."
            )

    @staticmethod
    def _read_image(image_path: Path) -> Optional[bytes]:
        try:
            return image_path.read_bytes()
        except OSError as e:
            log.error(
                f"  [red]✗ Error reading image '{escape(image_path.name)}':[/] "
                f"{escape(str(e))}"
            )
            return None

    def _tag_mp4(
        self, audio_path: Path, tags: TrackTags, image_data: Optional[bytes]
    ) -> None:
        audio = MP4(audio_path)
        if audio.tags is None:
            audio.add_tags()

        if tags.title:
            audio["\xa9nam"] = [tags.title]
        if tags.artist:
            audio["\xa9ART"] = [tags.artist]
        if tags.album:
            audio["\xa9alb"] = [tags.album]
        if tags.composers:
            audio["\xa9wrt"] = [tags.composers]
        if tags.track_number is not None:
            audio["trkn"] = [(tags.track_number, 0)]
        if tags.year:
            audio["\xa9day"] = [str(tags.year)]
        audio["\xa9cmt"] = [tags.comment]

        if image_data:
            audio["covr"] = [MP4Cover(image_data, imageformat=MP4Cover.FORMAT_JPEG)]

        audio.save()

    def _tag_mp3(
        self, audio_path: Path, tags: TrackTags, image_data: Optional[bytes]
    ) -> None:
        try:
            audio = id3.ID3(audio_path)
        except ID3NoHeaderError:
            audio = id3.ID3()

        self._apply_id3_frames(audio, tags, image_data)
        audio.save(filename=audio_path, v2_version=3)

    def _tag_wave(
        self, audio_path: Path, tags: TrackTags, image_data: Optional[bytes]
    ) -> None:
        audio = WAVE(audio_path)
        if audio.tags is None:
            audio.add_tags()

        self._apply_id3_frames(audio.tags, tags, image_data)
        audio.save()

    @staticmethod
    def _apply_id3_frames(
        audio: id3.ID3, tags: TrackTags, image_data: Optional[bytes]
    ) -> None:
        if tags.title:
            audio.add(id3.TIT2(encoding=3, text=tags.title))
        if tags.artist:
            audio.add(id3.TPE1(encoding=3, text=tags.artist))
        if tags.album:
            audio.add(id3.TALB(encoding=3, text=tags.album))
        if tags.composers:
            audio.add(id3.TCOM(encoding=3, text=tags.composers))
        if tags.track_number is not None:
            audio.add(id3.TRCK(encoding=3, text=str(tags.track_number)))
        if tags.year:
            audio.add(id3.TDRC(encoding=3, text=str(tags.year)))
        audio.delall("COMM")
        audio.add(id3.COMM(encoding=3, lang="eng", desc="", text=tags.comment))

        if image_data:
            audio.delall("APIC")
            audio.add(
                id3.APIC(
                    encoding=3,
                    mime=IMAGE_MIME,
                    type=FRONT_COVER,
                    desc="Cover",
                    data=image_data,
                )
            )

    @staticmethod
    def _apply_vorbis_comments(audio, tags: TrackTags) -> None:
        values = {
            "TITLE": tags.title,
            "ARTIST": tags.artist,
            "ALBUM": tags.album,
            "COMPOSER": tags.composers,
            "TRACKNUMBER": tags.track_number,
            "DATE": tags.year,
            "COMMENT": tags.comment,
        }
        for key, value in values.items():
            if value is not None and value != "":
                audio[key] = [str(value)]

    @staticmethod
    def _build_picture(image_data: bytes) -> Picture:
        pic = Picture()
        pic.type = FRONT_COVER
        pic.mime = IMAGE_MIME
        pic.data = image_data
        return pic

    def _embed_flac_cover(self, audio: FLAC, image_data: bytes) -> None:
        if len(image_data) > FLAC_MAX_BLOCKSIZE:
            log.warning("[yellow]Cover art is too large to embed in FLAC.[/yellow]")
            return

        audio.clear_pictures()
        audio.add_picture(self._build_picture(image_data))

    def _embed_ogg_cover(self, audio, image_data: bytes) -> None:
        encoded = base64.b64encode(self._build_picture(image_data).write())
        audio["METADATA_BLOCK_PICTURE"] = [encoded.decode("ascii")]
