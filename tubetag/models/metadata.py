"""
Pydantic models for the metadata files written alongside each download.

Only the fields used during post-processing are declared; everything else
in the downloader's JSON output is ignored.
"""

from datetime import datetime
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, ValidationError

from tubetag.exceptions import MetadataError


class _SidecarModel(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    @classmethod
    def from_file(cls, json_path: Path):
        """
        Reads and validates a metadata file.

        Raises:
            MetadataError: If the file cannot be read or does not hold valid metadata.
        """
        try:
            json_text = Path(json_path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise MetadataError(f"Error reading JSON file '{json_path}': {e}") from e

        try:
            return cls.model_validate_json(json_text)
        except ValidationError as e:
            raise MetadataError(
                f"Error deserializing metadata from '{json_path}': {e}"
            ) from e


class CollectionMetadata(_SidecarModel):
    """The metadata of a playlist or channel (both share the fields used here)."""

    id: str
    title: Optional[str] = None
    description: Optional[str] = None
    uploader: Optional[str] = None
    uploader_id: Optional[str] = None
    uploader_url: Optional[str] = None
    channel: Optional[str] = None
    channel_id: Optional[str] = None
    channel_url: Optional[str] = None
    availability: Optional[str] = None
    modified_date: Optional[str] = None
    playlist_count: Optional[int] = None
    webpage_url: Optional[str] = None


class VideoMetadata(_SidecarModel):
    """The metadata of a single downloaded video."""

    id: str
    title: Optional[str] = None
    fulltitle: Optional[str] = None
    alt_title: Optional[str] = None
    description: Optional[str] = None
    uploader: Optional[str] = None
    uploader_id: Optional[str] = None
    uploader_url: Optional[str] = None
    channel: Optional[str] = None
    channel_id: Optional[str] = None
    channel_url: Optional[str] = None
    creator: Optional[str] = None
    artist: Optional[str] = None
    album: Optional[str] = None
    track: Optional[str] = None
    upload_date: Optional[str] = None
    release_date: Optional[str] = None
    release_year: Optional[int] = None
    duration: Optional[float] = None
    playlist: Optional[str] = None
    playlist_id: Optional[str] = None
    playlist_title: Optional[str] = None
    playlist_index: Optional[int] = None
    webpage_url: Optional[str] = None

    @property
    def upload_year(self) -> Optional[int]:
        """The year portion of the YYYYMMDD upload date, if present."""
        if self.upload_date and self.upload_date[:4].isdigit():
            return int(self.upload_date[:4])
        return None

    def uploader_summary(self) -> str:
        """The uploader name followed by its URL or ID, when either is known."""
        link = self.uploader_url or self.uploader_id
        uploader = self.uploader or ""
        return f"{uploader} ({link})" if link else uploader

    def formatted_upload_date(self) -> str:
        """Converts the YYYYMMDD upload date into MM/DD/YYYY."""
        date = self.upload_date or ""
        if len(date) != 8 or not date.isdigit():
            return date or "Unknown"
        return f"{date[4:6]}/{date[6:8]}/{date[0:4]}"

    def generate_comment(
        self, collection: Optional[CollectionMetadata] = None
    ) -> str:
        """Builds a human-readable comment describing where the audio came from."""
        lines = [
            "TUBETAG SOURCE DATA:",
            f"■ Downloaded: {datetime.now():%Y-%m-%d %H:%M:%S}",
            f"■ URL: {self.webpage_url or ''}",
            f"■ Title: {self.fulltitle or self.title or ''}",
            f"■ Uploader: {self.uploader_summary()}",
        ]
        if self.creator and self.creator != self.uploader:
            lines.append(f"■ Creator: {self.creator}")
        if self.artist:
            lines.append(f"■ Artist: {self.artist}")
        if self.album:
            lines.append(f"■ Album: {self.album}")
        if self.title:
            lines.append(f"■ Title: {self.title}")
        lines.append(f"■ Uploaded: {self.formatted_upload_date()}")
        description = (self.description or "").strip() or "None."
        lines.append(f"■ Video description: {description}")

        if collection:
            lines.append("")
            lines.append(f"■ Playlist name: {collection.title or ''}")
            lines.append(f"■ Playlist URL: {collection.webpage_url or ''}")
            if self.playlist_index is not None:
                lines.append(f"■ Playlist index: {self.playlist_index}")
            if collection.description and collection.description.strip():
                lines.append(f"■ Playlist description: {collection.description}")

        return "\n".join(lines) + "\n"
