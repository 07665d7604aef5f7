"""
The kinds of media a download can represent.
"""

from enum import Enum


class MediaType(str, Enum):
    """The kind of resource that produced the files in the working directory."""

    VIDEO = "video"
    PLAYLIST_VIDEO = "playlist-video"
    SEQUENCE = "sequence"
    PLAYLIST = "playlist"
    CHANNEL = "channel"

    @property
    def allows_image_embedding(self) -> bool:
        """
        Thumbnails are only embedded for individually requested videos. Whole
        collections tend to share artwork, which is promoted to a cover image instead.
        """
        return self in (MediaType.VIDEO, MediaType.PLAYLIST_VIDEO)
