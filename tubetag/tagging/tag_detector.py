"""
Searches video metadata for specific tag field data (artist, album, etc.).
"""

from dataclasses import dataclass
from typing import Optional

from tubetag.models.metadata import VideoMetadata

from . import schemes
from .detectors import detect_multiple, detect_single, parse_text, parse_year
from .schemes import DetectionScheme

COMPOSER_SEPARATOR = "; "


@dataclass(frozen=True)
class TagDetectionPatterns:
    """The scheme lists used for each kind of tag."""

    title: tuple[DetectionScheme, ...] = schemes.TITLE_SCHEMES
    artist: tuple[DetectionScheme, ...] = schemes.ARTIST_SCHEMES
    album: tuple[DetectionScheme, ...] = schemes.ALBUM_SCHEMES
    composer: tuple[DetectionScheme, ...] = schemes.COMPOSER_SCHEMES
    year: tuple[DetectionScheme, ...] = schemes.YEAR_SCHEMES


class TagDetector:
    """Detects tag values within video metadata using a set of scheme lists."""

    def __init__(self, patterns: Optional[TagDetectionPatterns] = None):
        self.patterns = patterns or TagDetectionPatterns()

    def detect_title(
        self, video: VideoMetadata, default: Optional[str] = None
    ) -> Optional[str]:
        return detect_single(video, self.patterns.title, parse_text, default)

    def detect_artist(
        self, video: VideoMetadata, default: Optional[str] = None
    ) -> Optional[str]:
        return detect_single(video, self.patterns.artist, parse_text, default)

    def detect_album(
        self, video: VideoMetadata, default: Optional[str] = None
    ) -> Optional[str]:
        return detect_single(video, self.patterns.album, parse_text, default)

    def detect_composers(
        self, video: VideoMetadata, default: Optional[str] = None
    ) -> Optional[str]:
        return detect_multiple(
            video, self.patterns.composer, default, COMPOSER_SEPARATOR
        )

    def detect_release_year(
        self, video: VideoMetadata, default: Optional[int] = None
    ) -> Optional[int]:
        return detect_single(video, self.patterns.year, parse_year, default)
