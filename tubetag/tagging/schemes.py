"""
The detection schemes used to find tag data (title, artist, album, composers,
release year) within video metadata.

Each tag kind has an ordered tuple of schemes. For single-value tags the order
is the precedence: the first scheme that matches wins, regardless of where in
the text its match lies. All patterns are compiled once at import time.
"""

import re
from enum import Enum
from typing import NamedTuple, Optional

# A blank line, however the description's line breaks were encoded
_BLANK_LINE = r"(?:\n|\r|\r\n){2}"

# "TITLE · ARTIST", blank line, "ALBUM", blank line, "℗ YEAR LABEL"
_TOPIC_WITH_YEAR = (
    rf"(.+?) · (.+){_BLANK_LINE}(.+){_BLANK_LINE}.*℗ ([12]\d{{3}})\D"
)
_TOPIC = rf"(.+?) · (.+){_BLANK_LINE}(.+){_BLANK_LINE}.*℗"


class SourceField(str, Enum):
    """The metadata field a scheme searches."""

    TITLE = "title"
    DESCRIPTION = "description"


class DetectionScheme(NamedTuple):
    pattern: re.Pattern
    source: SourceField
    group: int = 0
    note: Optional[str] = None


def _scheme(
    pattern: str, group: int, source: SourceField, note: Optional[str] = None
) -> DetectionScheme:
    return DetectionScheme(re.compile(pattern), source, group, note)


TITLE_SCHEMES: tuple[DetectionScheme, ...] = (
    _scheme(_TOPIC_WITH_YEAR, 1, SourceField.DESCRIPTION, "Topic style"),
    _scheme(_TOPIC, 1, SourceField.DESCRIPTION, "pseudo-Topic style"),
    _scheme(
        r"(.+) (?:\d\w{2}|Vol\.\d)?『(.+)』\[([12]\d{3})\]",
        2,
        SourceField.TITLE,
        "ARTIST 1st『TITLE』[YEAR]",
    ),
    _scheme(r"(.+?) ['\"](.+)['\"]", 2, SourceField.TITLE, "ARTIST 'TITLE'"),
    _scheme(r"^(.+?)「(.+)」", 2, SourceField.TITLE, "ARTIST「TITLE」"),
    _scheme(
        r"(.+) ?⧸ ?(.+)(?= ?：(?: \w+)?\.\w{3,4})",
        1,
        SourceField.TITLE,
        "TITLE ⧸ ARTIST ：",
    ),
    _scheme(r"(.+) ⧸ (.+)(?=\.m4a)", 2, SourceField.TITLE, "ARTIST ⧸ TITLE"),
    _scheme(r"^【(.+)】(.+)$", 2, SourceField.TITLE, "【ARTIST】TITLE"),
)

ARTIST_SCHEMES: tuple[DetectionScheme, ...] = (
    _scheme(_TOPIC_WITH_YEAR, 2, SourceField.DESCRIPTION, "Topic style"),
    _scheme(_TOPIC, 2, SourceField.DESCRIPTION, "pseudo-Topic style"),
    _scheme(
        r"(.+?)(?: - )?[「『](.+)[」』]\[([12]\d{3})\]",
        1,
        SourceField.TITLE,
        "ARTIST「TITLE」[YEAR]",
    ),
    _scheme(r"(.+?) ['\"](.+)['\"]", 1, SourceField.TITLE, "ARTIST 'TITLE'"),
    _scheme(r"^(.+?)「(.+)」", 1, SourceField.TITLE, "ARTIST「TITLE」"),
    _scheme(
        r"(.+) ?⧸ ?(.+)(?= ：(?: \w+)?\.\w{3,4})",
        2,
        SourceField.TITLE,
        "TITLE ⧸ ARTIST ：",
    ),
    _scheme(r"(.+) ⧸ (.+)(?=\.m4a)", 1, SourceField.TITLE, "ARTIST ⧸ TITLE"),
    _scheme(r"^【(.+)】(.+)$", 1, SourceField.TITLE, "【ARTIST】TITLE"),
    _scheme(r"歌[:：](.+)", 1, SourceField.DESCRIPTION, "歌：ARTIST"),
)

ALBUM_SCHEMES: tuple[DetectionScheme, ...] = (
    _scheme(r"[Aa]lbum: (.+)", 1, SourceField.DESCRIPTION, "Album: NAME"),
    _scheme(_TOPIC_WITH_YEAR, 3, SourceField.DESCRIPTION, "Topic style"),
    _scheme(_TOPIC, 3, SourceField.DESCRIPTION, "pseudo-Topic style"),
    _scheme(
        r"(?:アルバム|シングル)[『「](.+?)[」』]", 1, SourceField.TITLE, "アルバム「NAME」"
    ),
    _scheme(
        r"(?:アルバム|シングル)[『「](.+?)[」』]",
        1,
        SourceField.DESCRIPTION,
        "アルバム「NAME」",
    ),
    _scheme(r"EP[『「](.+?)[」』]収録", 1, SourceField.DESCRIPTION, "EP「NAME」収録"),
    _scheme(
        r"'s ['\"](.+)['\"] album", 1, SourceField.DESCRIPTION, "ARTIST's 'NAME' album"
    ),
    _scheme(r"Vol\.\d『(.+)』", 1, SourceField.DESCRIPTION, "Vol.1『NAME』"),
    _scheme(r"\w{3}アルバム『(.+)』", 1, SourceField.DESCRIPTION, "1stアルバム『NAME』"),
)

_COMPOSER = r"(?:[Cc]omposed by:? |[Cc]omposer: |作曲[:：・])(.+)"

COMPOSER_SCHEMES: tuple[DetectionScheme, ...] = (
    _scheme(_COMPOSER, 1, SourceField.DESCRIPTION),
    _scheme(_COMPOSER, 1, SourceField.TITLE),
)

_TITLE_TRACK_YEAR = r"(.+) (?:\d\w{2}|Vol\.\d)?『(.+)』\[([12]\d{3})\]"

YEAR_SCHEMES: tuple[DetectionScheme, ...] = (
    _scheme(
        r"[(（\[［【]([12]\d{3})[)）\]］】]",
        1,
        SourceField.TITLE,
        "bracketed year",
    ),
    _scheme(r"℗ ([12]\d{3})", 1, SourceField.DESCRIPTION, "℗ symbol"),
    _scheme(r"℗ ([12]\d{3})", 1, SourceField.TITLE, "℗ symbol"),
    _scheme(
        r"[Rr]eleased [io]n: ([12]\d{3})",
        1,
        SourceField.DESCRIPTION,
        "'released on' date",
    ),
    _scheme(
        r"([12]\d{3})(?=(?:[./年]\d{1,2}[./月]\d{1,2}日?\s?)?\s?(?:[Rr]elease|リリース|発売))",
        1,
        SourceField.DESCRIPTION,
        "'year first'-style year",
    ),
    _scheme(
        r"([12]\d{3})(?=年(?:\d{1,2}月\d{1,2}日)?(?:配信)?リリース)",
        1,
        SourceField.DESCRIPTION,
        "YEAR年MONTH月DATE日配信リリース, YEAR年リリース",
    ),
    _scheme(
        r"([12]\d{3})年(?=\d{1,2}月\d{1,2}日\s?[Rr]elease)",
        1,
        SourceField.DESCRIPTION,
        "YEAR年MONTH月DATE日 release",
    ),
    _scheme(_TITLE_TRACK_YEAR, 3, SourceField.TITLE),
    _scheme(_TITLE_TRACK_YEAR, 3, SourceField.DESCRIPTION),
    _scheme(r"\(C\)\s?([12]\d{3})", 1, SourceField.DESCRIPTION, "(C) YEAR"),
    _scheme(
        r"^(.+?)「(.+)」\s?([12]\d{3})\s?", 3, SourceField.TITLE, "ARTIST「TITLE」YEAR"
    ),
)
