"""
The ordered rules used to clean up downloaded audio filenames.

Each rule is applied to the result of the rules before it, so the order
matters: the resource ID must be stripped before anything reformats the
text around it, and the cleanup rules must run last.
"""

import re
from typing import NamedTuple, Optional

# Placeholders such as %<1>s refer to the match group of the same number
PLACEHOLDER = re.compile(r"%<(\d+)>s")


class RenamePattern(NamedTuple):
    pattern: re.Pattern
    replacement: str
    description: Optional[str] = None


def _rule(
    pattern: str, replacement: str, description: Optional[str] = None
) -> RenamePattern:
    return RenamePattern(re.compile(pattern), replacement, description)


RENAME_PATTERNS: tuple[RenamePattern, ...] = (
    _rule(
        r"\s\[[\w_-]{11}\](?=\.\w{3,5})",
        "",
        "Remove trailing resource IDs",
    ),
    _rule(r"\s{2,}", " ", "Remove extra spaces"),
    _rule(
        r"(?<= - )\d{3} (\d{1,3})\.?\s?",
        "%<1>s - ",
        "Remove and reformat duplicate track numbers",
    ),
    _rule(
        r"\s*[(（【［\[\-]?(?:[Oo]fficial +|OFFICIAL +)?(?:HD )?"
        r"(?:[Mm]usic [Vv]ideo|MUSIC VIDEO|[Ll]yric [Vv]ideo|LYRIC VIDEO|[Vv]ideo|VIDEO"
        r"|[Aa]udio|AUDIO|[Vv]isualizer|[Ff]ull (?:[Aa]lbum|LP|EP)|M(?:[_/])?V)"
        r"[)】］）\]\-]?",
        "",
        "Remove unneeded labels",
    ),
    _rule(r"\s?[(（]歌詞入り[)）]", "", "Remove ' (歌詞入り)'"),
    _rule(r"【(.+)】(.+)", "%<1>s - %<2>s", "PERSON - TRACK"),
    _rule(
        r"(.+?)(?: - )(.+?) \[[\w⧸]+\] .+ \(([\d?？]{4})\)",
        "%<1>s - %<2>s [%<3>s]",
        "PERSON - TRACK [YEAR]",
    ),
    _rule(
        r"^(.+?)(?: - )?\s?[｢「『](.+)[」｣』]\s?\[?([12]\d{3})\]?(?:\s?MV)?",
        "%<1>s - %<2>s [%<3>s]",
        "Reformat 'PERSON「TITLE」YEAR' and 'PERSON「TITLE」[YEAR]'",
    ),
    _rule(
        r"^(.+?)(?: - )?\s?[｢「『](.+?)[」｣』](?:\s?MV)?(?=\.\w{3,4})",
        "%<1>s - %<2>s",
        "Reformat 'PERSON「TITLE」' not followed by anything",
    ),
    _rule(
        r"^(.+?)(?: - )?\s?([｢「『].+?[」｣』](?:\s?MV)?.*)(?=\.\w{3,4})",
        "%<1>s - %<2>s",
        "Reformat 'PERSON「TITLE」' followed by other info",
    ),
    _rule(r"(^.+) \[\s(.+)\s\]", "%<1>s - %<2>s", "Reformat 'ARTIST [ TITLE ]'"),
    _rule(
        r"^(.+)\s+-\s+['＂](.+)['＂]",
        "%<1>s - %<2>s",
        "Reformat 'ARTIST - 'TITLE''",
    ),
    _rule(
        r"^(.+?)(?: - [｢「『])(.+)(?:[」｣』]).*(?=（Full Ver\.）)",
        "%<1>s - %<2>s",
        "Reformat 'ARTIST - 「TITLE」（Full Ver.）'",
    ),
    _rule(
        r"(\d+) - \[(feat.+)\] (.+) ⧸ (.+)(?=\.\w{3,4})",
        "%<4>s - %<1>s - %<3>s (%<2>s)",
        "Reformat 'NUMBER - [feat. GUEST] TITLE ⧸ ARTIST'",
    ),
    _rule(
        r"(.+) ?⧸ ?(.+)(?= ：(?: \w+)?\.\w{3,4})",
        "%<2>s - %<1>s",
        "Reformat 'TITLE ⧸ ARTIST ：'",
    ),
    # Cleanup
    _rule(r" - - ", " - ", "Compress doubled hyphens"),
    _rule(r" – ", " - ", "Replace en dashes with hyphens"),
)
