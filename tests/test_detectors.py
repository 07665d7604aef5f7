"""Tests for the generic single- and multi-value detection functions."""

import re

import pytest

from tubetag.models.metadata import VideoMetadata
from tubetag.tagging.detectors import (
    detect_multiple,
    detect_single,
    extract_field_text,
    parse_text,
    parse_year,
)
from tubetag.tagging.schemes import COMPOSER_SCHEMES, DetectionScheme, SourceField


def _scheme(pattern: str, source: SourceField, group: int = 1) -> DetectionScheme:
    return DetectionScheme(re.compile(pattern), source, group)


def _video(title: str = "", description: str = "") -> VideoMetadata:
    return VideoMetadata(id="dQw4w9WgXcQ", title=title, description=description)


class TestDetectSingle:
    """Test first-match detection of a single value."""

    def test_first_scheme_in_list_order_wins(self):
        """Test that list order decides, not which field is searched."""
        video = _video(title="Alice rocks", description="A song by Bob")
        by_description = _scheme(r"by (\w+)", SourceField.DESCRIPTION)
        by_title = _scheme(r"(\w+) rocks", SourceField.TITLE)

        assert detect_single(video, [by_description, by_title]) == "Bob"
        assert detect_single(video, [by_title, by_description]) == "Alice"

    def test_textual_position_does_not_matter(self):
        """Test that an earlier match in the text does not beat scheme order."""
        video = _video(description="first: Zed, second: Amelia-Rose")
        second = _scheme(r"second: (\S+)", SourceField.DESCRIPTION)
        first = _scheme(r"first: (\w+)", SourceField.DESCRIPTION)

        assert detect_single(video, [second, first]) == "Amelia-Rose"

    def test_match_is_trimmed(self):
        video = _video(description="Artist:   Someone   \n")
        scheme = _scheme(r"Artist:(.+)", SourceField.DESCRIPTION)

        assert detect_single(video, [scheme]) == "Someone"

    def test_no_match_returns_default(self):
        video = _video(title="Nothing to see")
        scheme = _scheme(r"Album: (.+)", SourceField.TITLE)

        assert detect_single(video, [scheme], default="Fallback") == "Fallback"
        assert detect_single(video, [scheme]) is None

    def test_empty_capture_falls_through(self):
        """Test that a matched but empty group counts as no match."""
        video = _video(description="x= and later y=Found")
        empty = _scheme(r"x=(\w*)", SourceField.DESCRIPTION)
        later = _scheme(r"y=(\w+)", SourceField.DESCRIPTION)

        assert detect_single(video, [empty, later]) == "Found"

    def test_unmatched_optional_group_falls_through(self):
        video = _video(title="b then c=Value")
        optional = _scheme(r"(a)?b", SourceField.TITLE)
        later = _scheme(r"c=(\w+)", SourceField.TITLE)

        assert detect_single(video, [optional, later]) == "Value"

    def test_parse_failure_returns_default(self):
        """Test that unparsable text yields the default without trying on."""
        video = _video(description="year=abcd (1999)")
        unparsable = _scheme(r"year=(\w+)", SourceField.DESCRIPTION)
        parsable = _scheme(r"\((\d{4})\)", SourceField.DESCRIPTION)

        assert detect_single(video, [unparsable, parsable], parse_year, 2000) == 2000
        assert detect_single(video, [parsable, unparsable], parse_year, 2000) == 1999

    def test_missing_fields_are_searched_as_empty_text(self):
        video = VideoMetadata(id="dQw4w9WgXcQ")
        scheme = _scheme(r"(.*)", SourceField.DESCRIPTION)

        assert detect_single(video, [scheme], default="none") == "none"


class TestDetectMultiple:
    """Test detection of every matching value."""

    def test_collects_distinct_values_in_order(self):
        """Test that all matches of all schemes are joined without duplicates."""
        video = _video(
            title="Song 作曲：Carol",
            description="Composer: Alice\n作曲：Bob\nComposed by Alice",
        )

        assert detect_multiple(video, COMPOSER_SCHEMES) == "Alice; Bob; Carol"

    def test_custom_separator(self):
        video = _video(description="Composer: Alice\nComposer: Bob")

        assert detect_multiple(video, COMPOSER_SCHEMES, separator=" / ") == (
            "Alice / Bob"
        )

    def test_no_match_returns_default(self):
        video = _video(title="Plain", description="Nothing here")

        assert detect_multiple(video, COMPOSER_SCHEMES, default="Unknown") == "Unknown"
        assert detect_multiple(video, COMPOSER_SCHEMES) is None


class TestParsers:
    """Test the typed parse functions."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [("1999", 1999), ("2024", 2024), ("99", None), ("abcd", None), ("0000", None)],
    )
    def test_parse_year(self, text, expected):
        assert parse_year(text) == expected

    def test_parse_text(self):
        assert parse_text("Words") == "Words"
        assert parse_text("") is None


def test_extract_field_text():
    video = _video(title="The title", description="The description")

    assert extract_field_text(video, SourceField.TITLE) == "The title"
    assert extract_field_text(video, SourceField.DESCRIPTION) == "The description"
