"""
Detection of specific text within video metadata.
"""

import logging
from collections.abc import Callable, Iterable
from typing import Optional, TypeVar

from rich.markup import escape

from tubetag.models.metadata import VideoMetadata

from .schemes import DetectionScheme, SourceField

log = logging.getLogger(__name__)

T = TypeVar("T")

Parser = Callable[[str], Optional[T]]


def parse_text(text: str) -> Optional[str]:
    """Returns non-empty text as-is."""
    return text or None


def parse_year(text: str) -> Optional[int]:
    """Parses a four-digit year, returning None if the text is not one."""
    if len(text) != 4 or not text.isdigit():
        return None
    year = int(text)
    return year if year > 0 else None


def extract_field_text(metadata: VideoMetadata, source: SourceField) -> str:
    """Returns the text content of the requested field of the video metadata."""
    if source is SourceField.TITLE:
        return metadata.title or ""
    if source is SourceField.DESCRIPTION:
        return metadata.description or ""
    raise ValueError(f"'{source}' is an invalid video metadata field name.")


def detect_single(
    metadata: VideoMetadata,
    schemes: Iterable[DetectionScheme],
    parser: Parser = parse_text,
    default: Optional[T] = None,
) -> Optional[T]:
    """
    Finds the first text matching one of the given schemes, in scheme order.

    Only the first scheme that matches is used; if its text cannot be parsed,
    the default is returned rather than trying the remaining schemes.

    Args:
        metadata: The video metadata to search.
        schemes: The schemes to try, in order of precedence.
        parser: Converts the matched text to the target type, or returns None.
        default: The value to return when nothing matches or parsing fails.
    """
    for scheme in schemes:
        text = extract_field_text(metadata, scheme.source)
        match = scheme.pattern.search(text)
        if not match:
            continue

        matched_text = (match.group(scheme.group) or "").strip()
        if not matched_text:
            continue

        log.debug(
            f"Matched '{escape(matched_text)}' in {scheme.source.value}"
            + (f" ({scheme.note})" if scheme.note else "")
        )
        parsed = parser(matched_text)
        return default if parsed is None else parsed

    return default


def detect_multiple(
    metadata: VideoMetadata,
    schemes: Iterable[DetectionScheme],
    default: Optional[str] = None,
    separator: str = "; ",
) -> Optional[str]:
    """
    Finds all text matching any of the given schemes and joins the distinct
    values, in the order found, with the separator.
    """
    matched_values: dict[str, None] = {}

    for scheme in schemes:
        text = extract_field_text(metadata, scheme.source)
        for match in scheme.pattern.finditer(text):
            if value := (match.group(scheme.group) or "").strip():
                matched_values.setdefault(value, None)

    if not matched_values:
        return default

    return separator.join(matched_values)
