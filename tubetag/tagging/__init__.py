"""
Tag Detection Layer.

This package groups downloaded files into tagging sets and infers tag values
from loosely formatted video titles and descriptions.
"""

from .tag_detector import TagDetectionPatterns, TagDetector
from .tagging_set import TaggingSet, create_tagging_sets

__all__ = [
    "TagDetectionPatterns",
    "TagDetector",
    "TaggingSet",
    "create_tagging_sets",
]
