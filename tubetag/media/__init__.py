"""
Media Processing Layer.

This package is responsible for all operations on media file contents,
including metadata tagging and thumbnail trimming.
"""

from .image_processor import ImageProcessor
from .tagger import Tagger, TrackTags

__all__ = ["ImageProcessor", "Tagger", "TrackTags"]
