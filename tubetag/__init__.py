"""Post-processing of downloaded video audio into a tagged music library."""

__version__ = "1.0.0"
