"""
Defines custom exceptions for the application to allow for more specific error handling.
"""


class TubeTagError(Exception):
    """Base exception for all application-specific errors."""


class ConfigurationError(TubeTagError):
    """Raised for issues related to configuration loading or validation."""


class NoTaggingSetsError(TubeTagError):
    """
    Raised when the working directory yields no tagging sets, leaving nothing
    to post-process.
    """


class DestinationDirectoryError(TubeTagError):
    """Raised when the move-to directory for finished files cannot be created."""


class MetadataError(TubeTagError):
    """Raised when a video or collection metadata file cannot be read or parsed."""


class UnsupportedAudioFormatError(TubeTagError):
    """Raised when tags cannot be written to an audio file of a given format."""
