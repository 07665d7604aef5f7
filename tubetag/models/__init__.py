"""
Data Models Layer.

This package contains the Pydantic models and dataclasses that define the core
data structures used throughout the application, such as settings, sidecar
metadata, and run statistics.
"""

from .config import UserSettings
from .media import MediaType
from .metadata import CollectionMetadata, VideoMetadata
from .stats import PostProcessStats, StageStats

__all__ = [
    "CollectionMetadata",
    "MediaType",
    "PostProcessStats",
    "StageStats",
    "UserSettings",
    "VideoMetadata",
]
