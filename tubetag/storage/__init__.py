"""
Storage Layer.

This package handles the persistence of user settings in the INI
configuration file.
"""

from .config_manager import ConfigManager

__all__ = ["ConfigManager"]
