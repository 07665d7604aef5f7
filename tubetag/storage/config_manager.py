"""
Manages loading, validation, and migration of the INI configuration file.
"""

import configparser
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from tubetag.exceptions import ConfigurationError
from tubetag.models.config import UserSettings

log = logging.getLogger(__name__)

LIST_KEYS = {"do_not_embed_image_uploaders", "ignore_upload_year_uploaders"}
BOOL_KEYS = {
    "embed_images",
    "overwrite_existing_files",
    "clear_leftover_files",
    "verbose_output",
}


def _default_value(key: str) -> Any:
    field = UserSettings.model_fields[key]
    if field.is_required():
        return ""
    return field.get_default(call_default_factory=True)


def _to_ini_value(value: Any) -> str:
    """Formats a setting for the INI file. Lists are written one entry per line."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, list):
        return "".join(f"\n{item}" for item in value)
    return "" if value is None else str(value)


def _parse_list(raw: str) -> list[str]:
    return [line.strip() for line in raw.splitlines() if line.strip()]


class ConfigManager:
    """Handles all operations related to the application's INI config file."""

    def __init__(self, config_file_path: Path):
        self.config_file_path = config_file_path
        self._parser = configparser.ConfigParser(interpolation=None)

    def load_config(self, cli_options: dict[str, Any] | None = None) -> UserSettings:
        """
        Loads configuration from the INI file, applies CLI overrides, and validates it.

        Args:
            cli_options: A dictionary of options provided via the command line.
                Options set to None are ignored.

        Returns:
            A validated UserSettings object.

        Raises:
            ConfigurationError: If the config file is missing, invalid, or validation
            fails.
        """
        if not self.config_file_path.is_file():
            raise ConfigurationError(
                f"Configuration file not found at '{self.config_file_path}'. "
                "Please run 'tubetag init' first."
            )

        try:
            self._parser.read(self.config_file_path, encoding="utf-8")
        except configparser.Error as e:
            raise ConfigurationError(f"Error parsing configuration file: {e}") from e

        if self._migrate_if_needed():
            log.info(
                "[yellow]Configuration file was updated with new default values."
                "[/yellow]"
            )

        config_from_file = self._get_config_as_dict()

        # Override with CLI options
        if cli_options:
            config_from_file.update(
                {k: v for k, v in cli_options.items() if v is not None}
            )

        try:
            return UserSettings(
                **config_from_file, config_path=str(self.config_file_path.parent)
            )
        except ValidationError as e:
            raise ConfigurationError(f"Configuration validation failed:\n{e}") from e

    def save_new_config(self, settings: dict[str, Any]) -> None:
        """
        Creates and saves a new configuration file.

        Args:
            settings: A dictionary of settings to save. Missing keys get defaults.
        """
        config = configparser.ConfigParser(interpolation=None)
        config["DEFAULT"] = {}

        for key in UserSettings.get_ini_keys():
            value = settings.get(key)
            if value is None:
                value = _default_value(key)
            config["DEFAULT"][key] = _to_ini_value(value)

        try:
            self.config_file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_file_path, "w", encoding="utf-8") as configfile:
                config.write(configfile)
        except OSError as e:
            raise ConfigurationError(f"Failed to save configuration file: {e}") from e

    def _get_config_as_dict(self) -> dict[str, Any]:
        """Reads the 'DEFAULT' section of the INI file into a dictionary."""
        section = self._parser["DEFAULT"]
        config: dict[str, Any] = {
            "working_directory": section.get("working_directory", ""),
            "move_to_directory": section.get("move_to_directory", ""),
        }
        for key in LIST_KEYS:
            config[key] = _parse_list(section.get(key, ""))
        try:
            for key in BOOL_KEYS:
                config[key] = section.getboolean(key, _default_value(key))
        except ValueError as e:
            raise ConfigurationError(f"Invalid configuration value: {e}") from e
        return config

    def _migrate_if_needed(self) -> bool:
        """Adds missing default values to an existing config file."""
        needs_saving = False
        config_section = self._parser["DEFAULT"]

        for key in UserSettings.get_ini_keys():
            if key not in config_section:
                config_section[key] = _to_ini_value(_default_value(key))
                needs_saving = True
                log.debug(
                    f"Migrating config: added missing key '{key}' with "
                    f"value '{config_section[key]}'."
                )

        if needs_saving:
            try:
                with open(self.config_file_path, "w", encoding="utf-8") as f:
                    self._parser.write(f)
            except OSError as e:
                log.error(f"Could not save migrated configuration file: {e}")
                return False

        return needs_saving
