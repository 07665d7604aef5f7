"""Tests for the settings model and the INI configuration file."""

import configparser

import pytest
from pydantic import ValidationError

from tubetag.exceptions import ConfigurationError
from tubetag.models.config import UserSettings
from tubetag.storage.config_manager import ConfigManager


class TestUserSettings:
    """Test settings validation."""

    def test_defaults(self, settings):
        assert settings.embed_images
        assert settings.overwrite_existing_files
        assert not settings.clear_leftover_files
        assert not settings.verbose_output
        assert settings.do_not_embed_image_uploaders == []

    def test_directories_are_required(self, tmp_path):
        with pytest.raises(ValidationError):
            UserSettings(working_directory="", move_to_directory=str(tmp_path))

    def test_directories_must_differ(self, tmp_path):
        with pytest.raises(ValidationError):
            UserSettings(
                working_directory=str(tmp_path), move_to_directory=str(tmp_path)
            )

    def test_uploader_lists_are_cleaned(self, working_dir, library_dir):
        settings = UserSettings(
            working_directory=str(working_dir),
            move_to_directory=str(library_dir),
            ignore_upload_year_uploaders=["  Label Channel ", "", "   "],
        )

        assert settings.ignore_upload_year_uploaders == ["Label Channel"]

    def test_uploader_checks_ignore_case(self, settings):
        settings = settings.model_copy(
            update={"do_not_embed_image_uploaders": ["Label Channel"]}
        )

        assert not settings.embeds_images_for("label channel")
        assert settings.embeds_images_for("Another Channel")
        assert settings.embeds_images_for(None)
        assert settings.uses_upload_year_for("label channel")

    def test_ini_keys_exclude_internal_fields(self):
        assert "config_path" not in UserSettings.get_ini_keys()
        assert "working_directory" in UserSettings.get_ini_keys()


class TestConfigManager:
    """Test saving, loading and migrating the configuration file."""

    def test_save_and_load(self, tmp_path, working_dir, library_dir):
        config_file = tmp_path / "config" / "config.ini"
        manager = ConfigManager(config_file)

        manager.save_new_config(
            {
                "working_directory": str(working_dir),
                "move_to_directory": str(library_dir),
                "do_not_embed_image_uploaders": ["Channel A", "Channel B"],
                "clear_leftover_files": True,
            }
        )
        settings = ConfigManager(config_file).load_config()

        assert settings.working_path == working_dir
        assert settings.move_to_path == library_dir
        assert settings.do_not_embed_image_uploaders == ["Channel A", "Channel B"]
        assert settings.ignore_upload_year_uploaders == []
        assert settings.clear_leftover_files
        assert settings.embed_images
        assert settings.config_path == str(config_file.parent)

    def test_list_values_are_one_per_line(self, tmp_path, working_dir, library_dir):
        config_file = tmp_path / "config.ini"
        config_file.write_text(
            "[DEFAULT]\n"
            f"working_directory = {working_dir}\n"
            f"move_to_directory = {library_dir}\n"
            "ignore_upload_year_uploaders =\n"
            "    Channel, With Comma\n"
            "    Other Channel\n",
            encoding="utf-8",
        )

        settings = ConfigManager(config_file).load_config()

        assert settings.ignore_upload_year_uploaders == [
            "Channel, With Comma",
            "Other Channel",
        ]

    def test_missing_keys_are_migrated(self, tmp_path, working_dir, library_dir):
        config_file = tmp_path / "config.ini"
        config_file.write_text(
            "[DEFAULT]\n"
            f"working_directory = {working_dir}\n"
            f"move_to_directory = {library_dir}\n",
            encoding="utf-8",
        )

        settings = ConfigManager(config_file).load_config()

        parser = configparser.ConfigParser(interpolation=None)
        parser.read(config_file, encoding="utf-8")
        assert parser["DEFAULT"]["clear_leftover_files"] == "false"
        assert parser["DEFAULT"]["embed_images"] == "true"
        assert settings.embed_images

    def test_cli_options_override_file(self, tmp_path, working_dir, library_dir):
        config_file = tmp_path / "config.ini"
        ConfigManager(config_file).save_new_config(
            {
                "working_directory": str(working_dir),
                "move_to_directory": str(library_dir),
            }
        )

        settings = ConfigManager(config_file).load_config(
            {"embed_images": False, "verbose_output": None}
        )

        assert not settings.embed_images
        assert not settings.verbose_output

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            ConfigManager(tmp_path / "missing.ini").load_config()

    def test_invalid_boolean(self, tmp_path, working_dir, library_dir):
        config_file = tmp_path / "config.ini"
        config_file.write_text(
            "[DEFAULT]\n"
            f"working_directory = {working_dir}\n"
            f"move_to_directory = {library_dir}\n"
            "embed_images = sometimes\n",
            encoding="utf-8",
        )

        with pytest.raises(ConfigurationError):
            ConfigManager(config_file).load_config()

    def test_invalid_settings(self, tmp_path):
        config_file = tmp_path / "config.ini"
        config_file.write_text("[DEFAULT]\nworking_directory = \n", encoding="utf-8")

        with pytest.raises(ConfigurationError):
            ConfigManager(config_file).load_config()
