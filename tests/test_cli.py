"""Tests for the command-line interface."""

from typer.testing import CliRunner

from tubetag import __version__
from tubetag.cli.app import app
from tubetag.media.tagger import Tagger

runner = CliRunner()


def _init(config_file, working_dir, library_dir):
    return runner.invoke(
        app,
        [
            "--config",
            str(config_file),
            "init",
            "--working-dir",
            str(working_dir),
            "--move-to-dir",
            str(library_dir),
        ],
    )


class TestCli:
    """Test the commands end to end."""

    def test_version(self):
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_init_writes_config(self, tmp_path, working_dir, library_dir):
        config_file = tmp_path / "config.ini"

        result = _init(config_file, working_dir, library_dir)

        assert result.exit_code == 0
        assert config_file.is_file()
        assert str(working_dir) in config_file.read_text(encoding="utf-8")

    def test_show_config(self, tmp_path, working_dir, library_dir):
        config_file = tmp_path / "config.ini"
        _init(config_file, working_dir, library_dir)

        result = runner.invoke(app, ["--config", str(config_file), "--show-config"])

        assert result.exit_code == 0
        assert "Configuration" in result.output

    def test_process_without_config(self, tmp_path):
        result = runner.invoke(
            app, ["--config", str(tmp_path / "missing.ini"), "process"]
        )

        assert result.exit_code == 1

    def test_process_empty_working_directory_fails(
        self, tmp_path, working_dir, library_dir
    ):
        config_file = tmp_path / "config.ini"
        _init(config_file, working_dir, library_dir)

        result = runner.invoke(app, ["--config", str(config_file), "process"])

        assert result.exit_code == 1

    def test_process(
        self, tmp_path, working_dir, library_dir, downloaded_video, monkeypatch
    ):
        monkeypatch.setattr(Tagger, "_write_tags", lambda self, *args: None)
        config_file = tmp_path / "config.ini"
        _init(config_file, working_dir, library_dir)
        downloaded_video()

        result = runner.invoke(
            app,
            [
                "--config",
                str(config_file),
                "process",
                "--media-type",
                "playlist",
                "--no-embed-images",
            ],
        )

        assert result.exit_code == 0
        assert (library_dir / "Some Uploader" / "Song Title.m4a").is_file()

    def test_process_reports_unreadable_metadata(
        self, tmp_path, working_dir, library_dir, downloaded_video
    ):
        config_file = tmp_path / "config.ini"
        _init(config_file, working_dir, library_dir)
        downloaded_video()["json"].write_text("[]", encoding="utf-8")

        result = runner.invoke(
            app, ["--config", str(config_file), "process", "--no-embed-images"]
        )

        assert result.exit_code == 0
        assert "Finished With Errors" in result.output
        assert "Post-Processing Complete" not in result.output
