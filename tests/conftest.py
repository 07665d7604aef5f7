"""Shared fixtures for the post-processing tests."""

import json
from pathlib import Path

import pytest

from tubetag.models.config import UserSettings

VIDEO_ID = "dQw4w9WgXcQ"
OTHER_VIDEO_ID = "9bZkp7q19f0"
PLAYLIST_ID = "PLabcdefghijklmnopq"


@pytest.fixture
def working_dir(tmp_path: Path) -> Path:
    path = tmp_path / "work"
    path.mkdir()
    return path


@pytest.fixture
def library_dir(tmp_path: Path) -> Path:
    return tmp_path / "library"


@pytest.fixture
def settings(working_dir: Path, library_dir: Path) -> UserSettings:
    return UserSettings(
        working_directory=str(working_dir),
        move_to_directory=str(library_dir),
    )


@pytest.fixture
def make_file():
    """Creates a file holding the given content, returning its path."""

    def _make_file(path: Path, content: bytes = b"data") -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        return path

    return _make_file


@pytest.fixture
def write_json():
    """Writes a metadata dictionary to a JSON file, returning its path."""

    def _write_json(path: Path, data: dict) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write_json


@pytest.fixture
def video_data() -> dict:
    return {
        "id": VIDEO_ID,
        "title": "Just a title",
        "fulltitle": "Just a title",
        "description": "",
        "uploader": "Some Uploader",
        "uploader_url": "https://www.youtube.com/@someuploader",
        "upload_date": "20190315",
        "webpage_url": f"https://www.youtube.com/watch?v={VIDEO_ID}",
        "format": "140 - audio only",
    }


@pytest.fixture
def downloaded_video(working_dir, make_file, write_json, video_data):
    """Creates the audio, metadata and image files of one downloaded video."""

    def _downloaded_video(
        name: str = "Song Title", video_id: str = VIDEO_ID, **metadata
    ) -> dict[str, Path]:
        data = {**video_data, "id": video_id, **metadata}
        return {
            "audio": make_file(working_dir / f"{name} [{video_id}].m4a"),
            "json": write_json(working_dir / f"{name} [{video_id}].info.json", data),
            "image": make_file(working_dir / f"{name} [{video_id}].jpg", b"\xff\xd8"),
        }

    return _downloaded_video
