"""Tests for cleaning up the working directory."""

from tubetag.core import deleter as deleter_module
from tubetag.core.deleter import Deleter
from tubetag.models.metadata import CollectionMetadata
from tubetag.models.stats import PostProcessStats
from tubetag.tagging.tagging_set import create_tagging_sets

from .conftest import OTHER_VIDEO_ID, PLAYLIST_ID

COLLECTION = CollectionMetadata(id=PLAYLIST_ID, title="My Playlist")


class TestDeleterRun:
    """Test deleting the sidecar files of processed tagging sets."""

    def test_deletes_sidecar_files(self, settings, working_dir, downloaded_video):
        files = downloaded_video()
        tagging_sets = create_tagging_sets(working_dir.iterdir())
        files["audio"].unlink()  # already moved away
        stats = PostProcessStats()

        Deleter(settings).run(tagging_sets, None, stats)

        assert not files["json"].exists()
        assert not files["image"].exists()
        assert stats.deletion.succeeded == 2

    def test_deletes_collection_files(
        self, settings, working_dir, make_file, write_json, downloaded_video
    ):
        downloaded_video()
        tagging_sets = create_tagging_sets(working_dir.iterdir())
        collection_json = write_json(
            working_dir / f"My Playlist [{PLAYLIST_ID}].info.json", {"id": PLAYLIST_ID}
        )
        collection_image = make_file(working_dir / f"My Playlist [{PLAYLIST_ID}].jpg")
        stats = PostProcessStats()

        Deleter(settings).run(tagging_sets, COLLECTION, stats)

        assert not collection_json.exists()
        assert not collection_image.exists()
        assert stats.deletion.succeeded == 4

    def test_missing_files_are_skipped(self, settings, working_dir, downloaded_video):
        files = downloaded_video()
        tagging_sets = create_tagging_sets(working_dir.iterdir())
        files["image"].unlink()
        stats = PostProcessStats()

        Deleter(settings).run(tagging_sets, None, stats)

        assert stats.deletion.succeeded == 1
        assert stats.deletion.skipped == 1
        assert stats.deletion.failed == 0

    def test_failed_deletion_does_not_stop_the_rest(
        self, settings, working_dir, downloaded_video, monkeypatch
    ):
        files = downloaded_video()
        tagging_sets = create_tagging_sets(working_dir.iterdir())
        files["audio"].unlink()
        real_remove = deleter_module.os.remove

        def remove(path):
            if path == files["json"]:
                raise PermissionError("file is locked")
            real_remove(path)

        monkeypatch.setattr(deleter_module.os, "remove", remove)
        stats = PostProcessStats()

        Deleter(settings).run(tagging_sets, None, stats)

        assert files["json"].exists()
        assert not files["image"].exists()
        assert stats.deletion.failed == 1
        assert stats.deletion.succeeded == 1
        assert files["json"].name in stats.deletion.failures

    def test_unprocessed_sets_are_kept(self, settings, working_dir, downloaded_video):
        """Test that only the files of the given tagging sets are deleted."""
        downloaded_video()
        other = downloaded_video(name="Other", video_id=OTHER_VIDEO_ID)
        processed = [
            s
            for s in create_tagging_sets(working_dir.iterdir())
            if s.resource_id != OTHER_VIDEO_ID
        ]

        Deleter(settings).run(processed, None, PostProcessStats())

        assert all(path.exists() for path in other.values())


class TestCheckWorkingDirectory:
    """Test the final check for leftover files."""

    def test_empty_directory(self, settings):
        stats = PostProcessStats()

        Deleter(settings).check_working_directory(stats)

        assert stats.leftover_files == []

    def test_reports_leftover_files(self, settings, working_dir, make_file):
        make_file(working_dir / "b.part")
        make_file(working_dir / "a [x].webm")
        stats = PostProcessStats()

        Deleter(settings).check_working_directory(stats)

        assert stats.leftover_files == ["a [x].webm", "b.part"]
        assert (working_dir / "b.part").exists()

    def test_clears_leftover_files_when_enabled(self, settings, working_dir, make_file):
        settings = settings.model_copy(update={"clear_leftover_files": True})
        make_file(working_dir / "b.part")
        stats = PostProcessStats()

        Deleter(settings).check_working_directory(stats)

        assert stats.leftover_files == ["b.part"]
        assert list(working_dir.iterdir()) == []
