"""Tests for the watcher module."""
import os
from markprompter.watcher import FileWatcher


def bump_mtime(path, seconds):
    st = path.stat()
    os.utime(path, (st.st_atime, st.st_mtime + seconds))


class TestFileWatcher:
    """Tests for FileWatcher class."""

    def test_no_change(self, tmp_path):
        """Test an untouched file reports no change."""
        doc = tmp_path / "talk.md"
        doc.write_text("# A", encoding="utf-8")
        watcher = FileWatcher(doc)
        assert watcher.poll() is False

    def test_change_reported_once(self, tmp_path):
        """Test a newer mtime is reported exactly once."""
        doc = tmp_path / "talk.md"
        doc.write_text("# A", encoding="utf-8")
        watcher = FileWatcher(doc)

        bump_mtime(doc, 5)

        assert watcher.poll() is True
        assert watcher.poll() is False

    def test_older_mtime_ignored(self, tmp_path):
        """Test an mtime moving backwards is not a change."""
        doc = tmp_path / "talk.md"
        doc.write_text("# A", encoding="utf-8")
        watcher = FileWatcher(doc)

        bump_mtime(doc, -100)

        assert watcher.poll() is False

    def test_missing_file(self, tmp_path):
        """Test a deleted file is not a change."""
        doc = tmp_path / "talk.md"
        doc.write_text("# A", encoding="utf-8")
        watcher = FileWatcher(doc)
        doc.unlink()
        assert watcher.poll() is False

    def test_file_created_later(self, tmp_path):
        """Test a file appearing after start is tracked from then on."""
        doc = tmp_path / "later.md"
        watcher = FileWatcher(doc)
        doc.write_text("# A", encoding="utf-8")

        assert watcher.poll() is False
        bump_mtime(doc, 5)
        assert watcher.poll() is True
