"""Unit tests for per-root entry listing."""

import os
import sys

import pytest

from conftest import write_zip
from kompl.infrastructure.search_path import BUILTIN_ROOT, PathIndex, RootKind, classify_root
from kompl.infrastructure.search_path.layout import PYTHON_LAYOUT


class TestClassifyRoot:
    """Tests for root kind detection."""

    @pytest.mark.parametrize(
        "root, kind",
        [
            ("", RootKind.EMPTY),
            ("/opt/lib/*", RootKind.GLOB),
            ("/opt/lib/deps.zip", RootKind.ARCHIVE),
            ("/opt/lib/Tool.WHL", RootKind.ARCHIVE),
            ("/opt/lib", RootKind.DIRECTORY),
            (BUILTIN_ROOT, RootKind.BUILTIN),
        ],
    )
    def test_kinds(self, root, kind):
        """Test that each root form maps to its lister."""
        assert classify_root(root, PYTHON_LAYOUT.archive_suffixes) is kind


class TestDirectoryListing:
    """Tests for plain directory roots."""

    def test_lists_files_relative_to_root(self, tmp_path):
        """Test recursive listing with relative names."""
        (tmp_path / "a").mkdir()
        (tmp_path / "a" / "b.py").write_text("")
        (tmp_path / "c.txt").write_text("")

        entries = PathIndex().list_entries(str(tmp_path))

        assert sorted(entries) == sorted([os.path.join("a", "b.py"), "c.txt"])

    def test_symlink_cycle_terminates(self, tmp_path):
        """Test that a directory symlink pointing back up is not followed."""
        tree = tmp_path / "tree"
        (tree / "sub").mkdir(parents=True)
        (tree / "sub" / "leaf.py").write_text("")
        try:
            os.symlink(tree, tree / "sub" / "back", target_is_directory=True)
        except (OSError, NotImplementedError):
            pytest.skip("symlinks not supported")

        entries = PathIndex().list_entries(str(tree))

        assert entries == [os.path.join("sub", "leaf.py")]

    def test_missing_directory_is_empty(self, tmp_path):
        """Test that a root that does not exist contributes nothing."""
        assert PathIndex().list_entries(str(tmp_path / "missing")) == []

    def test_empty_root_is_empty(self):
        """Test that the empty root string yields no entries."""
        assert PathIndex().list_entries("") == []


class TestArchiveListing:
    """Tests for archive roots."""

    def test_lists_file_entries(self, tmp_path):
        """Test that directory entries inside the archive are skipped."""
        archive = write_zip(tmp_path / "lib.zip", {"pkg/mod.py": "", "pkg/data.json": ""}, directories=("pkg/",))
        assert sorted(PathIndex().list_entries(str(archive))) == ["pkg/data.json", "pkg/mod.py"]

    def test_disabled_archive_scanning(self, tmp_path):
        """Test that archives yield nothing when scanning them is off."""
        archive = write_zip(tmp_path / "lib.zip", {"pkg/mod.py": ""})
        assert PathIndex(scan_archives=False).list_entries(str(archive)) == []

    def test_corrupt_archive_is_empty(self, tmp_path):
        """Test that an unreadable archive degrades to an empty result."""
        broken = tmp_path / "broken.zip"
        broken.write_bytes(b"definitely not a zip file")
        assert PathIndex().list_entries(str(broken)) == []

    def test_missing_archive_is_empty(self, tmp_path):
        """Test that a missing archive degrades to an empty result."""
        assert PathIndex().list_entries(str(tmp_path / "gone.whl")) == []


class TestGlobListing:
    """Tests for ``dir/*`` roots."""

    def test_concatenates_every_archive(self, tmp_path):
        """Test that only archives in the directory are enumerated."""
        write_zip(tmp_path / "one.zip", {"a.py": ""})
        write_zip(tmp_path / "two.whl", {"b.py": ""})
        (tmp_path / "notes.txt").write_text("")
        (tmp_path / "bad.zip").write_bytes(b"nope")

        entries = PathIndex().list_entries(os.path.join(str(tmp_path), "*"))

        assert sorted(entries) == ["a.py", "b.py"]

    def test_filesystem_root_glob(self, tmp_path, monkeypatch):
        """Test that a glob over the filesystem root lists the root, not the working directory."""
        write_zip(tmp_path / "cwd.zip", {"from_cwd.py": ""})
        monkeypatch.chdir(tmp_path)

        assert "from_cwd.py" not in PathIndex().list_entries(os.sep + "*")

    def test_bare_glob_lists_working_directory(self, tmp_path, monkeypatch):
        """Test that a bare ``*`` root means the working directory."""
        write_zip(tmp_path / "cwd.zip", {"from_cwd.py": ""})
        monkeypatch.chdir(tmp_path)

        assert PathIndex().list_entries("*") == ["from_cwd.py"]

    def test_missing_glob_directory_is_empty(self, tmp_path):
        """Test that a glob over a missing directory degrades to empty."""
        assert PathIndex().list_entries(os.path.join(str(tmp_path), "missing", "*")) == []


class TestBuiltinListing:
    """Tests for the builtin-module tag root."""

    def test_reports_compiled_in_modules(self):
        """Test that builtin modules appear as pseudo source entries."""
        entries = PathIndex().list_entries(BUILTIN_ROOT)
        assert "sys.py" in entries
        assert len(entries) == len(sys.builtin_module_names)
