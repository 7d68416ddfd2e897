"""Unit tests for reading files from the working tree."""

import pytest

from commit_headless.errors import MissingFile
from commit_headless.models import FileEntry
from commit_headless.services import read_worktree_entries


class TestReadWorktreeEntries:
    def test_reads_content_and_mode(self, tmp_path):
        (tmp_path / "a.txt").write_bytes(b"hello")
        script = tmp_path / "bin" / "run.sh"
        script.parent.mkdir()
        script.write_bytes(b"#!/bin/sh\n")
        script.chmod(0o755)

        entries = read_worktree_entries(str(tmp_path), ["a.txt", "bin/run.sh"])

        assert entries == {
            "a.txt": FileEntry(content=b"hello", mode="100644"),
            "bin/run.sh": FileEntry(content=b"#!/bin/sh\n", mode="100755"),
        }

    def test_leading_dot_slash_is_dropped(self, tmp_path):
        (tmp_path / "a.txt").write_bytes(b"")

        entries = read_worktree_entries(str(tmp_path), ["./a.txt"])

        assert entries == {"a.txt": FileEntry(content=b"", mode="100644")}

    def test_missing_file_requires_deletions(self, tmp_path):
        with pytest.raises(MissingFile) as exc:
            read_worktree_entries(str(tmp_path), ["gone.txt"])
        assert "gone.txt" in str(exc.value)

    def test_missing_file_becomes_deletion(self, tmp_path):
        entries = read_worktree_entries(str(tmp_path), ["gone.txt"], allow_deletions=True)

        assert entries["gone.txt"].deleted
