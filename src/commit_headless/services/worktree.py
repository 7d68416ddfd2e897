"""Building file entries from the working tree for ad hoc commits."""

import os
from pathlib import Path
from typing import Dict, Iterable

from ..errors import CommitHeadlessError, MissingFile
from ..models import REGULAR_FILE_MODE, FileEntry

EXECUTABLE_FILE_MODE = "100755"


def read_worktree_entries(
    root: str, paths: Iterable[str], allow_deletions: bool = False
) -> Dict[str, FileEntry]:
    """Read each path (relative to root) from disk.

    A path that does not exist is recorded as a deletion, but only when
    ``allow_deletions`` is set; otherwise MissingFile is raised.
    """
    base = Path(root)
    entries: Dict[str, FileEntry] = {}

    for raw_path in paths:
        path = raw_path[2:] if raw_path.startswith("./") else raw_path
        full_path = base / path

        if not full_path.exists():
            if not allow_deletions:
                raise MissingFile(path)
            entries[path] = FileEntry(content=None, mode="")
            continue

        try:
            content = full_path.read_bytes()
        except OSError as e:
            raise CommitHeadlessError(f"read {path!r}: {e}") from e

        mode = EXECUTABLE_FILE_MODE if os.access(full_path, os.X_OK) else REGULAR_FILE_MODE
        entries[path] = FileEntry(content=content, mode=mode)

    return entries
