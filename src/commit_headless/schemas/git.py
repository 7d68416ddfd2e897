from enum import Enum
from typing import List, Optional

from pydantic import BaseModel


class FileStatus(str, Enum):
    """Enum for file change statuses."""

    ADDED = "A"
    MODIFIED = "M"
    DELETED = "D"
    RENAMED = "R"
    TYPE_CHANGED = "T"


class FileChange(BaseModel):
    """Represents a file change detected by git diff."""

    status: FileStatus
    file_path: str
    old_file_path: Optional[str] = None  # For renamed files


def parse_name_status(output: str) -> List[FileChange]:
    """Parse ``--name-status -z`` output into FileChange records.

    Renames and copies carry a similarity score after the status letter
    (``R100``) and are followed by two paths, old then new. Copies are
    reported as additions of the new path. Unknown statuses are skipped.
    """
    fields = output.split("\0")
    changes: List[FileChange] = []

    i = 0
    while i < len(fields):
        status = fields[i].strip()
        i += 1
        if not status:
            continue

        letter = status[0]
        if letter in ("R", "C"):
            old_path, new_path = fields[i], fields[i + 1]
            i += 2
            if letter == "R":
                changes.append(
                    FileChange(
                        status=FileStatus.RENAMED,
                        file_path=new_path,
                        old_file_path=old_path,
                    )
                )
            else:
                changes.append(FileChange(status=FileStatus.ADDED, file_path=new_path))
            continue

        path = fields[i]
        i += 1
        try:
            changes.append(FileChange(status=FileStatus(letter), file_path=path))
        except ValueError:
            # Unmerged (U) or unknown (X) entries have nothing to replicate
            continue

    return changes
