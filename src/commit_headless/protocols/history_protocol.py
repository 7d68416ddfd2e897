"""Local history reader protocol interface."""

from pathlib import Path
from typing import Dict, List, Protocol, runtime_checkable

from ..models import Change, FileEntry


@runtime_checkable
class HistoryReaderProtocol(Protocol):
    """Protocol for reading change sets out of a local repository."""

    @property
    def path(self) -> Path:
        """Local repository path."""
        ...

    def commits_since(self, base: str) -> List[str]:
        """Commits after base up to HEAD, oldest first."""
        ...

    def commits_between(self, base: str, upper: str) -> List[str]:
        """Commits after base up to upper, oldest first."""
        ...

    def changes(self, *commits: str) -> List[Change]:
        """A Change for each commit, in the given order."""
        ...

    def staged_changes(self) -> Dict[str, FileEntry]:
        """Entries for the modifications staged in the index."""
        ...

    def fetch(self, branch: str) -> None:
        """Fetch a branch from origin."""
        ...
