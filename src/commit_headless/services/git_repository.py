from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

from git import Repo
from git.exc import GitCommandError, InvalidGitRepositoryError, NoSuchPathError

from ..errors import DivergedHistory, LocalGitError, UnsupportedMergeCommit
from ..logger import ActionsLogger
from ..models import Change, FileEntry
from ..schemas import FileChange, FileStatus, parse_name_status

PLACEHOLDER_AUTHOR = "Commit Headless <commit-headless@users.noreply.github.com>"


class GitRepository:
    """Reads commits and staged changes out of a local repository."""

    def __init__(self, path: str = ".", logger: Optional[ActionsLogger] = None):
        self.path = Path(path)
        self.logger = logger or ActionsLogger()
        self._repo: Optional[Repo] = None

    @property
    def repo(self) -> Repo:
        if self._repo is None:
            try:
                self._repo = Repo(self.path)
            except (InvalidGitRepositoryError, NoSuchPathError) as e:
                raise LocalGitError(f"open repository {self.path}", repr(e)) from e
        return self._repo

    def _git(self, *args: str, **kwargs) -> str:
        command, *rest = args
        try:
            return getattr(self.repo.git, command.replace("-", "_"))(*rest, **kwargs)
        except GitCommandError as e:
            raise LocalGitError(f"git {command}", str(e.stderr)) from e

    def is_ancestor(self, base: str, rev: str = "HEAD") -> bool:
        try:
            return self.repo.is_ancestor(base, rev)
        except GitCommandError as e:
            raise LocalGitError("check ancestry", str(e.stderr)) from e

    def commits_since(self, base: str) -> List[str]:
        """Return the commits after base up to HEAD, oldest first.

        Equivalent to ``git rev-list --reverse base..HEAD``. Raises
        DivergedHistory when base is not an ancestor of HEAD.
        """
        return self.commits_between(base, "HEAD")

    def commits_between(self, base: str, upper: str) -> List[str]:
        """Return the commits after base up to upper, oldest first."""
        if not self.is_ancestor(base, upper):
            raise DivergedHistory(base)

        out = self._git("rev-list", "--reverse", f"{base}..{upper}")
        return [line for line in out.splitlines() if line]

    def fetch(self, branch: str) -> None:
        """Fetch a branch from origin so ``origin/<branch>`` is current."""
        try:
            origin = self.repo.remote("origin")
        except ValueError as e:
            raise LocalGitError(f"fetch origin/{branch}", str(e)) from e
        try:
            origin.fetch(branch)
        except GitCommandError as e:
            raise LocalGitError(f"fetch origin/{branch}", str(e.stderr)) from e

    def changes(self, *commits: str) -> List[Change]:
        """Return a Change for each supplied commit hash, in order."""
        result = []
        for commit in commits:
            try:
                result.append(self._change(commit))
            except LocalGitError as e:
                raise LocalGitError(f"get change {commit}: {e}") from e
        return result

    def _change(self, commit: str) -> Change:
        parents, author, message = self._read_commit(commit)

        if len(parents) > 1:
            raise UnsupportedMergeCommit(commit)

        return Change(
            hash=commit,
            author=author,
            message=message,
            entries=self._changed_files(commit),
        )

    def _read_commit(self, commit: str) -> Tuple[List[str], str, str]:
        """Parse parents, author and message out of the raw commit object."""
        raw = self._git("cat-file", "commit", commit)
        headers, _, message = raw.partition("\n\n")

        parents = []
        author = ""
        for line in headers.splitlines():
            key, _, value = line.partition(" ")
            if key == "parent":
                parents.append(value)
            elif key == "author":
                # Name <email> timestamp timezone; keep everything up to the last >
                marker = value.rfind(">")
                if marker == -1:
                    self.logger.warning(
                        f"Author is malformed ({value}), using placeholder"
                    )
                    author = PLACEHOLDER_AUTHOR
                else:
                    author = value[: marker + 1]

        return parents, author, message.strip()

    def _changed_files(self, commit: str) -> Dict[str, FileEntry]:
        out = self._git(
            "diff-tree", "--no-commit-id", "--name-status", "-r", "-z", "--root", commit
        )
        return self._entries(
            parse_name_status(out), lambda path: self._tree_entry(commit, path)
        )

    def staged_changes(self) -> Dict[str, FileEntry]:
        """Return the files staged for commit along with their contents and modes.

        Deleted files have None content. Returns an empty mapping if nothing is
        staged.
        """
        out = self._git("diff", "--cached", "--name-status", "-z")
        index_entries = self.repo.index.entries
        return self._entries(
            parse_name_status(out),
            lambda path: self._index_entry(index_entries, path),
        )

    @staticmethod
    def _entries(
        changes: List[FileChange], lookup: Callable[[str], FileEntry]
    ) -> Dict[str, FileEntry]:
        # Renames become a deletion of the old path plus an addition of the new one
        entries: Dict[str, FileEntry] = {}
        for change in changes:
            if change.status == FileStatus.DELETED:
                entries[change.file_path] = FileEntry(content=None, mode="")
                continue
            if change.status == FileStatus.RENAMED and change.old_file_path:
                entries[change.old_file_path] = FileEntry(content=None, mode="")
            entries[change.file_path] = lookup(change.file_path)
        return entries

    def _tree_entry(self, commit: str, path: str) -> FileEntry:
        try:
            blob = self.repo.commit(commit).tree / path
        except (KeyError, ValueError) as e:
            raise LocalGitError(f"get content {commit}:{path}", str(e)) from e
        return FileEntry(content=blob.data_stream.read(), mode=f"{blob.mode:06o}")

    def _index_entry(self, index_entries: Dict, path: str) -> FileEntry:
        entry = index_entries.get((path, 0))
        if entry is None:
            raise LocalGitError(f"get staged content {path}", "path is not in the index")
        content = self.repo.odb.stream(entry.binsha).read()
        return FileEntry(content=content, mode=f"{entry.mode:06o}")
