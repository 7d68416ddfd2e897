from typing import List, Optional, Sequence

from pydantic import BaseModel

from ..errors import (
    BranchPointMissing,
    PartialPushFailure,
    PushStepFailed,
    RemoteAPIError,
)
from ..logger import ActionsLogger
from ..models import Change
from ..protocols import BranchService, GitDataService
from ..schemas.github import TreeEntry


class PushResult(BaseModel):
    """Outcome of a fully applied push session."""

    pushed: int
    head: str


class RemoteClient:
    """Recreates Changes as commits on one branch of a hosted repository.

    Reads go through ``repositories`` and ``git`` even in dry-run mode so
    every pre-flight check still runs; writes are skipped entirely.
    """

    def __init__(
        self,
        repositories: BranchService,
        git: GitDataService,
        owner: str,
        repo: str,
        branch: str,
        dry_run: bool = False,
        force: bool = False,
        server_url: str = "https://github.com",
        logger: Optional[ActionsLogger] = None,
    ):
        self.repositories = repositories
        self.git = git
        self.owner = owner
        self.repo = repo
        self.branch = branch
        self.dry_run = dry_run
        self.force = force
        self.server_url = server_url.rstrip("/")
        self.logger = logger or ActionsLogger()

    def get_head_commit_hash(self) -> str:
        """Current head commit of the branch. Raises NoRemoteBranch."""
        return self.repositories.get_branch_head(self.owner, self.repo, self.branch)

    def create_branch(self, head_sha: str) -> str:
        """Create the branch at head_sha and return the commit it points to."""
        if self.dry_run:
            # Still confirm the branch point exists
            try:
                return self.git.get_commit(self.owner, self.repo, head_sha).sha
            except RemoteAPIError as e:
                if e.status_code in (404, 422):
                    raise BranchPointMissing(head_sha, status_code=e.status_code) from e
                raise
        return self.repositories.create_branch(
            self.owner, self.repo, self.branch, head_sha
        )

    def push_changes(
        self,
        head_commit: str,
        changes: Sequence[Change],
        force: Optional[bool] = None,
    ) -> PushResult:
        """Push changes in order, each on top of the previous one's commit.

        Stops at the first failure, raising PartialPushFailure with the number
        of changes applied before it. ``force`` overrides the client default
        for the ref updates.
        """
        head = head_commit
        for i, change in enumerate(changes):
            try:
                head = self.push_change(head, change, force=force)
            except (PushStepFailed, RemoteAPIError) as e:
                self.logger.error(f"failed to push {change.hash}: {e}")
                raise PartialPushFailure(i, len(changes)) from e
            self.logger.print(
                f"pushed {i + 1} of {len(changes)} commits, new head: {head}"
            )
        return PushResult(pushed=len(changes), head=head)

    def push_change(
        self, head_commit: str, change: Change, force: Optional[bool] = None
    ) -> str:
        """Create one commit for change with head_commit as its only parent.

        Returns the sha of the new commit. In dry-run mode a placeholder of
        the same length as the local hash is returned without any request.
        """
        if self.dry_run:
            return "0" * len(change.hash)

        try:
            parent = self.git.get_commit(self.owner, self.repo, head_commit)
        except RemoteAPIError as e:
            raise PushStepFailed("get parent commit", e) from e
        if parent.tree is None:
            raise PushStepFailed(
                "get parent commit", RemoteAPIError(f"commit {head_commit} has no tree")
            )

        entries = self._tree_entries(change)

        try:
            tree = self.git.create_tree(self.owner, self.repo, parent.tree.sha, entries)
        except RemoteAPIError as e:
            raise PushStepFailed("create tree", e) from e

        try:
            commit = self.git.create_commit(
                self.owner, self.repo, change.commit_message(), tree, [head_commit]
            )
        except RemoteAPIError as e:
            raise PushStepFailed("create commit", e) from e

        try:
            self.git.update_ref(
                self.owner,
                self.repo,
                self.branch,
                commit,
                force=self.force if force is None else force,
            )
        except RemoteAPIError as e:
            raise PushStepFailed("update ref", e) from e

        return commit

    def _tree_entries(self, change: Change) -> List[TreeEntry]:
        entries = []
        for path, entry in change.entries.items():
            if entry.deleted:
                # No sha: the path is removed when merged against the base tree
                entries.append(TreeEntry(path=path, mode=entry.file_mode))
                continue

            try:
                blob = self.git.create_blob(self.owner, self.repo, entry.content)
            except RemoteAPIError as e:
                raise PushStepFailed(f"create blob {path}", e) from e
            entries.append(TreeEntry(path=path, mode=entry.file_mode, sha=blob))
        return entries

    def compare_url(self, base: str, head: str) -> str:
        return f"{self.server_url}/{self.owner}/{self.repo}/compare/{base}...{head}"
