"""Capability interfaces for the hosted repository API."""

from typing import List, Protocol, runtime_checkable

from ..schemas.github import GitCommit, TreeEntry


@runtime_checkable
class BranchService(Protocol):
    """Branch head lookup and branch creation."""

    def get_branch_head(self, owner: str, repo: str, branch: str) -> str:
        """Return the head commit sha of a branch. Raises NoRemoteBranch."""
        ...

    def create_branch(self, owner: str, repo: str, branch: str, sha: str) -> str:
        """Create a branch pointing at sha. Raises BranchPointMissing."""
        ...


@runtime_checkable
class GitDataService(Protocol):
    """Writes and reads of git objects and refs."""

    def get_commit(self, owner: str, repo: str, sha: str) -> GitCommit:
        """Read a commit object."""
        ...

    def create_blob(self, owner: str, repo: str, content: bytes) -> str:
        """Store content and return the blob sha."""
        ...

    def create_tree(
        self, owner: str, repo: str, base_tree: str, entries: List[TreeEntry]
    ) -> str:
        """Create a tree from base_tree plus entries and return its sha."""
        ...

    def create_commit(
        self, owner: str, repo: str, message: str, tree: str, parents: List[str]
    ) -> str:
        """Create a commit object and return its sha."""
        ...

    def update_ref(
        self, owner: str, repo: str, branch: str, sha: str, force: bool = False
    ) -> str:
        """Point a branch at sha. Non-forced updates must be fast-forwards."""
        ...
