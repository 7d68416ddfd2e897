"""Shared fixtures: throwaway git repositories and an in-memory remote."""

import hashlib
import io
from pathlib import Path
from typing import Dict, List

import pytest
from git import Repo

from commit_headless.config import get_settings
from commit_headless.errors import BranchPointMissing, NoRemoteBranch, RemoteAPIError
from commit_headless.logger import ActionsLogger
from commit_headless.schemas.github import GitCommit, ShaRef, TreeEntry
from commit_headless.services import RemoteClient

ROOT_SHA = "1" * 40
ROOT_TREE = "tree-root"


class LocalRepo:
    """A git repository in a temporary directory, driven through GitPython."""

    def __init__(self, root: Path):
        self.root = root
        self.repo = Repo.init(root)
        self.repo.git.config("user.name", "A U Thor")
        self.repo.git.config("user.email", "author@home.arpa")
        self.repo.git.config("commit.gpgsign", "false")

    def path(self, *parts: str) -> Path:
        return self.root.joinpath(*parts)

    def write(self, name: str, content: str = "content") -> Path:
        target = self.path(name)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content)
        return target

    def commit(self, message: str) -> str:
        self.repo.git.add("-A")
        self.repo.git.commit("--allow-empty", "--message", message)
        return self.repo.head.commit.hexsha


class FakeRemote:
    """In-memory stand-in for both remote capability interfaces.

    Update of a branch ref is rejected unless it is a fast-forward or forced.
    ``fail_on`` maps a method name to the 1-based call number that should
    fail with a server error.
    """

    def __init__(self, branch: str = "main", head: str = ROOT_SHA):
        self.commits: Dict[str, GitCommit] = {
            head: GitCommit(sha=head, tree=ShaRef(sha=ROOT_TREE))
        }
        self.branches: Dict[str, str] = {branch: head}
        self.blobs: Dict[str, bytes] = {}
        self.trees: Dict[str, List[TreeEntry]] = {}
        self.calls: List[str] = []
        self.fail_on: Dict[str, int] = {}

    def _record(self, name: str) -> None:
        self.calls.append(name)
        if self.fail_on.get(name) == self.calls.count(name):
            raise RemoteAPIError(f"{name}: http 500: boom", status_code=500)

    @property
    def writes(self) -> List[str]:
        return [c for c in self.calls if c.startswith(("create_", "update_"))]

    def add_commit(self, sha: str) -> None:
        self.commits.setdefault(sha, GitCommit(sha=sha, tree=ShaRef(sha=ROOT_TREE)))

    def set_head(self, sha: str, branch: str = "main") -> None:
        """Point branch at sha, mirroring a commit that exists locally."""
        self.add_commit(sha)
        self.branches[branch] = sha

    # BranchService

    def get_branch_head(self, owner: str, repo: str, branch: str) -> str:
        self._record("get_branch_head")
        if branch not in self.branches:
            raise NoRemoteBranch(branch)
        return self.branches[branch]

    def create_branch(self, owner: str, repo: str, branch: str, sha: str) -> str:
        self._record("create_branch")
        if sha not in self.commits:
            raise BranchPointMissing(sha)
        self.branches[branch] = sha
        return sha

    # GitDataService

    def get_commit(self, owner: str, repo: str, sha: str) -> GitCommit:
        self._record("get_commit")
        if sha not in self.commits:
            raise RemoteAPIError(f"commit {sha}: http 404: Not Found", status_code=404)
        return self.commits[sha]

    def create_blob(self, owner: str, repo: str, content: bytes) -> str:
        self._record("create_blob")
        sha = hashlib.sha1(b"blob:" + content).hexdigest()
        self.blobs[sha] = content
        return sha

    def create_tree(
        self, owner: str, repo: str, base_tree: str, entries: List[TreeEntry]
    ) -> str:
        self._record("create_tree")
        sha = f"tree-{len(self.trees) + 1}"
        self.trees[sha] = list(entries)
        return sha

    def create_commit(
        self, owner: str, repo: str, message: str, tree: str, parents: List[str]
    ) -> str:
        self._record("create_commit")
        sha = hashlib.sha1(f"{tree}:{parents}:{message}".encode()).hexdigest()
        self.commits[sha] = GitCommit(
            sha=sha,
            tree=ShaRef(sha=tree),
            parents=[ShaRef(sha=p) for p in parents],
            message=message,
        )
        return sha

    def update_ref(
        self, owner: str, repo: str, branch: str, sha: str, force: bool = False
    ) -> str:
        self._record("update_ref")
        current = self.branches.get(branch)
        parents = [p.sha for p in self.commits[sha].parents]
        if not force and current not in parents:
            raise RemoteAPIError("Update is not a fast forward", status_code=422)
        self.branches[branch] = sha
        return sha


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Keep the environment of the test runner out of the settings."""
    for name in (
        "HEADLESS_TOKEN",
        "GITHUB_TOKEN",
        "GH_TOKEN",
        "GITHUB_ACTIONS",
        "GITHUB_OUTPUT",
        "GITHUB_API_URL",
        "GITHUB_SERVER_URL",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def local_repo(tmp_path) -> LocalRepo:
    return LocalRepo(tmp_path / "repo")


@pytest.fixture
def log_stream() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def logger(log_stream) -> ActionsLogger:
    return ActionsLogger(stream=log_stream)


@pytest.fixture
def remote() -> FakeRemote:
    return FakeRemote()


@pytest.fixture
def make_client(remote, logger):
    def factory(dry_run: bool = False, force: bool = False, branch: str = "main"):
        return RemoteClient(
            repositories=remote,
            git=remote,
            owner="test-owner",
            repo="test-repo",
            branch=branch,
            dry_run=dry_run,
            force=force,
            logger=logger,
        )

    return factory
