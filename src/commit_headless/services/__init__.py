"""Services for the application."""

from .client_factory import create_remote_client, open_remote_client
from .git_repository import GitRepository
from .github_api import GitHubAPI, GitService, RepositoriesService
from .push_orchestrator import push_changes, replay_branch, replay_changes
from .remote_client import PushResult, RemoteClient
from .worktree import read_worktree_entries

__all__ = [
    "GitHubAPI",
    "GitRepository",
    "GitService",
    "PushResult",
    "RemoteClient",
    "RepositoriesService",
    "create_remote_client",
    "open_remote_client",
    "push_changes",
    "read_worktree_entries",
    "replay_branch",
    "replay_changes",
]
