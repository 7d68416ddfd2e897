"""Coordinates push and replay sessions between local history and the remote."""

import re
from typing import Optional, Sequence

from ..errors import (
    HeadShaMismatch,
    InvalidHeadShaFormat,
    MissingCreateBranchBase,
    PartialPushFailure,
)
from ..logger import ActionsLogger, summarize_hashes
from ..models import Change
from ..protocols import HistoryReaderProtocol
from .remote_client import RemoteClient

FULL_SHA_PATTERN = re.compile(r"^[a-f0-9]{40}$")
PUSHED_REF_OUTPUT = "pushed_ref"


def validate_head_sha(head_sha: str) -> None:
    """Accept an empty value or a full 40 hex digit commit hash."""
    if head_sha and not FULL_SHA_PATTERN.fullmatch(head_sha):
        raise InvalidHeadShaFormat(head_sha)


def validate_session(head_sha: str = "", create_branch: bool = False) -> None:
    """Checks that need no remote: head sha format and a base for new branches."""
    validate_head_sha(head_sha)
    if create_branch and not head_sha:
        raise MissingCreateBranchBase()


def check_remote_head(client: RemoteClient, expected: str) -> str:
    """Fail unless the branch head on the remote is still ``expected``."""
    remote_head = client.get_head_commit_hash()
    if remote_head != expected:
        raise HeadShaMismatch(remote_head, expected)
    return remote_head


def resolve_head(client: RemoteClient, head_sha: str = "", create_branch: bool = False) -> str:
    """Work out the commit the first pushed change will be parented on.

    - no head_sha: the branch's current head (the branch must exist)
    - head_sha with create_branch: a new branch created at head_sha
    - head_sha alone: head_sha, after confirming the remote still points there
    """
    validate_session(head_sha, create_branch)

    if not head_sha:
        return client.get_head_commit_hash()
    if create_branch:
        return client.create_branch(head_sha)
    return check_remote_head(client, head_sha)


def push_changes(
    client: RemoteClient,
    changes: Sequence[Change],
    head_sha: str = "",
    create_branch: bool = False,
    logger: Optional[ActionsLogger] = None,
) -> str:
    """Push changes to the client's branch and return the new remote head.

    The new head is also published as the ``pushed_ref`` output.
    """
    logger = logger or client.logger

    with logger.group(
        f"Pushing to {client.owner}/{client.repo} (branch: {client.branch})"
    ):
        logger.print(f"Commits: {summarize_hashes([c.hash for c in changes])}")

        head = resolve_head(client, head_sha, create_branch)
        logger.print(f"Remote head commit: {head}")

        result = client.push_changes(head, changes)

        logger.notice(
            f"Pushed {len(changes)} commit(s): {client.compare_url(head, result.head)}"
        )

    logger.output(PUSHED_REF_OUTPUT, result.head)
    return result.head


def replay_changes(
    client: RemoteClient,
    base_commit: str,
    changes: Sequence[Change],
    logger: Optional[ActionsLogger] = None,
) -> str:
    """Recreate changes on top of base_commit and force the branch to them.

    This rewrites the remote branch: whatever it pointed at after
    base_commit is no longer reachable from it.
    """
    logger = logger or client.logger

    with logger.group(
        f"Replaying to {client.owner}/{client.repo} (branch: {client.branch})"
    ):
        logger.print(f"Commits to replay: {summarize_hashes([c.hash for c in changes])}")
        logger.print(f"Base commit: {base_commit}")

        try:
            result = client.push_changes(base_commit, changes, force=True)
        except PartialPushFailure as e:
            raise PartialPushFailure(e.pushed, e.total, verb="replayed") from e.__cause__

        logger.notice(
            f"Replayed {len(changes)} commit(s): "
            f"{client.compare_url(base_commit, result.head)}"
        )

    logger.output(PUSHED_REF_OUTPUT, result.head)
    return result.head


def replay_branch(
    reader: HistoryReaderProtocol,
    client: RemoteClient,
    since: str,
    head_sha: str = "",
    logger: Optional[ActionsLogger] = None,
) -> Optional[str]:
    """Replay every commit on the remote branch after ``since``.

    The branch is fetched into the local repository first; the commits
    between ``since`` and ``origin/<branch>`` are then recreated with
    replay_changes. Returns the new head, or None when there is nothing to
    replay.
    """
    logger = logger or client.logger

    validate_head_sha(head_sha)
    if head_sha:
        check_remote_head(client, head_sha)
    else:
        # The branch must exist
        client.get_head_commit_hash()

    logger.print(f"Fetching origin/{client.branch}...")
    reader.fetch(client.branch)

    commits = reader.commits_between(since, f"origin/{client.branch}")
    if not commits:
        logger.notice(f"No commits to replay (--since {since} is already at remote HEAD)")
        return None

    logger.print(f"Found {len(commits)} commit(s) to replay")
    changes = reader.changes(*commits)
    return replay_changes(client, since, changes, logger=logger)
