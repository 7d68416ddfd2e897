import sys
from contextlib import contextmanager
from typing import Iterator, List, Optional

import typer

from . import __version__
from .config.settings import get_settings
from .errors import CommitHeadlessError, NothingToCommit
from .logger import ActionsLogger
from .models import Change
from .schemas import Target
from .services import (
    GitRepository,
    open_remote_client,
    push_changes,
    read_worktree_entries,
    replay_branch,
)
from .services.push_orchestrator import validate_session
from .stdin import commits_from_stdin, stdin_is_piped

DEFAULT_COMMIT_MESSAGE = "Commit created by commit-headless"

app = typer.Typer(
    name="commit-headless",
    help="Recreate local commits on a GitHub branch through the REST API.",
    no_args_is_help=True,
    add_completion=False,
)


@contextmanager
def reporting_errors(logger: ActionsLogger) -> Iterator[None]:
    """Turn domain errors into an error annotation and exit status 1."""
    try:
        yield
    except CommitHeadlessError as e:
        logger.error(str(e))
        raise typer.Exit(code=1) from e


def _target(value: str) -> str:
    try:
        Target.parse(value)
    except CommitHeadlessError as e:
        raise typer.BadParameter(str(e)) from e
    return value


TARGET_OPTION = typer.Option(
    ..., "--target", "-T", callback=_target, help="Target repository in owner/repo format."
)
BRANCH_OPTION = typer.Option(..., "--branch", help="Name of the target branch on the remote.")
REPO_PATH_OPTION = typer.Option(".", "--repo-path", help="Path to the local repository.")
DRY_RUN_OPTION = typer.Option(
    False, "--dry-run", help="Perform everything except the remote writes."
)
HEAD_SHA_OPTION = typer.Option(
    "", "--head-sha", help="Expected commit sha of the remote branch HEAD (safety check)."
)
CREATE_BRANCH_OPTION = typer.Option(
    False, "--create-branch", help="Create the branch at --head-sha before pushing."
)
TRAILER_OPTION = typer.Option(
    None, "--trailer", help="'Key: Value' trailer appended to every commit message."
)


@app.command()
def push(
    commits: Optional[List[str]] = typer.Argument(
        None,
        help="Commit hashes to push, oldest first. Defaults to hashes piped on "
        "standard input, or every local commit after the remote head.",
    ),
    target: str = TARGET_OPTION,
    branch: str = BRANCH_OPTION,
    repo_path: str = REPO_PATH_OPTION,
    dry_run: bool = DRY_RUN_OPTION,
    head_sha: str = HEAD_SHA_OPTION,
    create_branch: bool = CREATE_BRANCH_OPTION,
    trailers: Optional[List[str]] = TRAILER_OPTION,
):
    """Push local commits to the remote.

    Pushed commits get new hashes; fetch and hard reset the local checkout to
    the remote branch before creating further commits on it.
    """
    settings = get_settings()
    logger = ActionsLogger.from_settings(settings)

    with reporting_errors(logger):
        validate_session(head_sha, create_branch)
        reader = GitRepository(repo_path, logger=logger)

        with open_remote_client(
            settings, Target.parse(target), branch, dry_run=dry_run, logger=logger
        ) as client:
            if not commits:
                if stdin_is_piped(sys.stdin):
                    commits = commits_from_stdin(sys.stdin)
                else:
                    # push_changes re-checks that the remote head is still this one
                    head_sha = head_sha or client.get_head_commit_hash()
                    commits = reader.commits_since(head_sha)

            if not commits:
                logger.notice("No local commits to push")
                return

            changes = reader.changes(*commits)
            if trailers:
                changes = [c.model_copy(update={"trailers": list(trailers)}) for c in changes]

            push_changes(
                client, changes, head_sha=head_sha, create_branch=create_branch, logger=logger
            )


@app.command()
def commit(
    files: Optional[List[str]] = typer.Argument(
        None, help="Files to commit. Defaults to the changes staged in the index."
    ),
    target: str = TARGET_OPTION,
    branch: str = BRANCH_OPTION,
    repo_path: str = REPO_PATH_OPTION,
    dry_run: bool = DRY_RUN_OPTION,
    head_sha: str = HEAD_SHA_OPTION,
    create_branch: bool = CREATE_BRANCH_OPTION,
    trailers: Optional[List[str]] = TRAILER_OPTION,
    author: str = typer.Option(
        "", "--author", help="Author in the 'A U Thor <author@example.com>' format."
    ),
    messages: Optional[List[str]] = typer.Option(
        None, "--message", "-m", help="Commit message; repeated values become paragraphs."
    ),
    force: bool = typer.Option(
        False, "--force", help="Treat named files missing on disk as deletions."
    ),
):
    """Create a single commit on the remote from files or staged changes."""
    settings = get_settings()
    logger = ActionsLogger.from_settings(settings)

    with reporting_errors(logger):
        validate_session(head_sha, create_branch)
        if files:
            entries = read_worktree_entries(repo_path, files, allow_deletions=force)
        else:
            entries = GitRepository(repo_path, logger=logger).staged_changes()

        if not entries:
            raise NothingToCommit()

        change = Change(
            hash="0" * 40,
            author=author,
            message="\n\n".join(messages or []) or DEFAULT_COMMIT_MESSAGE,
            trailers=list(trailers or []),
            entries=entries,
        )

        with open_remote_client(
            settings, Target.parse(target), branch, dry_run=dry_run, logger=logger
        ) as client:
            push_changes(
                client, [change], head_sha=head_sha, create_branch=create_branch, logger=logger
            )


@app.command()
def replay(
    since: str = typer.Option(
        ..., "--since", help="Base commit to replay from (exclusive)."
    ),
    target: str = TARGET_OPTION,
    branch: str = BRANCH_OPTION,
    repo_path: str = REPO_PATH_OPTION,
    dry_run: bool = DRY_RUN_OPTION,
    head_sha: str = HEAD_SHA_OPTION,
):
    """Recreate the remote commits after --since and force-update the branch.

    Useful to replace unsigned commits with equivalent API-created ones.
    This rewrites the remote branch history.
    """
    settings = get_settings()
    logger = ActionsLogger.from_settings(settings)

    with reporting_errors(logger):
        reader = GitRepository(repo_path, logger=logger)
        with open_remote_client(
            settings, Target.parse(target), branch, dry_run=dry_run, force=True, logger=logger
        ) as client:
            replay_branch(reader, client, since, head_sha=head_sha, logger=logger)


@app.command()
def version():
    """Print the version."""
    typer.echo(f"commit-headless v{__version__}")


def run() -> None:
    app()
