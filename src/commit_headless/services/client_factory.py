"""Factory for creating RemoteClient instances from settings."""

from contextlib import contextmanager
from typing import Iterator, Optional

import httpx

from ..config.settings import Settings
from ..errors import MissingToken
from ..logger import ActionsLogger
from ..schemas import Target
from .github_api import GitHubAPI
from .remote_client import RemoteClient


def create_remote_client(
    api: GitHubAPI,
    target: Target,
    branch: str,
    dry_run: bool = False,
    force: bool = False,
    server_url: str = "https://github.com",
    logger: Optional[ActionsLogger] = None,
) -> RemoteClient:
    """
    Create a RemoteClient backed by a GitHub REST connection.

    Args:
        api: Authenticated GitHub connection
        target: Remote repository
        branch: Remote branch name
        dry_run: If True, every remote write is skipped
        force: If True, ref updates are forced (replay)
        server_url: Web URL used for compare links
        logger: Logger for progress output

    Returns:
        RemoteClient for the target branch
    """
    return RemoteClient(
        repositories=api.repositories,
        git=api.git,
        owner=target.owner,
        repo=target.repo,
        branch=branch,
        dry_run=dry_run,
        force=force,
        server_url=server_url,
        logger=logger,
    )


@contextmanager
def open_remote_client(
    settings: Settings,
    target: Target,
    branch: str,
    dry_run: bool = False,
    force: bool = False,
    logger: Optional[ActionsLogger] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> Iterator[RemoteClient]:
    """
    Open a RemoteClient using application settings, closing it afterwards.

    Raises:
        MissingToken: If none of the token variables is set
    """
    token = settings.token
    if not token:
        raise MissingToken()

    with GitHubAPI(
        token=token,
        base_url=settings.GITHUB_API_URL,
        timeout=settings.HTTP_TIMEOUT,
        transport=transport,
    ) as api:
        yield create_remote_client(
            api,
            target,
            branch,
            dry_run=dry_run,
            force=force,
            server_url=settings.GITHUB_SERVER_URL,
            logger=logger,
        )
