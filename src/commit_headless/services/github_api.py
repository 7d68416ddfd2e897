"""REST implementations of the branch and git data capability interfaces."""

import base64
from typing import Any, List, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from ..errors import BranchPointMissing, NoRemoteBranch, RemoteAPIError
from ..schemas.github import (
    Blob,
    Branch,
    CreateBlobRequest,
    CreateCommitRequest,
    CreateRefRequest,
    CreateTreeRequest,
    GitCommit,
    Reference,
    Tree,
    TreeEntry,
    UpdateRefRequest,
)

API_VERSION = "2022-11-28"

ResponseModel = TypeVar("ResponseModel", bound=BaseModel)


class _Service:
    """Shared request handling for the GitHub REST services."""

    def __init__(self, http: httpx.Client):
        self.http = http

    def _send(self, method: str, url: str, payload: Optional[BaseModel] = None) -> httpx.Response:
        kwargs: dict = {}
        if payload is not None:
            kwargs["json"] = payload.model_dump(mode="json")
        try:
            return self.http.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            raise RemoteAPIError(f"{method} {url}: {e}") from e

    @staticmethod
    def _check(response: httpx.Response) -> None:
        if response.is_success:
            return
        raise RemoteAPIError(
            f"{response.request.method} {response.request.url.path}: "
            f"http {response.status_code}: {_error_message(response)}",
            status_code=response.status_code,
        )

    @staticmethod
    def _decode(response: httpx.Response, model: Type[ResponseModel]) -> ResponseModel:
        try:
            return model.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise RemoteAPIError(
                f"decode {response.request.url.path} response: {e}",
                status_code=response.status_code,
            ) from e

    def _call(
        self,
        method: str,
        url: str,
        model: Type[ResponseModel],
        payload: Optional[BaseModel] = None,
    ) -> ResponseModel:
        response = self._send(method, url, payload)
        self._check(response)
        return self._decode(response, model)


def _error_message(response: httpx.Response) -> str:
    try:
        body: Any = response.json()
    except ValueError:
        return response.text.strip() or response.reason_phrase
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return response.reason_phrase


class RepositoriesService(_Service):
    """Branch lookup and creation (implements BranchService)."""

    def get_branch_head(self, owner: str, repo: str, branch: str) -> str:
        response = self._send("GET", f"/repos/{owner}/{repo}/branches/{branch}")
        if response.status_code == httpx.codes.NOT_FOUND:
            raise NoRemoteBranch(branch)
        self._check(response)
        return self._decode(response, Branch).commit.sha

    def create_branch(self, owner: str, repo: str, branch: str, sha: str) -> str:
        payload = CreateRefRequest(ref=f"refs/heads/{branch}", sha=sha)
        response = self._send("POST", f"/repos/{owner}/{repo}/git/refs", payload)
        if response.status_code == httpx.codes.UNPROCESSABLE_ENTITY:
            raise BranchPointMissing(
                sha, status_code=response.status_code, detail=_error_message(response)
            )
        self._check(response)
        return self._decode(response, Reference).object.sha


class GitService(_Service):
    """Git object and ref endpoints (implements GitDataService)."""

    def get_commit(self, owner: str, repo: str, sha: str) -> GitCommit:
        return self._call("GET", f"/repos/{owner}/{repo}/git/commits/{sha}", GitCommit)

    def create_blob(self, owner: str, repo: str, content: bytes) -> str:
        payload = CreateBlobRequest(
            content=base64.b64encode(content).decode("ascii"), encoding="base64"
        )
        return self._call("POST", f"/repos/{owner}/{repo}/git/blobs", Blob, payload).sha

    def create_tree(
        self, owner: str, repo: str, base_tree: str, entries: List[TreeEntry]
    ) -> str:
        payload = CreateTreeRequest(base_tree=base_tree, tree=entries)
        return self._call("POST", f"/repos/{owner}/{repo}/git/trees", Tree, payload).sha

    def create_commit(
        self, owner: str, repo: str, message: str, tree: str, parents: List[str]
    ) -> str:
        payload = CreateCommitRequest(message=message, tree=tree, parents=parents)
        return self._call(
            "POST", f"/repos/{owner}/{repo}/git/commits", GitCommit, payload
        ).sha

    def update_ref(
        self, owner: str, repo: str, branch: str, sha: str, force: bool = False
    ) -> str:
        payload = UpdateRefRequest(sha=sha, force=force)
        return self._call(
            "PATCH", f"/repos/{owner}/{repo}/git/refs/heads/{branch}", Reference, payload
        ).object.sha


class GitHubAPI:
    """An authenticated connection to the GitHub REST API."""

    def __init__(
        self,
        token: str,
        base_url: str = "https://api.github.com",
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.http = httpx.Client(
            base_url=base_url,
            headers={
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": API_VERSION,
            },
            timeout=timeout,
            transport=transport,
        )
        self.repositories = RepositoriesService(self.http)
        self.git = GitService(self.http)

    def close(self) -> None:
        self.http.close()

    def __enter__(self) -> "GitHubAPI":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
