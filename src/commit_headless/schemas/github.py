"""Payloads exchanged with the GitHub git data REST API."""

from typing import List, Optional

from pydantic import BaseModel, Field


class ShaRef(BaseModel):
    sha: str


class Branch(BaseModel):
    """GET /repos/{owner}/{repo}/branches/{branch}"""

    name: str = ""
    commit: ShaRef


class Reference(BaseModel):
    """Responses of the git/refs endpoints."""

    ref: str = ""
    object: ShaRef


class GitCommit(BaseModel):
    """Responses of the git/commits endpoints."""

    sha: str
    tree: Optional[ShaRef] = None
    parents: List[ShaRef] = Field(default_factory=list)
    message: str = ""


class Blob(BaseModel):
    sha: str


class Tree(BaseModel):
    sha: str


class TreeEntry(BaseModel):
    """One entry of a create-tree request.

    A ``sha`` of ``None`` is serialized as ``null``, which removes the path
    from the base tree.
    """

    path: str
    mode: str
    type: str = "blob"
    sha: Optional[str] = None


class CreateBlobRequest(BaseModel):
    content: str
    encoding: str = "base64"


class CreateTreeRequest(BaseModel):
    base_tree: str
    tree: List[TreeEntry]


class CreateCommitRequest(BaseModel):
    message: str
    tree: str
    parents: List[str]


class CreateRefRequest(BaseModel):
    ref: str
    sha: str


class UpdateRefRequest(BaseModel):
    sha: str
    force: bool = False
