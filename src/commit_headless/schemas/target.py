from pydantic import BaseModel

from ..errors import InvalidTarget


class Target(BaseModel):
    """A remote repository identified as ``owner/repo``."""

    owner: str
    repo: str

    @classmethod
    def parse(cls, value: str) -> "Target":
        if value.count("/") != 1:
            raise InvalidTarget(value)
        owner, repo = value.split("/")
        if not owner or not repo:
            raise InvalidTarget(value)
        return cls(owner=owner, repo=repo)

    def __str__(self) -> str:
        return f"{self.owner}/{self.repo}"
