"""Change model: one local commit to be recreated on the remote."""

from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

REGULAR_FILE_MODE = "100644"


class FileEntry(BaseModel):
    """Content and mode of a single path in a change.

    ``content is None`` means the path is deleted; ``b""`` is an empty file.
    """

    model_config = ConfigDict(frozen=True)

    content: Optional[bytes] = None
    mode: str = ""

    @property
    def deleted(self) -> bool:
        return self.content is None

    @property
    def file_mode(self) -> str:
        return self.mode or REGULAR_FILE_MODE


class Change(BaseModel):
    """Represents a single commit that will be pushed to the remote."""

    model_config = ConfigDict(frozen=True)

    hash: str
    author: str = ""
    message: str = ""
    trailers: List[str] = Field(default_factory=list)  # "Key: Value", in order
    entries: Dict[str, FileEntry] = Field(default_factory=dict)

    def _split_message(self) -> Tuple[str, str]:
        headline, _, body = self.message.partition("\n\n")
        return headline, body

    def headline(self) -> str:
        """The first paragraph of the message."""
        return self._split_message()[0]

    def body(self) -> str:
        """Everything after the headline, followed by trailers.

        A ``Co-authored-by`` trailer for the author comes first, then the
        configured trailers. Trailers whose text already appears in the body
        (case-insensitively) are not repeated.
        """
        body = self._split_message()[1].strip()

        trailers = []
        if self.author:
            trailers.append(f"Co-authored-by: {self.author}")
        trailers.extend(self.trailers)

        existing = body.lower()
        missing = [t for t in trailers if t.lower() not in existing]

        return "\n\n".join(part for part in (body, "\n".join(missing)) if part)

    def commit_message(self) -> str:
        """Headline, plus a blank line and the body when there is one."""
        body = self.body()
        if body:
            return f"{self.headline()}\n\n{body}"
        return self.headline()
