"""Console logging with GitHub Actions workflow command support."""

import secrets
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Iterator, Optional, Sequence

from .config.settings import Settings


class ActionsLogger:
    """Writes progress to standard error, or workflow commands inside Actions.

    Inside GitHub Actions (``GITHUB_ACTIONS=true``) output goes to standard
    output, which is where the runner looks for ``::group::`` and annotation
    commands. Standard output is otherwise reserved for ``output()``.
    """

    def __init__(
        self,
        stream: Optional[IO[str]] = None,
        actions: bool = False,
        github_output: str = "",
    ):
        self.actions = actions
        self.github_output = github_output
        self._stream = stream

    @classmethod
    def from_settings(cls, settings: Settings) -> "ActionsLogger":
        return cls(actions=settings.GITHUB_ACTIONS, github_output=settings.GITHUB_OUTPUT)

    @property
    def stream(self) -> IO[str]:
        # Resolved lazily so pytest's capture replacements are honoured
        if self._stream is not None:
            return self._stream
        return sys.stdout if self.actions else sys.stderr

    def print(self, message: str) -> None:
        print(message, file=self.stream)

    @contextmanager
    def group(self, title: str) -> Iterator[None]:
        """Collapsible group in Actions logs, a plain title elsewhere."""
        if not self.actions:
            self.print(title)
            yield
            return

        self.print(f"::group::{title}")
        try:
            yield
        finally:
            self.print("::endgroup::")

    def _annotate(self, level: str, message: str, prefix: str) -> None:
        if self.actions:
            self.print(f"::{level}::{message}")
        else:
            self.print(f"{prefix}{message}")

    def notice(self, message: str) -> None:
        self._annotate("notice", message, "")

    def warning(self, message: str) -> None:
        self._annotate("warning", message, "warning: ")

    def error(self, message: str) -> None:
        self._annotate("error", message, "error: ")

    def output(self, name: str, value: str) -> None:
        """Publish a value for the caller to capture.

        With ``GITHUB_OUTPUT`` set the value is appended to that file using
        the multiline-safe heredoc syntax; otherwise it is printed to standard
        output.
        """
        if not self.github_output:
            print(value, file=sys.stdout)
            return

        delimiter = f"delim_{secrets.token_hex(16)}"
        with Path(self.github_output).open("a", encoding="utf-8") as f:
            f.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")


def summarize_hashes(hashes: Sequence[str], limit: int = 10) -> str:
    """Comma separated hashes, truncated after ``limit`` entries."""
    shown = list(hashes[:limit])
    if len(hashes) > limit:
        shown.append(f"...and {len(hashes) - limit} more.")
    return ", ".join(shown)
