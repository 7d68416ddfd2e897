"""Reading commit hashes piped on standard input."""

import os
import re
import stat
from typing import IO, List

from .errors import StdinError

HASH_PATTERN = re.compile(r"^[a-f0-9]{4,40}$")


def stdin_is_piped(stream: IO[str]) -> bool:
    try:
        mode = os.fstat(stream.fileno()).st_mode
    except (AttributeError, OSError, ValueError):
        # In-memory streams have no descriptor; treat them as piped input
        return not hasattr(stream, "isatty") or not stream.isatty()
    return stat.S_ISFIFO(mode) or stat.S_ISREG(mode)


def commits_from_stdin(stream: IO[str]) -> List[str]:
    """Return the commit hashes found on stream, oldest first.

    Only the first whitespace separated field of each line is considered, so
    ``git log --oneline`` output can be piped directly. Log output is newest
    first, so the result is reversed.
    """
    if not stdin_is_piped(stream):
        raise StdinError("could not read from non-piped standard input")

    commits = []
    for line in stream:
        fields = line.split()
        if not fields:
            continue
        if HASH_PATTERN.match(fields[0]):
            commits.append(fields[0])

    if not commits:
        raise StdinError("no commits present on standard input")

    commits.reverse()
    return commits
