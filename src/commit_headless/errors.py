"""Error types raised while replicating commits."""

from typing import Optional


class CommitHeadlessError(Exception):
    """Base class for every error the CLI reports to the user."""


# --- Local repository ---


class LocalGitError(CommitHeadlessError):
    """A git subprocess failed; carries the captured diagnostic output."""

    def __init__(self, message: str, stderr: str = ""):
        self.stderr = stderr.strip()
        if self.stderr:
            message = f"{message}: {self.stderr}"
        super().__init__(message)


class DivergedHistory(CommitHeadlessError):
    def __init__(self, base: str):
        self.base = base
        super().__init__(
            f"remote HEAD {base} is not an ancestor of local HEAD "
            "(histories have diverged)"
        )


class UnsupportedMergeCommit(CommitHeadlessError):
    def __init__(self, commit: str):
        self.commit = commit
        super().__init__(f"range includes a merge commit ({commit}), not continuing")


class MissingFile(CommitHeadlessError):
    def __init__(self, path: str):
        self.path = path
        super().__init__(f"file {path!r} does not exist, but --force was not set")


# --- Remote API ---


class RemoteAPIError(CommitHeadlessError):
    """A request to the hosted API failed or returned an unusable response."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class NoRemoteBranch(RemoteAPIError):
    def __init__(self, branch: str, status_code: Optional[int] = 404):
        self.branch = branch
        super().__init__(f"no remote branch {branch!r}", status_code=status_code)


class BranchPointMissing(RemoteAPIError):
    """Branch creation was rejected; ``detail`` is the server's explanation."""

    def __init__(self, sha: str, status_code: Optional[int] = 422, detail: str = ""):
        self.sha = sha
        self.detail = detail
        if detail:
            reason = f"{detail} (branch point {sha})"
        else:
            reason = f"branch point {sha} does not exist"
        super().__init__(
            f"create branch: http {status_code}: {reason}", status_code=status_code
        )


class PushStepFailed(CommitHeadlessError):
    """One of the per-change write steps failed."""

    def __init__(self, step: str, cause: Exception):
        self.step = step
        super().__init__(f"{step}: {cause}")


# --- Push session ---


class MissingToken(CommitHeadlessError):
    def __init__(self):
        super().__init__("no GitHub token supplied")


class InvalidTarget(CommitHeadlessError):
    def __init__(self, value: str):
        self.value = value
        super().__init__(
            f"invalid target {value!r}, must be of the form owner/repo with exactly one slash"
        )


class InvalidHeadShaFormat(CommitHeadlessError):
    def __init__(self, head_sha: str):
        self.head_sha = head_sha
        super().__init__(
            f"invalid head-sha {head_sha!r}, must be a full 40 hex digit commit hash"
        )


class MissingCreateBranchBase(CommitHeadlessError):
    def __init__(self):
        super().__init__("cannot use --create-branch without supplying --head-sha")


class HeadShaMismatch(CommitHeadlessError):
    def __init__(self, remote_head: str, expected: str):
        self.remote_head = remote_head
        self.expected = expected
        super().__init__(
            f"remote HEAD {remote_head} doesn't match expected --head-sha {expected} "
            "(the branch may have been updated)"
        )


class PartialPushFailure(CommitHeadlessError):
    """Raised when fewer changes were applied than requested."""

    def __init__(self, pushed: int, total: int, verb: str = "pushed"):
        self.pushed = pushed
        self.total = total
        super().__init__(f"{verb} {pushed} of {total} changes")


class StdinError(CommitHeadlessError):
    """Commit hashes could not be read from standard input."""


class NothingToCommit(CommitHeadlessError):
    def __init__(self):
        super().__init__("no staged changes and no files given, nothing to commit")
