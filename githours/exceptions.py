"""
.. module:: exceptions
   :synopsis: Errors raised while locating and walking a repository's history

Every error derives from :class:`GitHoursError`. All of them are fatal for a run
except :class:`MalformedBranchName`, which the locator catches, logs and skips.
"""


class GitHoursError(Exception):
    """Base exception for githours errors."""

    pass


class RepositoryNotFound(GitHoursError):
    """Raised when the target path is missing or is not a git repository."""

    def __init__(self, path, reason=None):
        self.path = path
        self.reason = reason
        message = f"No git repository found at {path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class BranchEnumerationFailed(GitHoursError):
    """Raised when the local branches of a repository cannot be listed."""

    pass


class HeadNotFound(GitHoursError):
    """Raised when no local branch is checked out, e.g. on a detached HEAD."""

    pass


class MalformedBranchName(GitHoursError):
    """Raised for a single branch whose name cannot be read or decoded."""

    pass


class CommitResolutionFailed(GitHoursError):
    """Raised when a branch tip, or a parent reached by the walk, cannot be read as a commit."""

    def __init__(self, ref, reason=None):
        self.ref = ref
        self.reason = reason
        message = f"Could not resolve commit '{ref}'"
        if reason:
            message += f": {reason}"
        super().__init__(message)


__all__ = [
    "GitHoursError",
    "RepositoryNotFound",
    "BranchEnumerationFailed",
    "HeadNotFound",
    "MalformedBranchName",
    "CommitResolutionFailed",
]
