from githours.cache import EphemeralCache
from githours.estimator import estimate_hours, session_breakdown
from githours.exceptions import (
    BranchEnumerationFailed,
    CommitResolutionFailed,
    GitHoursError,
    HeadNotFound,
    MalformedBranchName,
    RepositoryNotFound,
)
from githours.models import BranchRecord, CommitRecord
from githours.repository import Repository
from githours.walker import walk_commits

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("git-hours")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    "Repository",
    "CommitRecord",
    "BranchRecord",
    "EphemeralCache",
    "walk_commits",
    "estimate_hours",
    "session_breakdown",
    "GitHoursError",
    "RepositoryNotFound",
    "BranchEnumerationFailed",
    "HeadNotFound",
    "MalformedBranchName",
    "CommitResolutionFailed",
]
