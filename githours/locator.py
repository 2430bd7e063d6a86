"""
.. module:: locator
   :synopsis: Finds the checked-out branch and its tip commit

"""

from githours.exceptions import HeadNotFound, MalformedBranchName
from githours.logging import get_logger
from githours.models import BranchRecord

logger = get_logger("locator")


def collect_branches(heads, current_path=None, committer=False, shallow=frozenset()):
    """Turns raw local branch references into BranchRecords.

    A reference whose name cannot be read is logged as a warning and skipped.

    Args:
        heads: Iterable of GitPython ``Head`` objects (or anything with ``name``, ``path`` and ``commit``).
        current_path (Optional[str]): Ref path HEAD points at, None when detached.
        committer (bool): Use committer timestamps for the resulting commits.
        shallow (frozenset[str]): Boundary shas of a shallow clone, walked as roots.

    Returns:
        list[BranchRecord]
    """
    branches = []
    for head in heads:
        try:
            branches.append(
                BranchRecord.from_git(head, current_path=current_path, committer=committer, shallow=shallow)
            )
        except MalformedBranchName as e:
            logger.warning(f"Skipping branch: {e}")
    return branches


def find_head_branch(branches):
    """Returns the branch flagged as checked out.

    Args:
        branches: Iterable of BranchRecord.

    Returns:
        BranchRecord

    Raises:
        HeadNotFound: If no branch is flagged, as on a detached HEAD.
    """
    for branch in branches:
        if branch.is_head:
            logger.info(f"Found HEAD branch: {branch.name}")
            return branch
        logger.debug(f"Branch {branch.name} is not HEAD")

    raise HeadNotFound("No local branch is checked out (detached HEAD?)")


def find_head_commit(branches):
    """Returns the tip commit of the checked-out branch.

    Raises:
        HeadNotFound: If no branch is flagged as checked out.
        CommitResolutionFailed: If the branch tip cannot be peeled to a commit.
    """
    return find_head_branch(branches).commit
