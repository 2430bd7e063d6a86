"""
.. module:: walker
   :synopsis: Collects every commit reachable from a tip

The walk is an iterative depth-first search over parent edges. A single
visited set, keyed by commit id, is shared by the whole traversal so each
commit's ancestry is expanded once no matter how many merge paths reach it.
"""

import logging

from githours.logging import get_logger

logger = get_logger("walker")


def walk_commits(tip):
    """Returns every distinct commit reachable from ``tip``, ``tip`` included.

    Args:
        tip (Optional[CommitRecord]): Starting commit. None yields an empty list.

    Returns:
        list[CommitRecord]: Each reachable commit exactly once, in discovery order.
        Callers should treat the order as meaningless and use :func:`sort_commits`.
    """
    if tip is None:
        return []

    visited = {}
    stack = [tip]
    while stack:
        commit = stack.pop()
        if commit.id in visited:
            continue
        visited[commit.id] = commit

        if logger.isEnabledFor(logging.DEBUG) and len(visited) % 1000 == 0:
            logger.debug(f"Visited {len(visited)} commits...")

        # reversed so the first parent is expanded first
        for parent in reversed(commit.parents):
            if parent.id not in visited:
                stack.append(parent)

    logger.info(f"Walked {len(visited)} commits reachable from {tip.id}")
    return list(visited.values())


def sort_commits(commits, ascending=True):
    """Sorts commits by timestamp, breaking ties by id.

    Args:
        commits: Iterable of CommitRecord.
        ascending (bool): Oldest first when True, newest first when False.

    Returns:
        list[CommitRecord]
    """
    return sorted(commits, key=lambda c: (c.timestamp, c.id), reverse=not ascending)


def commit_timestamps(commits):
    """Returns the timestamp of each commit, in input order."""
    return [c.timestamp for c in commits]
