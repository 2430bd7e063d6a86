from collections import Counter

from githours.models import CommitRecord

BASE_TS = 1_600_000_000


def chain(timestamps, prefix="c"):
    """A linear history of CommitRecords, oldest first; returns the tip."""
    tip = None
    for i, ts in enumerate(timestamps):
        tip = CommitRecord(f"{prefix}{i}", ts, [tip] if tip is not None else [])
    return tip


def diamond():
    """root -> (left, right) -> merge, as plain CommitRecords."""
    root = CommitRecord("root", 0)
    left = CommitRecord("left", 600, [root])
    right = CommitRecord("right", 1200, [root])
    return CommitRecord("merge", 1800, [left, right])


class CountingRecord(CommitRecord):
    """A CommitRecord that counts how often its parents are read."""

    def __init__(self, id, timestamp, parents=(), counter=None):
        super().__init__(id, timestamp, parents)
        self.counter = counter if counter is not None else Counter()

    @property
    def parents(self):
        self.counter[self.id] += 1
        return CommitRecord.parents.fget(self)


def diamond_ladder(rungs, counter):
    """``rungs`` diamonds stacked on top of each other; returns the tip.

    Every commit below the top is reachable through 2**k paths.
    """
    tip = CountingRecord("base", 0, counter=counter)
    ts = 0
    for i in range(rungs):
        left = CountingRecord(f"l{i}", ts + 60, [tip], counter)
        right = CountingRecord(f"r{i}", ts + 120, [tip], counter)
        tip = CountingRecord(f"m{i}", ts + 180, [left, right], counter)
        ts += 180
    return tip
