"""
.. module:: models
   :synopsis: Read-only snapshots of commits and branches

"""

import os

from git import BadName, BadObject, GitCommandError

from githours.exceptions import CommitResolutionFailed, MalformedBranchName


def shallow_commits(git_dir):
    """Shas listed in the ``shallow`` file of a shallow clone, whose parents are not in the object store.

    Args:
        git_dir (str): The repository's ``.git`` directory.

    Returns:
        frozenset[str]: Empty for a complete clone.
    """
    try:
        with open(os.path.join(git_dir, "shallow")) as f:
            return frozenset(line.strip() for line in f if line.strip())
    except FileNotFoundError:
        return frozenset()


class CommitRecord:
    """One commit of the history DAG.

    Records compare and hash by ``id`` alone, so the same commit reached through
    two different merge parents is the same record.

    Args:
        id (str): Hex sha of the commit.
        timestamp (int): Seconds since the Unix epoch. Not monotonic along parent edges.
        parents: Either a sequence of CommitRecord, or a zero-argument callable
            returning one. A callable is invoked the first time ``parents`` is read.
    """

    __slots__ = ("id", "timestamp", "_parents")

    def __init__(self, id, timestamp, parents=()):
        self.id = id
        self.timestamp = int(timestamp)
        self._parents = parents if callable(parents) else tuple(parents)

    @property
    def parents(self):
        if callable(self._parents):
            self._parents = tuple(self._parents())
        return self._parents

    @classmethod
    def from_git(cls, commit, committer=False, shallow=frozenset()):
        """Wraps a GitPython commit. Parents are wrapped lazily as they are read.

        Args:
            commit (git.Commit): The commit to wrap.
            committer (bool): Use the committer timestamp instead of the author timestamp.
            shallow (frozenset[str]): Shas at the boundary of a shallow clone. They are
                treated as roots, since their parents were never fetched.

        Returns:
            CommitRecord

        Raises:
            CommitResolutionFailed: When the parents are read and one of them is missing
                from the object store.
        """
        timestamp = commit.committed_date if committer else commit.authored_date

        def load_parents():
            if commit.hexsha in shallow:
                return []
            try:
                return [cls.from_git(p, committer=committer, shallow=shallow) for p in commit.parents]
            except (ValueError, BadName, BadObject, GitCommandError) as e:
                raise CommitResolutionFailed(commit.hexsha, f"parent missing: {e}") from e

        return cls(commit.hexsha, timestamp, parents=load_parents)

    def __eq__(self, other):
        if not isinstance(other, CommitRecord):
            return NotImplemented
        return self.id == other.id

    def __hash__(self):
        return hash(self.id)

    def __repr__(self):
        return f"CommitRecord(id={self.id!r}, timestamp={self.timestamp})"


class BranchRecord:
    """A local branch: its name, whether it is checked out, and its tip.

    The tip is only peeled to a commit when ``commit`` is read, so branches that
    are never used are never resolved.

    Args:
        name (str): Branch name.
        is_head (bool): True for the currently checked-out branch.
        target: A CommitRecord, or a zero-argument callable returning one.
    """

    def __init__(self, name, is_head, target):
        self.name = name
        self.is_head = bool(is_head)
        self._target = target

    @property
    def commit(self):
        if not callable(self._target):
            return self._target
        try:
            return self._target()
        except (ValueError, BadName, BadObject, GitCommandError) as e:
            raise CommitResolutionFailed(self.name, str(e)) from e

    @classmethod
    def from_git(cls, head, current_path=None, committer=False, shallow=frozenset()):
        """Builds a record from a GitPython ``Head``.

        Args:
            head (git.Head): The local branch reference.
            current_path (Optional[str]): Ref path HEAD points at (``refs/heads/...``),
                or None when HEAD is detached.
            committer (bool): Passed on to :meth:`CommitRecord.from_git`.
            shallow (frozenset[str]): Passed on to :meth:`CommitRecord.from_git`.

        Raises:
            MalformedBranchName: If the name or path of the reference cannot be read.
        """
        try:
            name = head.name
            path = head.path
        except (UnicodeDecodeError, ValueError) as e:
            raise MalformedBranchName(f"Failed to read branch name: {e}") from e

        return cls(
            name,
            current_path is not None and path == current_path,
            lambda: CommitRecord.from_git(head.commit, committer=committer, shallow=shallow),
        )

    def __repr__(self):
        return f"BranchRecord(name={self.name!r}, is_head={self.is_head})"
