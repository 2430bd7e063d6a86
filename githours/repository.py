"""
.. module:: repository
   :platform: Unix, Windows
   :synopsis: Estimates hours of work on the checked-out branch of a single git repository

"""

import os

import pandas as pd
from git import BadName, GitCommandError, InvalidGitRepositoryError, NoSuchPathError, Repo
from pandas import DataFrame

from githours.cache import multicache
from githours.estimator import FIRST_COMMIT_MINUTES, SESSION_GAP_MINUTES, estimate_hours, session_breakdown
from githours.exceptions import BranchEnumerationFailed, CommitResolutionFailed, HeadNotFound, RepositoryNotFound
from githours.locator import collect_branches, find_head_commit
from githours.logging import logger
from githours.models import CommitRecord, shallow_commits
from githours.walker import commit_timestamps, sort_commits, walk_commits


class Repository:
    """A single local git repository, read through GitPython.

    Args:
        working_dir (Optional[str | os.PathLike]): Path to the repository. If None, the
            current working directory is used.
        verbose (bool, optional): Whether to print progress output. Defaults to False.
        cache_backend (Optional[object]): A cache from githours.cache, e.g. EphemeralCache.
        resolve_detached_head (bool, optional): When no local branch is checked out, use
            the commit HEAD points at instead of raising HeadNotFound. Defaults to False.
        committer (bool, optional): Use committer timestamps instead of author
            timestamps. Defaults to False.

    Attributes:
        git_dir (str): Path to the repository
        repo (git.Repo): GitPython Repo instance

    Raises:
        RepositoryNotFound: If the path does not exist or is not inside a git repository

    Examples:
        >>> repo = Repository('/path/to/repo')
        >>> repo.hours_estimate()
        12.5
    """

    def __init__(
        self,
        working_dir=None,
        verbose=False,
        cache_backend=None,
        resolve_detached_head=False,
        committer=False,
    ):
        self.verbose = verbose
        self.cache_backend = cache_backend
        self.resolve_detached_head = resolve_detached_head
        self.committer = committer

        self.git_dir = os.getcwd() if working_dir is None else os.fspath(working_dir)

        try:
            self.repo = Repo(self.git_dir)
        except (InvalidGitRepositoryError, NoSuchPathError) as e:
            logger.error(f"Could not open repository at {self.git_dir}: {e!r}")
            raise RepositoryNotFound(self.git_dir, type(e).__name__) from e

        if self.verbose:
            print(f"Repository [{self.repo_name}] instantiated at directory: {self.git_dir}")
        logger.info(f"Repository [{self.repo_name}] instantiated at directory: {self.git_dir}")

    @property
    def repo_name(self):
        """Name of the directory holding the repository, or 'unknown_repo'."""
        if self.repo.working_tree_dir is not None:
            reponame = os.path.basename(os.path.normpath(self.repo.working_tree_dir))
        else:
            reponame = os.path.basename(os.path.normpath(self.repo.git_dir))
        if reponame.strip() == "":
            return "unknown_repo"
        return reponame

    def cache_state(self):
        """Everything besides call arguments that a cached result depends on.

        That is the ref HEAD points at (or ``detached``), the sha it resolves to, and
        the instance options that change what is walked.
        """
        head = self._current_ref_path() or "detached"
        try:
            sha = self.repo.head.commit.hexsha
        except ValueError:
            sha = None
        return f"{head}@{sha}||committer={self.committer}||resolve_detached_head={self.resolve_detached_head}"

    def _shallow_commits(self):
        return shallow_commits(self.repo.git_dir)

    def _current_ref_path(self):
        if self.repo.head.is_detached:
            return None
        return self.repo.head.reference.path

    def local_branches(self):
        """Returns the local branches as BranchRecords.

        Branches whose names cannot be read are logged and left out.

        Raises:
            BranchEnumerationFailed: If the branches cannot be listed at all.
        """
        logger.debug("Fetching local branches...")
        try:
            heads = list(self.repo.heads)
            current_path = self._current_ref_path()
        except (GitCommandError, OSError, ValueError) as e:
            logger.error(f"Failed to list branches of {self.repo_name}: {e}")
            raise BranchEnumerationFailed(f"Could not list branches of {self.git_dir}: {e}") from e

        return collect_branches(
            heads, current_path=current_path, committer=self.committer, shallow=self._shallow_commits()
        )

    @multicache(key_prefix="branches", key_list=[])
    def branches(self):
        """Returns information about the local branches.

        Returns:
            pandas.DataFrame: A DataFrame with columns:
                - branch (str): Name of the branch
                - is_head (bool): Whether it is the checked-out branch
                - repository (str): Repository name
        """
        data = [[b.name, b.is_head] for b in self.local_branches()]
        df = DataFrame(data, columns=["branch", "is_head"])
        df["repository"] = self.repo_name
        return df

    def head_commit(self):
        """Returns the tip commit of the checked-out branch.

        On a detached HEAD this raises HeadNotFound, unless the repository was
        created with ``resolve_detached_head=True``, in which case the commit HEAD
        points at is used.

        Raises:
            HeadNotFound: If no local branch is checked out.
            CommitResolutionFailed: If the tip cannot be peeled to a commit.
        """
        branches = self.local_branches()
        try:
            return find_head_commit(branches)
        except HeadNotFound:
            if not (self.resolve_detached_head and self.repo.head.is_detached):
                raise

        logger.warning("HEAD is detached, resolving it directly")
        try:
            return CommitRecord.from_git(
                self.repo.head.commit, committer=self.committer, shallow=self._shallow_commits()
            )
        except (ValueError, BadName) as e:
            raise CommitResolutionFailed("HEAD", str(e)) from e

    def walk(self):
        """Returns every commit reachable from the checked-out branch tip, each once.

        Returns:
            list[CommitRecord]: in no particular order
        """
        tip = self.head_commit()
        if self.verbose:
            print(f"Walking history from {tip.id}")
        return walk_commits(tip)

    @multicache(key_prefix="commit_trace", key_list=[])
    def commit_trace(self):
        """Returns the commits examined for the estimate, oldest first.

        Returns:
            pandas.DataFrame: A DataFrame indexed by date (UTC) with columns:
                - commit_sha (str): Commit hash
                - timestamp (int): Seconds since the epoch
                - repository (str): Repository name
        """
        commits = sort_commits(self.walk(), ascending=True)
        df = DataFrame(
            [[c.timestamp, c.id, c.timestamp] for c in commits],
            columns=["date", "commit_sha", "timestamp"],
        )
        df["date"] = pd.to_datetime(df["date"], unit="s", utc=True)
        df = df.set_index("date")
        df["repository"] = self.repo_name

        logger.info(f"Built commit trace for {self.repo_name}. Found {len(df)} commits.")
        return df

    @multicache(key_prefix="hours_estimate", key_list=["session_gap_minutes", "first_commit_minutes"])
    def hours_estimate(self, session_gap_minutes=SESSION_GAP_MINUTES, first_commit_minutes=FIRST_COMMIT_MINUTES):
        """
        Estimates the hours of work behind the checked-out branch.

        :param session_gap_minutes: (optional, default=120) commits closer together than this are one coding session
        :param first_commit_minutes: (optional, default=120) time credited to the first commit of each new session
        :return: float
        """
        logger.info(f"Starting hours estimation for {self.repo_name}")

        timestamps = commit_timestamps(self.walk())
        hours = estimate_hours(
            timestamps,
            session_gap_minutes=session_gap_minutes,
            first_commit_minutes=first_commit_minutes,
        )

        logger.info(f"Finished hours estimation for {self.repo_name}: {hours:.2f} hours over {len(timestamps)} commits")
        return hours

    @multicache(key_prefix="sessions", key_list=["session_gap_minutes", "first_commit_minutes"])
    def sessions(self, session_gap_minutes=SESSION_GAP_MINUTES, first_commit_minutes=FIRST_COMMIT_MINUTES):
        """Returns the per-gap breakdown behind :meth:`hours_estimate`.

        See :func:`githours.estimator.session_breakdown` for the columns. A
        repository column is added.
        """
        df = session_breakdown(
            commit_timestamps(self.walk()),
            session_gap_minutes=session_gap_minutes,
            first_commit_minutes=first_commit_minutes,
        )
        df["repository"] = self.repo_name
        return df

    def __str__(self):
        return f"git repository: {self.repo_name} at: {self.git_dir}"

    def __repr__(self):
        return f"Repository(working_dir={self.git_dir!r})"
