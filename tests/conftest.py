"""
Shared pytest fixtures for git-hours tests.
"""

import git
import pytest
from helpers import BASE_TS


class RepoBuilder:
    """Builds commits with fixed author and committer timestamps."""

    def __init__(self, path):
        self.path = path
        self.repo = git.Repo.init(path)
        self.repo.config_writer().set_value("user", "name", "Test User").release()
        self.repo.config_writer().set_value("user", "email", "test@example.com").release()
        self._n = 0

    def commit(self, ts, parents=None, head=True, committed_ts=None, message=None):
        """Commits a new file at ``BASE_TS + ts``. ``parents=None`` means HEAD's commit, if any."""
        self._n += 1
        name = f"file{self._n}.txt"
        (self.path / name).write_text(f"change {self._n}\n")
        self.repo.index.add([name])
        committed_ts = ts if committed_ts is None else committed_ts
        return self.repo.index.commit(
            message or f"commit {self._n}",
            parent_commits=parents,
            head=head,
            author_date=f"{BASE_TS + ts} +0000",
            commit_date=f"{BASE_TS + committed_ts} +0000",
        )


@pytest.fixture
def builder(tmp_path):
    """An empty repository to build history in."""
    repo_path = tmp_path / "repository1"
    repo_path.mkdir()
    return RepoBuilder(repo_path)


@pytest.fixture
def diamond_repo(builder):
    """root -> (a, b) -> merge, with the active branch at the merge.

    Author timestamps (seconds after BASE_TS): root 0, a 600, b 1200, merge 1800.
    """
    root = builder.commit(0)
    a = builder.commit(600, parents=[root])
    b = builder.commit(1200, parents=[root], head=False)
    merge = builder.commit(1800, parents=[a, b], message="merge")
    builder.commits = {"root": root, "a": a, "b": b, "merge": merge}
    return builder
