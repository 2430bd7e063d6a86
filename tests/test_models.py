from githours.models import BranchRecord, CommitRecord


class TestCommitRecord:
    def test_equality_by_id(self):
        assert CommitRecord("abc", 1) == CommitRecord("abc", 2)
        assert CommitRecord("abc", 1) != CommitRecord("def", 1)
        assert len({CommitRecord("abc", 1), CommitRecord("abc", 1)}) == 1

    def test_not_equal_to_other_types(self):
        assert CommitRecord("abc", 1) != "abc"

    def test_timestamp_is_int(self):
        assert CommitRecord("abc", 1.0).timestamp == 1
        assert isinstance(CommitRecord("abc", 1.0).timestamp, int)

    def test_parents_default_empty(self):
        assert CommitRecord("abc", 1).parents == ()

    def test_parents_from_list(self):
        root = CommitRecord("root", 0)
        assert CommitRecord("abc", 1, [root]).parents == (root,)

    def test_repr(self):
        assert repr(CommitRecord("abc", 1)) == "CommitRecord(id='abc', timestamp=1)"


class TestBranchRecord:
    def test_commit_passthrough(self):
        tip = CommitRecord("abc", 1)
        branch = BranchRecord("main", True, tip)
        assert branch.commit is tip
        assert branch.is_head is True

    def test_commit_resolved_on_read(self):
        calls = []

        def resolve():
            calls.append(1)
            return CommitRecord("abc", 1)

        branch = BranchRecord("main", 1, resolve)
        assert calls == []
        assert branch.commit.id == "abc"
        assert branch.is_head is True

    def test_repr(self):
        assert repr(BranchRecord("main", False, None)) == "BranchRecord(name='main', is_head=False)"
