import itertools

import pandas as pd
import pytest

from githours.estimator import FIRST_COMMIT_MINUTES, SESSION_GAP_MINUTES, estimate_hours, session_breakdown


class TestEstimateHours:
    """Gap-threshold estimate over commit timestamps."""

    @pytest.mark.parametrize("timestamps", [[], [1_600_000_000]])
    def test_minimum_data_floor(self, timestamps):
        assert estimate_hours(timestamps) == 0.0

    def test_returns_python_float(self):
        assert type(estimate_hours([0, 600])) is float
        assert type(estimate_hours([])) is float

    def test_same_session(self):
        """Gaps of 10 and 20 minutes are counted in full."""
        assert estimate_hours([0, 600, 1800]) == pytest.approx(0.5)

    def test_session_boundary(self):
        """A three hour gap earns the flat allowance, not three hours."""
        assert estimate_hours([0, 10800]) == pytest.approx(2.0)

    def test_mixed(self):
        assert estimate_hours([0, 600, 10800, 11400]) == pytest.approx(10 / 60 + 2.0 + 10 / 60)

    def test_exactly_at_threshold_is_new_session(self):
        assert estimate_hours([0, 120 * 60]) == pytest.approx(2.0)
        assert estimate_hours([0, 120 * 60 - 60]) == pytest.approx(119 / 60)

    def test_identical_timestamps_add_nothing(self):
        assert estimate_hours([500, 500, 500]) == 0.0
        assert estimate_hours([0, 600, 600]) == pytest.approx(10 / 60)

    def test_ordering_independence(self):
        timestamps = [0, 600, 10800, 11400, 11500]
        expected = estimate_hours(timestamps)
        for perm in itertools.permutations(timestamps):
            assert estimate_hours(list(perm)) == pytest.approx(expected)

    def test_skewed_timestamps_never_subtract(self):
        """Input in graph order, with a parent newer than its child, still sorts first."""
        # child at 600 whose parent claims 1200, then a grandchild at 1800
        assert estimate_hours([1800, 600, 1200]) == pytest.approx(0.5)

    def test_negative_timestamps(self):
        assert estimate_hours([-600, 0]) == pytest.approx(10 / 60)

    def test_accepts_generators(self):
        assert estimate_hours(t for t in [0, 600]) == pytest.approx(10 / 60)

    def test_custom_session_gap(self):
        assert estimate_hours([0, 3600], session_gap_minutes=30) == pytest.approx(2.0)
        assert estimate_hours([0, 3600], session_gap_minutes=30, first_commit_minutes=30) == pytest.approx(0.5)

    def test_deterministic(self):
        timestamps = [0, 600, 10800, 11400]
        assert len({estimate_hours(timestamps) for _ in range(10)}) == 1

    @pytest.mark.parametrize("gap", [0, -5])
    def test_invalid_session_gap(self, gap):
        with pytest.raises(ValueError):
            estimate_hours([0, 600], session_gap_minutes=gap)

    def test_invalid_first_commit_minutes(self):
        with pytest.raises(ValueError):
            estimate_hours([0, 600], first_commit_minutes=-1)

    def test_defaults(self):
        assert SESSION_GAP_MINUTES == 120
        assert FIRST_COMMIT_MINUTES == 120


class TestSessionBreakdown:
    def test_columns(self):
        df = session_breakdown([0, 600])
        assert list(df.columns) == ["date", "gap_minutes", "new_session", "hours"]

    def test_empty(self):
        assert session_breakdown([]).empty
        assert session_breakdown([42]).empty

    def test_mixed(self):
        df = session_breakdown([11400, 0, 10800, 600])
        assert df["gap_minutes"].tolist() == pytest.approx([10.0, 170.0, 10.0])
        assert df["new_session"].tolist() == [False, True, False]
        assert df["hours"].tolist() == pytest.approx([10 / 60, 2.0, 10 / 60])

    def test_dates_are_later_commit(self):
        df = session_breakdown([0, 600])
        assert df["date"].iloc[0] == pd.Timestamp(600, unit="s", tz="UTC")

    def test_sums_to_estimate(self):
        timestamps = [0, 45, 600, 9000, 20000, 20100, 50000]
        assert session_breakdown(timestamps)["hours"].sum() == pytest.approx(estimate_hours(timestamps))
