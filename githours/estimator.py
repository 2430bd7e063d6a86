"""
.. module:: estimator
   :synopsis: Turns commit timestamps into an estimate of hours worked

inspired by: https://github.com/kimmobrunfeldt/git-hours

Timestamps are sorted oldest first and each gap to the next commit is looked at:

 * a gap shorter than the session gap is counted in full, as continuous work
 * a longer gap means a new session started, and the next commit is credited a
   flat allowance, since when that session really began is unknown

The newest commit contributes nothing on its own.
"""

import numpy as np
import pandas as pd
from pandas import DataFrame

from githours.logging import get_logger

logger = get_logger("estimator")

SESSION_GAP_MINUTES = 120.0
FIRST_COMMIT_MINUTES = 120.0


def _check_params(session_gap_minutes, first_commit_minutes):
    if session_gap_minutes <= 0:
        raise ValueError(f"session_gap_minutes must be positive, got {session_gap_minutes}")
    if first_commit_minutes < 0:
        raise ValueError(f"first_commit_minutes must not be negative, got {first_commit_minutes}")


def _gaps(timestamps):
    ts = np.sort(np.asarray(list(timestamps), dtype=np.int64))
    # sorted, so every gap is >= 0 whatever order the history put the commits in
    gaps = np.diff(ts) / 60.0
    return ts, gaps


def _hours(gaps, session_gap_minutes, first_commit_minutes):
    return np.where(gaps < session_gap_minutes, gaps / 60.0, first_commit_minutes / 60.0)


def estimate_hours(timestamps, session_gap_minutes=SESSION_GAP_MINUTES, first_commit_minutes=FIRST_COMMIT_MINUTES):
    """Estimates hours of work from a collection of commit timestamps.

    :param timestamps: iterable of integer unix timestamps, in any order
    :param session_gap_minutes: (optional, default=120) gaps shorter than this are one coding session
    :param first_commit_minutes: (optional, default=120) time credited to the first commit of a new session
    :return: float, 0.0 for fewer than two timestamps
    """
    _check_params(session_gap_minutes, first_commit_minutes)

    _, gaps = _gaps(timestamps)
    if gaps.size == 0:
        return 0.0

    hours = float(_hours(gaps, session_gap_minutes, first_commit_minutes).sum())
    logger.debug(f"Estimated {hours:.2f} hours from {gaps.size + 1} timestamps")
    return hours


def session_breakdown(
    timestamps, session_gap_minutes=SESSION_GAP_MINUTES, first_commit_minutes=FIRST_COMMIT_MINUTES
):
    """Per-gap detail behind :func:`estimate_hours`.

    Returns a DataFrame with one row per consecutive pair of timestamps:

     * date: UTC time of the later commit of the pair
     * gap_minutes: minutes since the previous commit
     * new_session: whether the gap started a new session
     * hours: hours credited for the gap

    The hours column sums to the value of :func:`estimate_hours` for the same input.
    """
    _check_params(session_gap_minutes, first_commit_minutes)

    ts, gaps = _gaps(timestamps)
    df = DataFrame(
        {
            "date": pd.to_datetime(ts[1:], unit="s", utc=True),
            "gap_minutes": gaps,
            "new_session": gaps >= session_gap_minutes,
            "hours": _hours(gaps, session_gap_minutes, first_commit_minutes),
        },
        columns=["date", "gap_minutes", "new_session", "hours"],
    )
    return df
