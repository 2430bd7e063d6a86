"""
.. module:: report
   :synopsis: Renders the commit trace and estimate as text

"""


def format_report(trace, hours):
    """Builds the human readable report.

    Args:
        trace (pandas.DataFrame): Output of :meth:`githours.Repository.commit_trace`.
        hours (float): Output of :meth:`githours.Repository.hours_estimate`.

    Returns:
        str: One ``commit <sha> at <timestamp>`` line per commit, then the estimate
        as a decimal number of hours and as rounded whole hours.
    """
    lines = [f"commit {sha} at {ts}" for sha, ts in zip(trace["commit_sha"], trace["timestamp"])]
    lines.append(f"Estimated hours: {hours:.2f}")
    lines.append(f"Rounded hours: {round(hours)}")
    return "\n".join(lines)
