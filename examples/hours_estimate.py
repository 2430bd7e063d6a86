"""
Example of estimating development hours from commit history.

This example demonstrates:
1. Opening a local repository
2. Walking every commit reachable from the checked-out branch
3. Estimating development hours from the gaps between commits
4. Looking at the coding sessions behind the estimate
"""

import sys
import time

from githours import EphemeralCache, Repository
from githours.logging import add_stream_handler

if __name__ == "__main__":
    add_stream_handler()
    path = sys.argv[1] if len(sys.argv) > 1 else None

    print("Initializing repository...")
    start_time = time.time()
    repo = Repository(working_dir=path, verbose=True, cache_backend=EphemeralCache())

    print("\nWalking commit history...")
    trace = repo.commit_trace()
    print(trace.head(10))

    print("\nEstimating development hours...")
    hours = repo.hours_estimate()
    sessions = repo.sessions()

    print("\nResults:")
    print(f"Total commits analyzed: {len(trace)}")
    print(f"Coding sessions: {int(sessions['new_session'].sum()) + (1 if len(trace) else 0)}")
    print(f"Total estimated hours: {hours:.2f}")

    # a second call with the same head is served from the cache
    assert repo.hours_estimate() == hours

    end_time = time.time()
    print(f"\nAnalysis completed in {end_time - start_time:.2f} seconds")
