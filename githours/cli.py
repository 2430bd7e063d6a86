"""Command-line interface for git-hours."""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from githours.estimator import FIRST_COMMIT_MINUTES, SESSION_GAP_MINUTES, estimate_hours
from githours.exceptions import GitHoursError
from githours.logging import add_file_handler, add_stream_handler, remove_all_handlers, set_log_level
from githours.report import format_report
from githours.repository import Repository

app = typer.Typer(
    help="Estimate the hours of work behind the checked-out branch of a git repository.",
    add_completion=False,
)


@app.command()
def main(
    path: Annotated[
        Optional[Path],
        typer.Argument(help="Path to the repository. Defaults to the current directory."),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log progress to stderr.")] = False,
    log_file: Annotated[
        Optional[Path], typer.Option("--log-file", help="Also write debug logs to this file.")
    ] = None,
    committer: Annotated[
        bool, typer.Option("--committer", help="Use committer timestamps instead of author timestamps.")
    ] = False,
    resolve_detached_head: Annotated[
        bool,
        typer.Option("--resolve-detached-head", help="On a detached HEAD, estimate from the commit HEAD points at."),
    ] = False,
    session_gap: Annotated[
        float,
        typer.Option("--session-gap", min=1, help="Minutes between commits that start a new session."),
    ] = SESSION_GAP_MINUTES,
    first_commit: Annotated[
        float,
        typer.Option("--first-commit", min=0, help="Minutes credited to the first commit of each session."),
    ] = FIRST_COMMIT_MINUTES,
) -> None:
    """Print every commit examined, then the estimated hours."""
    if verbose or log_file is not None:
        set_log_level(logging.DEBUG)
    if verbose:
        add_stream_handler(level=logging.DEBUG)
    if log_file is not None:
        add_file_handler(str(log_file), level=logging.DEBUG)

    try:
        repo = Repository(
            working_dir=path,
            resolve_detached_head=resolve_detached_head,
            committer=committer,
        )
        trace = repo.commit_trace()
        hours = estimate_hours(
            trace["timestamp"].tolist(), session_gap_minutes=session_gap, first_commit_minutes=first_commit
        )
    except GitHoursError as e:
        typer.echo(f"error: {e}", err=True)
        raise typer.Exit(code=1) from e
    finally:
        remove_all_handlers()

    typer.echo(format_report(trace, hours))


if __name__ == "__main__":
    app()
