"""CI job commands."""

from __future__ import annotations

import asyncio
from pathlib import Path

import click

from ..models import Job
from ..retry_loop import DEFAULT_COUNT, JobRetryLoop, ProgressLog, default_log_path
from ..validation import validate_numeric_id, validate_project
from .gitlab import _errors, _get_client, _ok, _run, cli


@cli.command("job-status")
@click.argument("project")
@click.argument("job_id")
@click.pass_context
def job_status(ctx: click.Context, project: str, job_id: str) -> None:
    """Get CI job status."""
    with _errors():
        validate_project(project)
        jid = validate_numeric_id(job_id, "Job ID")
        job = Job.from_response(_run(_get_client(ctx).get_job(project, jid)))
        _ok(job.summary())


@cli.command("job-log")
@click.argument("project")
@click.argument("job_id")
@click.pass_context
def job_log(ctx: click.Context, project: str, job_id: str) -> None:
    """Get job log output (plain text with ANSI codes)."""
    with _errors():
        validate_project(project)
        jid = validate_numeric_id(job_id, "Job ID")
        text = _run(_get_client(ctx).get_job_log(project, jid))
        click.echo(text or "", nl=False, color=True)


@cli.command("job-retry")
@click.argument("project")
@click.argument("job_id")
@click.pass_context
def job_retry(ctx: click.Context, project: str, job_id: str) -> None:
    """Retry a finished CI job (failed, success, or canceled).

    Prints the new job created by the retry.
    """
    with _errors():
        validate_project(project)
        jid = validate_numeric_id(job_id, "Job ID")
        job = Job.from_response(_run(_get_client(ctx).retry_job(project, jid)))
        _ok(job.summary())


@cli.command("job-retry-loop")
@click.argument("project")
@click.argument("job_id")
@click.argument("count", required=False)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Progress log path [default: <tmp>/gitlab-retry-loop-<job-id>.log]",
)
@click.pass_context
def job_retry_loop(
    ctx: click.Context, project: str, job_id: str, count: str | None, log_file: Path | None
) -> None:
    """Retry a job COUNT times (default 10), waiting for each to complete.

    Useful for flaky test detection.
    """
    with _errors():
        validate_project(project)
        jid = validate_numeric_id(job_id, "Job ID")
        runs = validate_numeric_id(count, "Count") if count is not None else DEFAULT_COUNT
        client = _get_client(ctx)
        sleep = ctx.obj.get("sleep", asyncio.sleep)

        with ProgressLog(log_file or default_log_path(jid)) as log:
            loop = JobRetryLoop(client, project, jid, runs, log=log, sleep=sleep)
            _run(loop.run())
