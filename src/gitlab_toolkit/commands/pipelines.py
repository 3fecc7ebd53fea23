"""Pipeline commands."""

from __future__ import annotations

import click

from ..exceptions import CommandError
from ..models import Job, MergeRequest, Pipeline
from ..models.pipelines import TERMINAL_STATUSES
from ..validation import validate_numeric_id, validate_project
from ._helpers import check_choice
from .gitlab import _errors, _get_client, _ok, _run, cli

JOB_FILTERS = ("all", "failed", "executed")

# The jobs endpoint is fetched as a single page of this size; a full page
# means the listing may be truncated.
MAX_PIPELINE_JOBS = 100


@cli.command("pipeline-latest")
@click.argument("project")
@click.argument("ref", required=False, default="")
@click.pass_context
def pipeline_latest(ctx: click.Context, project: str, ref: str) -> None:
    """Get the latest pipeline for a project, optionally for one branch or tag.

    Prints {id, status, ref, web_url} or null.
    """
    with _errors():
        validate_project(project)
        params: dict[str, str | int] = {"per_page": 1, "order_by": "id", "sort": "desc"}
        if ref:
            params["ref"] = ref
        pipelines = _run(_get_client(ctx).list_pipelines(project, params))
        if not isinstance(pipelines, list) or not pipelines:
            _ok(None, compact=True)
        else:
            _ok(Pipeline.from_response(pipelines[0]).summary(), compact=True)


@cli.command("pipeline-from-mr")
@click.argument("project")
@click.argument("mr_id")
@click.pass_context
def pipeline_from_mr(ctx: click.Context, project: str, mr_id: str) -> None:
    """Get the head pipeline ID of an MR. Prints a number or null."""
    with _errors():
        validate_project(project)
        iid = validate_numeric_id(mr_id, "MR ID")
        mr = MergeRequest.from_response(_run(_get_client(ctx).get_merge_request(project, iid)))
        _ok(mr.head_pipeline.id if mr.head_pipeline else None)


@cli.command("pipeline-jobs")
@click.argument("project")
@click.argument("pipeline_id")
@click.argument("job_filter", metavar="[FILTER]", required=False, default="all")
@click.pass_context
def pipeline_jobs(ctx: click.Context, project: str, pipeline_id: str, job_filter: str) -> None:
    """List jobs in a pipeline.

    \b
    Filters:
      all        All jobs including skipped/pending (default)
      failed     Only failed jobs
      executed   Jobs that ran (success, failed, canceled)
    """
    with _errors():
        validate_project(project)
        pid = validate_numeric_id(pipeline_id, "Pipeline ID")
        check_choice(job_filter, JOB_FILTERS)

        data = _run(_get_client(ctx).list_pipeline_jobs(project, pid))
        jobs = [Job.from_response(j) for j in data or []]
        if len(jobs) >= MAX_PIPELINE_JOBS:
            msg = f"Pipeline has {MAX_PIPELINE_JOBS}+ jobs. Pagination support needed."
            raise CommandError(msg)

        if job_filter == "failed":
            jobs = [j for j in jobs if j.status == "failed"]
        elif job_filter == "executed":
            jobs = [j for j in jobs if j.status in TERMINAL_STATUSES]

        _ok([{"id": j.id, "name": j.name, "status": j.status} for j in jobs])
