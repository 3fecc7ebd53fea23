"""Repository file commands."""

from __future__ import annotations

import click

from ..exceptions import InvalidInputError
from ..validation import validate_project
from .gitlab import _errors, _get_client, _run, cli


@cli.command("file-view")
@click.argument("project")
@click.argument("file_path")
@click.argument("ref", required=False, default="")
@click.pass_context
def file_view(ctx: click.Context, project: str, file_path: str, ref: str) -> None:
    """Get file contents from a repository (plain text).

    REF is a branch, tag or commit SHA; defaults to the project's default branch.
    """
    with _errors():
        validate_project(project)
        if not file_path:
            msg = "File path is required"
            raise InvalidInputError(msg)
        text = _run(_get_client(ctx).get_file_raw(project, file_path, ref))
        click.echo(text or "", nl=False, color=True)
