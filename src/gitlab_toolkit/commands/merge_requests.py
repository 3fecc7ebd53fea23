"""Merge request and discussion commands."""

from __future__ import annotations

from typing import Any

import click

from ..client import GitLabClient
from ..exceptions import CommandError, InvalidInputError
from ..models import Discussion, MergeRequest, Note
from ..validation import validate_numeric_id, validate_project
from ._helpers import check_choice, push_branch, read_text_file
from .gitlab import _errors, _get_client, _ok, _run, cli

DISCUSSION_FILTERS = ("open", "resolved", "all")


def _text_option(value: str | None, file_path: str | None) -> str | None:
    """Resolve a ``--x`` / ``--x-file`` pair; the file wins when both are given."""
    if file_path is not None:
        return read_text_file(file_path)
    return value


# ════════════════════════════════════════════════════════════════════
# Merge requests
# ════════════════════════════════════════════════════════════════════


@cli.command("mr-view")
@click.argument("project")
@click.argument("mr_id")
@click.pass_context
def mr_view(ctx: click.Context, project: str, mr_id: str) -> None:
    """Get full MR details as JSON."""
    with _errors():
        validate_project(project)
        iid = validate_numeric_id(mr_id, "MR ID")
        mr = MergeRequest.from_response(_run(_get_client(ctx).get_merge_request(project, iid)))
        _ok(mr.view())


@cli.command("mr-branch")
@click.argument("project")
@click.argument("mr_id")
@click.pass_context
def mr_branch(ctx: click.Context, project: str, mr_id: str) -> None:
    """Get the source branch name of an MR."""
    with _errors():
        validate_project(project)
        iid = validate_numeric_id(mr_id, "MR ID")
        mr = MergeRequest.from_response(_run(_get_client(ctx).get_merge_request(project, iid)))
        _ok(mr.source_branch)


@cli.command("mr-create")
@click.argument("project")
@click.argument("title")
@click.option("--source", "source_branch", help="Source branch (required)")
@click.option("--target", "target_branch", default="main", show_default=True)
@click.option("--description", help="MR description (markdown supported)")
@click.option("--description-file", help="Read description from file")
@click.option("--draft", is_flag=True, help="Create as draft")
@click.option("--labels", help="Comma-separated labels")
@click.option("--push", is_flag=True, help="Push the source branch before creating")
@click.pass_context
def mr_create(
    ctx: click.Context,
    project: str,
    title: str,
    source_branch: str | None,
    target_branch: str,
    description: str | None,
    description_file: str | None,
    draft: bool,
    labels: str | None,
    push: bool,
) -> None:
    """Create a new merge request."""
    with _errors():
        validate_project(project)
        if title.startswith("--"):
            msg = 'Title cannot start with "--". Did you forget the title argument?'
            raise InvalidInputError(msg)
        if not source_branch:
            msg = "--source <branch> is required"
            raise InvalidInputError(msg)
        description = _text_option(description, description_file)

        if push:
            push_branch(source_branch)

        data: dict[str, Any] = {
            "title": title,
            "source_branch": source_branch,
            "target_branch": target_branch,
        }
        if description:
            data["description"] = description
        if draft:
            data["draft"] = True
        if labels:
            data["labels"] = labels

        mr = _run(_get_client(ctx).create_merge_request(project, data))
        if not isinstance(mr, dict) or not mr.get("web_url"):
            msg = "Could not parse MR URL from response"
            raise CommandError(msg)
        _ok({"url": mr["web_url"], "id": mr.get("iid"), "project": project})


@cli.command("mr-update")
@click.argument("project")
@click.argument("mr_id")
@click.option("--title", help="New title")
@click.option("--description", help="New description")
@click.option("--description-file", help="Read description from file")
@click.option("--draft", is_flag=True, help="Mark as draft")
@click.option("--ready", is_flag=True, help="Mark as ready (remove draft)")
@click.option("--labels", help="Set labels")
@click.option("--target", "target_branch", help="Change target branch")
@click.pass_context
def mr_update(
    ctx: click.Context,
    project: str,
    mr_id: str,
    title: str | None,
    description: str | None,
    description_file: str | None,
    draft: bool,
    ready: bool,
    labels: str | None,
    target_branch: str | None,
) -> None:
    """Update an existing merge request."""
    with _errors():
        validate_project(project)
        iid = validate_numeric_id(mr_id, "MR ID")
        if draft and ready:
            msg = "Cannot use both --draft and --ready"
            raise InvalidInputError(msg)
        description = _text_option(description, description_file)

        data: dict[str, Any] = {}
        updated: list[str] = []
        if title is not None:
            data["title"] = title
            updated.append("title")
        if description is not None:
            data["description"] = description
            updated.append("description")
        if draft or ready:
            data["draft"] = draft
            updated.append("draft" if draft else "ready")
        if labels is not None:
            data["labels"] = labels
            updated.append("labels")
        if target_branch is not None:
            data["target_branch"] = target_branch
            updated.append("target_branch")
        if not updated:
            msg = "No update options provided"
            raise InvalidInputError(msg)

        _run(_get_client(ctx).update_merge_request(project, iid, data))
        _ok({"id": iid, "project": project, "updated": updated})


@cli.command("mr-close")
@click.argument("project")
@click.argument("mr_id")
@click.pass_context
def mr_close(ctx: click.Context, project: str, mr_id: str) -> None:
    """Close a merge request."""
    with _errors():
        validate_project(project)
        iid = validate_numeric_id(mr_id, "MR ID")
        _run(_get_client(ctx).update_merge_request(project, iid, {"state_event": "close"}))
        _ok({"id": iid, "project": project, "status": "closed"})


# ════════════════════════════════════════════════════════════════════
# Discussions
# ════════════════════════════════════════════════════════════════════


@cli.command("mr-discussions")
@click.argument("project")
@click.argument("mr_id")
@click.argument("state", metavar="[FILTER]", required=False, default="open")
@click.pass_context
def mr_discussions(ctx: click.Context, project: str, mr_id: str, state: str) -> None:
    """Get MR discussions (comments and threads). Excludes system notes.

    \b
    Filters:
      open       Unresolved discussions only (default)
      resolved   Resolved discussions only
      all        All discussions
    """
    with _errors():
        validate_project(project)
        iid = validate_numeric_id(mr_id, "MR ID")
        check_choice(state, DISCUSSION_FILTERS)

        raw = _run(_get_client(ctx).list_mr_discussions(project, iid))
        result = []
        for item in raw:
            note = Discussion.from_response(item).first_note
            if note is None or not note.resolvable:
                continue
            if state == "open" and note.resolved is not False:
                continue
            if state == "resolved" and note.resolved is not True:
                continue
            result.append(item)
        _ok(result)


async def _inline_position(
    client: GitLabClient, project: str, iid: int, file: str, line: int | None, old_line: int | None
) -> dict[str, Any]:
    mr = MergeRequest.from_response(await client.get_merge_request(project, iid))
    refs = mr.diff_refs
    if refs is None or not refs.complete:
        msg = "Could not get diff_refs from MR"
        raise CommandError(msg)

    position: dict[str, Any] = {
        "base_sha": refs.base_sha,
        "head_sha": refs.head_sha,
        "start_sha": refs.start_sha,
        "position_type": "text",
        "new_path": file,
        "old_path": file,
    }
    if line is not None:
        position["new_line"] = line
    else:
        position["old_line"] = old_line
    return position


@cli.command("mr-discussion-create")
@click.argument("project")
@click.argument("mr_id")
@click.option("--body", help="Comment content")
@click.option("--body-file", help="Read content from file")
@click.option("--file", "file_path", help="File path for an inline comment")
@click.option("--line", type=int, help="Line number in new version (added/modified lines)")
@click.option("--old-line", type=int, help="Line number in old version (removed lines)")
@click.pass_context
def mr_discussion_create(
    ctx: click.Context,
    project: str,
    mr_id: str,
    body: str | None,
    body_file: str | None,
    file_path: str | None,
    line: int | None,
    old_line: int | None,
) -> None:
    """Start a new discussion thread on an MR, general or inline.

    \b
    Examples:
      gitlab-toolkit mr-discussion-create org/repo 123 --body "Looks good!"
      gitlab-toolkit mr-discussion-create org/repo 123 --body "Fix this" --file src/foo.js --line 42
    """
    with _errors():
        validate_project(project)
        iid = validate_numeric_id(mr_id, "MR ID")
        body = _text_option(body, body_file)
        if not body:
            msg = "Comment body is required. Use --body or --body-file"
            raise InvalidInputError(msg)
        if file_path and line is None and old_line is None:
            msg = "--file requires --line or --old-line"
            raise InvalidInputError(msg)
        if not file_path and (line is not None or old_line is not None):
            msg = "--line and --old-line require --file"
            raise InvalidInputError(msg)
        if line is not None and old_line is not None:
            msg = "Cannot use both --line and --old-line"
            raise InvalidInputError(msg)

        client = _get_client(ctx)

        async def create() -> dict:
            data: dict[str, Any] = {"body": body}
            if file_path:
                data["position"] = await _inline_position(
                    client, project, iid, file_path, line, old_line
                )
            return await client.create_mr_discussion(project, iid, data)

        discussion = Discussion.from_response(_run(create()))
        _ok(discussion.created())


@cli.command("mr-discussion-reply")
@click.argument("project")
@click.argument("mr_id")
@click.argument("discussion_id")
@click.option("--body", help="Reply content (markdown supported)")
@click.option("--body-file", help="Read reply content from file")
@click.pass_context
def mr_discussion_reply(
    ctx: click.Context,
    project: str,
    mr_id: str,
    discussion_id: str,
    body: str | None,
    body_file: str | None,
) -> None:
    """Reply to an existing discussion thread."""
    with _errors():
        validate_project(project)
        iid = validate_numeric_id(mr_id, "MR ID")
        if not discussion_id:
            msg = "Discussion ID is required"
            raise InvalidInputError(msg)
        body = _text_option(body, body_file)
        if not body:
            msg = "Reply body is required. Use --body or --body-file"
            raise InvalidInputError(msg)

        note = Note.from_response(
            _run(_get_client(ctx).reply_to_discussion(project, iid, discussion_id, body))
        )
        _ok(
            {
                "note_id": note.id,
                "discussion_id": note.noteable_iid,
                "author": note.author.username if note.author else None,
                "created_at": note.created_at,
            }
        )
