"""gitlab-toolkit command group and the plumbing shared by every command."""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from collections.abc import Coroutine, Iterator
from contextlib import contextmanager
from typing import Any, NoReturn

import click
import httpx

from ..client import GitLabClient
from ..config import GitLabConfig
from ..exceptions import GitLabError


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Log API requests to stderr")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Single-purpose GitLab commands. Output is JSON unless noted."""
    ctx.ensure_object(dict)
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
            stream=sys.stderr,
        )


def _get_config(ctx: click.Context) -> GitLabConfig:
    """Resolve configuration (and the token) once per invocation."""
    obj = ctx.ensure_object(dict)
    if "config" not in obj:
        obj["config"] = GitLabConfig.from_env()
    return obj["config"]


def _get_client(ctx: click.Context) -> GitLabClient:
    obj = ctx.ensure_object(dict)
    if "client" not in obj:
        obj["client"] = GitLabClient(_get_config(ctx), transport=obj.get("transport"))
    return obj["client"]


def _run(coro: Coroutine[Any, Any, Any]) -> Any:
    return asyncio.run(coro)


def _ok(data: Any, *, compact: bool = False) -> None:
    if compact:
        click.echo(json.dumps(data, separators=(",", ":"), ensure_ascii=False))
    else:
        click.echo(json.dumps(data, indent=2, ensure_ascii=False))


def _fail(message: str) -> NoReturn:
    click.echo(json.dumps({"error": message}, ensure_ascii=False), err=True)
    sys.exit(1)


@contextmanager
def _errors() -> Iterator[None]:
    """Report toolkit and transport errors as ``{"error": ...}`` and exit 1."""
    try:
        yield
    except (GitLabError, httpx.HTTPError) as e:
        _fail(str(e) or e.__class__.__name__)
