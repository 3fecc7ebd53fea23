"""GitLab token discovery."""

from __future__ import annotations

import logging
import os
import re
import subprocess
from collections.abc import Callable, Mapping

from .exceptions import NoCredentialError

logger = logging.getLogger(__name__)

# glab prints "Token: glpat-..." or "Token found: glpat-..." to stderr
_GLAB_TOKEN_RE = re.compile(r"Token(?:\s+found)?:\s+(\S+)", re.IGNORECASE)

GLAB_STATUS_COMMAND = ("glab", "auth", "status", "-t")

Runner = Callable[..., subprocess.CompletedProcess[str]]


def token_from_glab(runner: Runner | None = None, timeout: float = 10) -> str | None:
    """Scrape a token out of ``glab auth status -t`` diagnostics.

    Returns ``None`` when glab is missing, times out, or prints no token.
    """
    run = runner or subprocess.run
    try:
        proc = run(
            list(GLAB_STATUS_COMMAND),
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except (OSError, subprocess.SubprocessError) as e:
        logger.debug("glab auth status unavailable: %s", e)
        return None

    for output in (proc.stderr, proc.stdout):
        m = _GLAB_TOKEN_RE.search(output or "")
        if m:
            return m.group(1)
    return None


def resolve_token(env: Mapping[str, str] | None = None, runner: Runner | None = None) -> str:
    """Resolve the GitLab token: ``GITLAB_TOKEN`` first, then the glab CLI session."""
    env = os.environ if env is None else env

    token = env.get("GITLAB_TOKEN")
    if token:
        logger.debug("Using token from GITLAB_TOKEN")
        return token

    token = token_from_glab(runner)
    if token:
        logger.debug("Using token from glab auth status")
        return token

    raise NoCredentialError
