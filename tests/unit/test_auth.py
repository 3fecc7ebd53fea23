"""Tests for token discovery."""

from __future__ import annotations

import subprocess

import pytest

from gitlab_toolkit.auth import resolve_token, token_from_glab
from gitlab_toolkit.exceptions import NoCredentialError


def _runner(stdout: str = "", stderr: str = "", returncode: int = 0):
    calls = []

    def run(args, **kwargs):
        calls.append(args)
        return subprocess.CompletedProcess(args, returncode, stdout=stdout, stderr=stderr)

    run.calls = calls
    return run


def _missing_glab(args, **kwargs):
    raise FileNotFoundError("glab")


class TestResolveToken:
    def test_env_token_wins(self):
        runner = _runner(stderr="Token: glpat-from-glab")
        assert resolve_token({"GITLAB_TOKEN": "glpat-env"}, runner) == "glpat-env"
        assert runner.calls == []

    def test_empty_env_token_falls_back_to_glab(self):
        runner = _runner(stderr="  ✓ Token: glpat-from-glab\n")
        assert resolve_token({"GITLAB_TOKEN": ""}, runner) == "glpat-from-glab"
        assert runner.calls == [["glab", "auth", "status", "-t"]]

    def test_no_source_raises(self):
        with pytest.raises(NoCredentialError):
            resolve_token({}, _runner(stderr="You are not logged into any GitLab hosts"))

    def test_glab_missing_raises(self):
        with pytest.raises(NoCredentialError):
            resolve_token({}, _missing_glab)


class TestTokenFromGlab:
    def test_token_found_variant(self):
        out = "gitlab.com\n  ✓ Logged in to gitlab.com as dev\n  ✓ Token found: glpat-xyz\n"
        assert token_from_glab(_runner(stderr=out)) == "glpat-xyz"

    def test_case_insensitive(self):
        assert token_from_glab(_runner(stderr="token: glpat-lower")) == "glpat-lower"

    def test_stdout_also_scanned(self):
        assert token_from_glab(_runner(stdout="Token: glpat-out")) == "glpat-out"

    def test_timeout_returns_none(self):
        def run(args, **kwargs):
            raise subprocess.TimeoutExpired(args, 10)

        assert token_from_glab(run) is None

    def test_missing_glab_returns_none(self):
        assert token_from_glab(_missing_glab) is None
