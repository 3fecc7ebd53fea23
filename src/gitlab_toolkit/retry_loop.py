"""Retry a CI job N times, waiting for each run to finish.

Useful for flaky test detection: every run is polled until it reaches a
terminal status, then retried to spawn the next run. Progress goes to stdout
and to a per-job log file.
"""

from __future__ import annotations

import asyncio
import logging
import tempfile
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO

import click
import httpx

from .client import GitLabClient
from .exceptions import CommandError, GitLabError

logger = logging.getLogger(__name__)

DEFAULT_COUNT = 10
POLL_INTERVAL = 30.0

_TERMINAL_LINES = {
    "success": "✓ Job {job_id}: SUCCESS",
    "failed": "✗ Job {job_id}: FAILED",
    "canceled": "⊘ Job {job_id}: CANCELED",
}

Sleep = Callable[[float], Awaitable[None]]


def default_log_path(job_id: int) -> Path:
    return Path(tempfile.gettempdir()) / f"gitlab-retry-loop-{job_id}.log"


class ProgressLog:
    """Write progress lines to stdout and to a log file, flushing every line."""

    def __init__(self, path: Path | str, echo: Callable[[str], None] = click.echo) -> None:
        self.path = Path(path)
        self._echo = echo
        self._fh: IO[str] | None = None

    def __enter__(self) -> ProgressLog:
        # truncates any previous run's log
        try:
            self._fh = self.path.open("w", encoding="utf-8")
        except OSError as e:
            msg = f"Cannot open log file: {self.path}"
            raise CommandError(msg) from e
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def write(self, message: str = "") -> None:
        self._echo(message)
        if self._fh is not None:
            self._fh.write(message + "\n")
            self._fh.flush()

    def close(self) -> None:
        if self._fh is not None:
            self._fh.close()
            self._fh = None


@dataclass(frozen=True)
class RunRecord:
    iteration: int
    job_id: int
    status: str

    @property
    def passed(self) -> bool:
        return self.status == "success"

    def __str__(self) -> str:
        return f"{self.iteration}:{self.job_id}:{self.status}"


@dataclass
class RetrySummary:
    records: list[RunRecord] = field(default_factory=list)
    aborted: bool = False

    @property
    def passed(self) -> int:
        return sum(1 for r in self.records if r.passed)

    @property
    def failed(self) -> int:
        return len(self.records) - self.passed


class JobRetryLoop:
    """Drive one job through ``count`` run/poll/retry cycles."""

    def __init__(
        self,
        client: GitLabClient,
        project: str,
        job_id: int,
        count: int = DEFAULT_COUNT,
        *,
        log: ProgressLog,
        sleep: Sleep = asyncio.sleep,
        poll_interval: float = POLL_INTERVAL,
    ) -> None:
        self.client = client
        self.project = project
        self.job_id = job_id
        self.count = count
        self.log = log
        self._sleep = sleep
        self.poll_interval = poll_interval

    async def run(self) -> RetrySummary:
        summary = RetrySummary()
        self.log.write(f"Log file: {self.log.path}")
        self.log.write(f"Project: {self.project}")
        self.log.write(f"Starting job: {self.job_id}")
        self.log.write(f"Iterations: {self.count}")
        self.log.write()

        for i in range(1, self.count + 1):
            self.log.write(f"=== Run {i}/{self.count} - Job {self.job_id} ===")

            status = await self.wait_for_job()
            summary.records.append(RunRecord(i, self.job_id, status))

            if i < self.count and not await self.retry():
                summary.aborted = True
                break

            self.log.write()

        self._write_summary(summary)
        return summary

    async def fetch_status(self) -> str:
        """Current job status; fetch failures read as ``error`` rather than raising."""
        try:
            job = await self.client.get_job(self.project, self.job_id)
        except (GitLabError, httpx.HTTPError) as e:
            logger.debug("Status fetch for job %s failed: %s", self.job_id, e)
            return "error"
        status = job.get("status") if isinstance(job, dict) else None
        return status if isinstance(status, str) and status else "error"

    async def wait_for_job(self) -> str:
        """Poll until the job reaches a terminal status and return it."""
        while True:
            status = await self.fetch_status()
            if status in _TERMINAL_LINES:
                self.log.write(_TERMINAL_LINES[status].format(job_id=self.job_id))
                return status
            self.log.write(f"  Waiting... (status: {status})")
            await self._sleep(self.poll_interval)

    async def retry(self) -> bool:
        """Retry the current job and track the new one. False means abort."""
        try:
            new_job = await self.client.retry_job(self.project, self.job_id)
        except (GitLabError, httpx.HTTPError) as e:
            self.log.write(f"  ERROR retrying: {e}")
            return False

        new_id = new_job.get("id") if isinstance(new_job, dict) else None
        if not new_id:
            self.log.write("  ERROR retrying: no job ID in response")
            return False

        try:
            self.job_id = int(new_id)
        except (TypeError, ValueError):
            self.log.write(f"  ERROR retrying: invalid job ID in response: {new_id}")
            return False

        self.log.write(f"  Retried -> New job: {self.job_id}")
        return True

    def _write_summary(self, summary: RetrySummary) -> None:
        total = len(summary.records)
        self.log.write()
        self.log.write("=== SUMMARY ===")
        for record in summary.records:
            self.log.write(str(record))
        self.log.write()
        self.log.write(f"Passed: {summary.passed} / {total}")
        self.log.write(f"Failed: {summary.failed} / {total}")
