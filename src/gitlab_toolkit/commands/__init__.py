"""Command modules; importing this package registers every command on ``cli``."""

from . import files, jobs, merge_requests, pipelines  # noqa: F401  registers commands
from .gitlab import cli

__all__ = ["cli"]
