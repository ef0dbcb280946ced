"""CLI shared utilities: DRY helpers used across all commands."""

from __future__ import annotations

import os
from contextlib import contextmanager
from typing import NoReturn

import typer
from rich.console import Console

from careercoach.core.database import get_default_db_path, init_db
from careercoach.core.errors import CareerCoachError
from careercoach.generation.config import RETRY_DELAY_SECONDS, RETRY_MAX_ATTEMPTS
from careercoach.llm.client import GenerationClient
from careercoach.llm.retry import RetryPolicy

console = Console()

SUBJECT_ENV = "CAREERCOACH_USER"


def cli_error(message: str) -> NoReturn:
    """Print a red error message and exit with code 1."""
    console.print(f"[red]{message}[/red]")
    raise typer.Exit(code=1)


@contextmanager
def db_connection():
    """Context manager for the default database connection."""
    conn = init_db(get_default_db_path())
    try:
        yield conn
    finally:
        conn.close()


@contextmanager
def user_errors():
    """Turn any careercoach error into a red message and exit code 1."""
    try:
        yield
    except CareerCoachError as exc:
        cli_error(str(exc))


def current_subject() -> str | None:
    """The authenticated subject handed over by the identity provider."""
    return os.environ.get(SUBJECT_ENV) or None


def build_client() -> GenerationClient:
    """The process-wide generation client, configured from the environment."""
    return GenerationClient(
        retry_policy=RetryPolicy(
            max_attempts=RETRY_MAX_ATTEMPTS, delay=RETRY_DELAY_SECONDS
        )
    )
