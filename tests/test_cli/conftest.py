from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Iterator

import pytest

from careercoach.cli import SUBJECT_ENV, console
from careercoach.core.database import init_db
from careercoach.core.identity import register_user

CLI_SUBJECT = "auth|cli-user"


@pytest.fixture
def cli_db(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[sqlite3.Connection]:
    """Point the CLI at a temp database and sign in as ``CLI_SUBJECT``."""
    path = tmp_path / "cli.db"
    monkeypatch.setenv("CAREERCOACH_DB", str(path))
    monkeypatch.setenv(SUBJECT_ENV, CLI_SUBJECT)
    conn = init_db(path)
    yield conn
    conn.close()


@pytest.fixture
def cli_user(cli_db: sqlite3.Connection):
    return register_user(cli_db, CLI_SUBJECT, email="cli@example.com", name="Casey Lee")


@pytest.fixture(autouse=True)
def wide_console(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep rich from wrapping long temp paths in CLI output."""
    monkeypatch.setattr(console, "width", 200)
