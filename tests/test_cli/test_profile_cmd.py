"""Tests for the profile CLI subcommands."""

from __future__ import annotations

import sqlite3

import pytest
from typer.testing import CliRunner

from careercoach.core.database import get_industry_insight, get_user_by_subject
from careercoach.main import app

runner = CliRunner()

SUBJECT = "auth|cli-user"


def test_register(cli_db: sqlite3.Connection):
    result = runner.invoke(app, ["profile", "register", "--email", "x@example.com", "--name", "Xavier"])
    assert result.exit_code == 0, result.output
    assert "Signed in as Xavier" in result.output
    assert get_user_by_subject(cli_db, SUBJECT).email == "x@example.com"


def test_update_without_ai(cli_db: sqlite3.Connection, cli_user):
    result = runner.invoke(
        app,
        [
            "profile", "update",
            "--industry", "finance-banking",
            "--experience", "5",
            "--skills", "Excel, SQL ,,Modeling",
            "--no-ai-insights",
        ],
    )
    assert result.exit_code == 0, result.output
    assert "Profile updated" in result.output

    user = get_user_by_subject(cli_db, SUBJECT)
    assert user.industry == "finance-banking"
    assert user.experience == 5
    assert user.skills == ["Excel", "SQL", "Modeling"]
    assert get_industry_insight(cli_db, "finance-banking") is not None


def test_update_with_ai_uses_client(
    cli_db: sqlite3.Connection, cli_user, make_client, monkeypatch: pytest.MonkeyPatch
):
    calls = {"n": 0}

    def respond(prompt: str) -> str:
        calls["n"] += 1
        return '{"growthRate": 3.0}'

    client = make_client(respond)
    monkeypatch.setattr("careercoach.cli.profile_cmd.build_client", lambda: client)
    result = runner.invoke(app, ["profile", "update", "--industry", "retail"])
    assert result.exit_code == 0, result.output
    assert calls["n"] == 1
    assert get_industry_insight(cli_db, "retail").growth_rate == 3.0


def test_show(cli_user):
    result = runner.invoke(app, ["profile", "show"])
    assert result.exit_code == 0
    assert "Casey Lee" in result.output
    assert "cli@example.com" in result.output


def test_status_before_and_after_onboarding(cli_user):
    result = runner.invoke(app, ["profile", "status"])
    assert "Not onboarded" in result.output

    runner.invoke(app, ["profile", "update", "--industry", "retail", "--no-ai-insights"])
    result = runner.invoke(app, ["profile", "status"])
    assert "Onboarded." in result.output
