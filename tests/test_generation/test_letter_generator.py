"""Tests for cover letter generation and management."""

from __future__ import annotations

import sqlite3

import pytest
from pydantic_ai.exceptions import ModelHTTPError

from careercoach.core.errors import GenerationError, Unauthorized, UserNotFound
from careercoach.core.identity import register_user
from careercoach.core.models import ArtifactStatus, User
from careercoach.generation.letter_generator import (
    _build_letter_prompt,
    delete_cover_letter,
    generate_cover_letter,
    get_cover_letter,
    list_cover_letters,
)

JOB = dict(
    job_title="Backend Developer",
    company_name="Acme Corp",
    job_description="Build REST APIs in Python.",
)


class TestBuildPrompt:
    def test_includes_user_and_job(self, onboarded_user: User):
        prompt = _build_letter_prompt(onboarded_user, **JOB)
        assert "Backend Developer position at Acme Corp" in prompt
        assert "Industry: tech-software-development" in prompt
        assert "Years of Experience: 6 years" in prompt
        assert "Skills: Python, PostgreSQL, Docker" in prompt
        assert "Build REST APIs in Python." in prompt
        assert "max 400 words" in prompt

    def test_missing_profile_fields(self, user: User):
        prompt = _build_letter_prompt(user, **JOB)
        assert "Industry: Not specified" in prompt
        assert "Skills: Not specified" in prompt


class TestGenerateCoverLetter:
    async def test_persists_completed_letter(
        self, db: sqlite3.Connection, onboarded_user: User, subject: str, make_client
    ):
        prompts: list[str] = []

        def respond(prompt: str) -> str:
            prompts.append(prompt)
            return "Dear Hiring Manager,\n\nI am excited..."

        letter = await generate_cover_letter(db, subject, make_client(respond), **JOB)
        assert letter.status is ArtifactStatus.COMPLETED
        assert letter.content.startswith("Dear Hiring Manager")
        assert letter.user_id == onboarded_user.id
        assert "Acme Corp" in prompts[0]
        assert get_cover_letter(db, subject, letter.id) == letter

    async def test_quota_persists_failed_letter(
        self, db: sqlite3.Connection, onboarded_user: User, subject: str, make_client
    ):
        def respond(prompt: str) -> str:
            raise ModelHTTPError(429, "test-model", {"error": "quota"})

        letter = await generate_cover_letter(db, subject, make_client(respond), **JOB)
        assert letter.status is ArtifactStatus.FAILED
        assert "quota exceeded" in letter.content
        stored = list_cover_letters(db, subject)
        assert [l.id for l in stored] == [letter.id]
        assert stored[0].status is ArtifactStatus.FAILED

    async def test_other_failures_raise_and_persist_nothing(
        self, db: sqlite3.Connection, onboarded_user: User, subject: str, make_client
    ):
        def respond(prompt: str) -> str:
            raise ModelHTTPError(503, "test-model")

        with pytest.raises(GenerationError, match="Failed to generate cover letter"):
            await generate_cover_letter(db, subject, make_client(respond), **JOB)
        assert list_cover_letters(db, subject) == []

    async def test_unknown_user(self, db: sqlite3.Connection, make_client):
        with pytest.raises(UserNotFound):
            await generate_cover_letter(db, "auth|ghost", make_client(lambda p: "x"), **JOB)

    async def test_no_subject(self, db: sqlite3.Connection, make_client):
        with pytest.raises(Unauthorized):
            await generate_cover_letter(db, None, make_client(lambda p: "x"), **JOB)


class TestManageLetters:
    async def test_delete_only_own_letters(
        self, db: sqlite3.Connection, user: User, subject: str, make_client
    ):
        letter = await generate_cover_letter(db, subject, make_client(lambda p: "Hi"), **JOB)

        register_user(db, "auth|bob", email="bob@example.com")
        assert get_cover_letter(db, "auth|bob", letter.id) is None
        assert delete_cover_letter(db, "auth|bob", letter.id) is False
        assert delete_cover_letter(db, subject, letter.id) is True
        assert list_cover_letters(db, subject) == []
