"""Shared test fixtures: DRY helpers available to all test modules."""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Callable

import pytest
from pydantic_ai.messages import (
    ModelMessage,
    ModelRequest,
    ModelResponse,
    TextPart,
    UserPromptPart,
)
from pydantic_ai.models.function import AgentInfo, FunctionModel

from careercoach.core.database import init_db, save_user
from careercoach.core.identity import register_user
from careercoach.core.models import ContactInfo, Entry, ResumeForm, User
from careercoach.llm.client import GenerationClient
from careercoach.llm.retry import RetryPolicy

SUBJECT = "auth|alice"


def last_prompt(messages: list[ModelMessage]) -> str:
    """The most recent user prompt sent to a FunctionModel."""
    for message in reversed(messages):
        if isinstance(message, ModelRequest):
            for part in message.parts:
                if isinstance(part, UserPromptPart):
                    return str(part.content)
    return ""


def scripted_client(
    respond: Callable[[str], str],
    *,
    sleeps: list[float] | None = None,
) -> GenerationClient:
    """A client whose model answers with ``respond(prompt)``.

    ``respond`` may raise (e.g. ``ModelHTTPError``) to simulate provider
    failures. Retry sleeps are recorded into *sleeps* instead of waiting.
    """

    def fn(messages: list[ModelMessage], info: AgentInfo) -> ModelResponse:
        return ModelResponse(parts=[TextPart(respond(last_prompt(messages)))])

    async def record_sleep(delay: float) -> None:
        if sleeps is not None:
            sleeps.append(delay)

    return GenerationClient(
        FunctionModel(fn),
        retry_policy=RetryPolicy(max_attempts=3, delay=2.0, sleep=record_sleep),
    )


@pytest.fixture
def subject() -> str:
    return SUBJECT


@pytest.fixture
def make_client() -> Callable[..., GenerationClient]:
    """Factory fixture for ``scripted_client``."""
    return scripted_client


@pytest.fixture
def db(tmp_path: Path) -> sqlite3.Connection:
    """Return an initialised test database connection."""
    return init_db(tmp_path / "test.db")


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """Return the path to a test database (initialised)."""
    p = tmp_path / "test.db"
    init_db(p).close()
    return p


@pytest.fixture
def user(db: sqlite3.Connection) -> User:
    """A registered user who has not been onboarded yet."""
    return register_user(db, SUBJECT, email="alice@example.com", name="Alice Martin")


@pytest.fixture
def onboarded_user(db: sqlite3.Connection, user: User) -> User:
    updated = user.model_copy(
        update={
            "industry": "tech-software-development",
            "experience": 6,
            "bio": "Backend engineer who likes boring, reliable systems.",
            "skills": ["Python", "PostgreSQL", "Docker"],
        }
    )
    save_user(db, updated)
    return updated


@pytest.fixture
def sample_form() -> ResumeForm:
    return ResumeForm(
        contact_info=ContactInfo(
            email="alice@example.com",
            linkedin="https://linkedin.com/in/alice",
        ),
        summary="Backend engineer with six years of experience.",
        skills="Python\nPostgreSQL\nDocker",
        experience=[
            Entry(
                title="Senior Engineer",
                organization="Acme Corp",
                duration="2021 - Present",
                description="- Led the billing rewrite\n- Cut p95 latency by 40%",
            ),
            Entry(),
        ],
        education=[
            Entry(
                title="BSc Computer Science",
                organization="McGill University",
                duration="2014 - 2018",
            )
        ],
    )
