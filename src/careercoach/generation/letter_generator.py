"""Cover letter generation: writes a letter for one job and keeps it."""

from __future__ import annotations

import logging
import sqlite3

from careercoach.core.database import (
    delete_cover_letter as _delete_cover_letter,
    get_cover_letter as _get_cover_letter,
    list_cover_letters as _list_cover_letters,
    save_cover_letter,
)
from careercoach.core.errors import GenerationError
from careercoach.core.identity import require_user
from careercoach.core.models import CoverLetter, User
from careercoach.core.prompt_helpers import format_experience, format_skills
from careercoach.generation.config import COVER_LETTER_PROMPT
from careercoach.llm.client import GenerationClient

logger = logging.getLogger(__name__)


def _build_letter_prompt(
    user: User, job_title: str, company_name: str, job_description: str
) -> str:
    """Build the user prompt for letter generation."""
    return COVER_LETTER_PROMPT.format(
        job_title=job_title,
        company_name=company_name,
        industry=user.industry or "Not specified",
        experience=format_experience(user),
        skills=format_skills(user),
        bio=user.bio or "Not specified",
        job_description=job_description,
    )


async def generate_cover_letter(
    conn: sqlite3.Connection,
    subject: str | None,
    client: GenerationClient,
    *,
    job_title: str,
    company_name: str,
    job_description: str,
) -> CoverLetter:
    """Generate and persist a cover letter.

    A quota failure still persists (and returns) a letter, with
    ``status=failed`` and the diagnostic as its content. Every other
    failure raises ``GenerationError``.
    """
    user = require_user(conn, subject)
    prompt = _build_letter_prompt(user, job_title, company_name, job_description)

    try:
        generation = await client.generate(prompt)
    except GenerationError as exc:
        logger.error("Error generating cover letter for %s: %s", company_name, exc)
        raise GenerationError("Failed to generate cover letter") from exc

    letter = CoverLetter(
        user_id=user.id,
        content=generation.text,
        job_description=job_description,
        company_name=company_name,
        job_title=job_title,
        status=generation.status,
    )
    if generation.degraded:
        logger.warning("Persisting degraded cover letter %s (quota exceeded)", letter.id)
    save_cover_letter(conn, letter)
    return letter


def list_cover_letters(conn: sqlite3.Connection, subject: str | None) -> list[CoverLetter]:
    """The user's cover letters, newest first."""
    user = require_user(conn, subject)
    return _list_cover_letters(conn, user.id)


def get_cover_letter(
    conn: sqlite3.Connection, subject: str | None, letter_id: str
) -> CoverLetter | None:
    user = require_user(conn, subject)
    return _get_cover_letter(conn, letter_id, user.id)


def delete_cover_letter(
    conn: sqlite3.Connection, subject: str | None, letter_id: str
) -> bool:
    user = require_user(conn, subject)
    return _delete_cover_letter(conn, letter_id, user.id)
