"""Rewrite one resume field (summary, experience description, ...) with the LLM."""

from __future__ import annotations

import logging
import sqlite3

from careercoach.core.errors import GenerationError
from careercoach.core.identity import require_user
from careercoach.core.models import User
from careercoach.core.prompt_helpers import format_industry
from careercoach.generation.config import IMPROVE_PROMPT
from careercoach.llm.client import GenerationClient

logger = logging.getLogger(__name__)


def _build_improve_prompt(user: User, current: str, type: str) -> str:
    return IMPROVE_PROMPT.format(type=type, industry=format_industry(user), current=current)


async def improve_with_ai(
    conn: sqlite3.Connection,
    subject: str | None,
    client: GenerationClient,
    *,
    current: str,
    type: str,
) -> str:
    """Return an improved single-paragraph version of *current*."""
    user = require_user(conn, subject)
    try:
        return await client.generate_text(_build_improve_prompt(user, current, type))
    except GenerationError as exc:
        logger.error("Error improving resume content: %s", exc)
        raise GenerationError("Failed to improve resume content") from exc
