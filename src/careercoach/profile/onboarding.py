"""Profile onboarding: industry, experience, bio and skills.

Saving a profile also guarantees an insight row exists for the chosen
industry. Reuse-or-create and the user update run in one bounded
transaction so concurrent onboardings cannot cache the same industry twice.
"""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime

from careercoach.core.database import (
    get_industry_insight,
    get_user_by_subject,
    save_industry_insight,
    save_user,
    transaction,
)
from careercoach.core.errors import GenerationError, PersistenceError, Unauthorized
from careercoach.core.identity import require_user
from careercoach.core.models import InsightData, ProfileUpdate, User
from careercoach.generation.insight_generator import (
    generate_ai_insights,
    new_insight,
    placeholder_insights,
)
from careercoach.llm.client import GenerationClient

logger = logging.getLogger(__name__)


async def _prepare_insight(industry: str, client: GenerationClient | None) -> InsightData:
    """Produce insight content outside the transaction (no provider call under lock)."""
    if client is None:
        return placeholder_insights()
    try:
        return await generate_ai_insights(client, industry)
    except GenerationError:
        logger.warning("Seeding %s with placeholder insights", industry)
        return placeholder_insights()


async def update_user(
    conn: sqlite3.Connection,
    subject: str | None,
    update: ProfileUpdate,
    *,
    client: GenerationClient | None = None,
) -> User:
    """Save the user's profile and make sure their industry is cached."""
    user = require_user(conn, subject)

    prepared = None
    if get_industry_insight(conn, update.industry) is None:
        prepared = await _prepare_insight(update.industry, client)

    updated = user.model_copy(
        update={
            "industry": update.industry,
            "experience": update.experience,
            "bio": update.bio,
            "skills": update.skills,
            "updated_at": datetime.now(),
        }
    )
    try:
        with transaction(conn):
            if get_industry_insight(conn, update.industry) is None:
                insight = new_insight(update.industry, prepared or placeholder_insights())
                save_industry_insight(conn, insight, commit=False)
                logger.debug("Created insight %s for %s", insight.id, update.industry)
            save_user(conn, updated, commit=False)
    except sqlite3.Error as exc:
        logger.error("Error updating user and industry: %s", exc)
        raise PersistenceError("Failed to update profile") from exc
    return updated


def get_onboarding_status(conn: sqlite3.Connection, subject: str | None) -> bool:
    """True once the user has picked an industry."""
    if not subject:
        raise Unauthorized()
    user = get_user_by_subject(conn, subject)
    return bool(user and user.industry)
