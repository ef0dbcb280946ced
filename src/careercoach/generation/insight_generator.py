"""Industry insights: a shared, per-industry cache filled by the LLM."""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime, timedelta

from careercoach.core.database import get_industry_insight, save_industry_insight
from careercoach.core.errors import GenerationError
from careercoach.core.identity import require_user
from careercoach.core.models import IndustryInsight, InsightData
from careercoach.generation.config import (
    FALLBACK_INSIGHT_TTL_DAYS,
    INSIGHT_TTL_DAYS,
    INSIGHTS_PROMPT,
)
from careercoach.llm.client import GenerationClient

logger = logging.getLogger(__name__)


async def generate_ai_insights(client: GenerationClient, industry: str) -> InsightData:
    """Ask the LLM for salary ranges, demand, outlook and trends of *industry*."""
    try:
        return await client.generate_model(INSIGHTS_PROMPT.format(industry=industry), InsightData)
    except GenerationError as exc:
        logger.error("Error generating AI insights for %s: %s", industry, exc)
        raise


def placeholder_insights() -> InsightData:
    """Neutral, empty insight content used when nothing better is available."""
    return InsightData()


def new_insight(industry: str, data: InsightData, ttl_days: int = INSIGHT_TTL_DAYS) -> IndustryInsight:
    now = datetime.now()
    return IndustryInsight(
        industry=industry,
        last_updated=now,
        next_update=now + timedelta(days=ttl_days),
        **data.model_dump(),
    )


def fallback_insight(industry: str | None) -> IndustryInsight:
    """Unpersisted stand-in returned when generation fails."""
    insight = new_insight(
        industry or "unknown", placeholder_insights(), ttl_days=FALLBACK_INSIGHT_TTL_DAYS
    )
    return insight.model_copy(update={"id": "fallback"})


async def get_industry_insights(
    conn: sqlite3.Connection,
    subject: str | None,
    client: GenerationClient,
) -> IndustryInsight:
    """Return the cached insight for the user's industry, generating it on a miss.

    Generation failures never propagate: a neutral fallback is returned
    instead and nothing is cached.
    """
    user = require_user(conn, subject)
    if not user.industry:
        logger.debug("User %s has no industry yet; returning fallback insight", user.id)
        return fallback_insight(None)

    cached = get_industry_insight(conn, user.industry)
    if cached is not None:
        return cached

    try:
        data = await generate_ai_insights(client, user.industry)
    except GenerationError:
        logger.warning("Returning fallback insight for %s", user.industry)
        return fallback_insight(user.industry)

    insight = new_insight(user.industry, data)
    save_industry_insight(conn, insight)
    return insight
