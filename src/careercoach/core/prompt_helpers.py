"""User-to-prompt helpers: shared formatting used by LLM prompt builders."""

from __future__ import annotations

from careercoach.core.models import User


def format_skills(user: User, limit: int | None = None) -> str:
    """Format skills as a comma-separated string."""
    if not user.skills:
        return "Not specified"
    skills = user.skills if limit is None else user.skills[:limit]
    return ", ".join(skills)


def format_industry(user: User) -> str:
    return user.industry or "general"


def format_experience(user: User) -> str:
    if user.experience is None:
        return "Not specified"
    return f"{user.experience} years"
