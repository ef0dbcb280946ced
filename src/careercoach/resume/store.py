"""Resume persistence: one markdown document per user."""

from __future__ import annotations

import logging
import re
import sqlite3

from careercoach.core.database import get_resume as _get_resume
from careercoach.core.database import upsert_resume
from careercoach.core.identity import require_user
from careercoach.core.models import Resume

logger = logging.getLogger(__name__)

_EXTRA_BLANK_LINES_RE = re.compile(r"\n{3,}")


def normalize_markdown(content: str) -> str:
    """LF line endings, at most one blank line in a row, no outer whitespace."""
    content = content.replace("\r\n", "\n").replace("\r", "\n")
    return _EXTRA_BLANK_LINES_RE.sub("\n\n", content).strip()


def save_resume(conn: sqlite3.Connection, subject: str | None, content: str) -> Resume:
    """Create or replace the user's resume."""
    user = require_user(conn, subject)
    resume = upsert_resume(conn, user.id, normalize_markdown(content))
    logger.debug("Saved resume %s (%d chars)", resume.id, len(resume.content))
    return resume


def get_resume(conn: sqlite3.Connection, subject: str | None) -> Resume | None:
    user = require_user(conn, subject)
    return _get_resume(conn, user.id)
