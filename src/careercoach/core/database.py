from __future__ import annotations

import json
import os
import sqlite3
import time
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any, Iterator

from careercoach.core.errors import PersistenceError
from careercoach.core.models import (
    ArtifactStatus,
    Assessment,
    CoverLetter,
    DemandLevel,
    IndustryInsight,
    MarketOutlook,
    QuestionResult,
    Resume,
    SalaryRange,
    User,
)

# Upper bound for the profile-update transaction.
TRANSACTION_TIMEOUT = 10.0

# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

_SCHEMA = """
CREATE TABLE IF NOT EXISTS users (
    id          TEXT PRIMARY KEY,
    subject     TEXT NOT NULL UNIQUE,
    email       TEXT NOT NULL,
    name        TEXT,
    industry    TEXT,
    experience  INTEGER,
    bio         TEXT,
    skills      TEXT,
    created_at  TEXT NOT NULL,
    updated_at  TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS industry_insights (
    id                  TEXT PRIMARY KEY,
    industry            TEXT NOT NULL UNIQUE,
    salary_ranges       TEXT NOT NULL,
    growth_rate         REAL NOT NULL,
    demand_level        TEXT NOT NULL,
    top_skills          TEXT NOT NULL,
    market_outlook      TEXT NOT NULL,
    key_trends          TEXT NOT NULL,
    recommended_skills  TEXT NOT NULL,
    last_updated        TEXT NOT NULL,
    next_update         TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS resumes (
    id          TEXT PRIMARY KEY,
    user_id     TEXT NOT NULL UNIQUE,
    content     TEXT NOT NULL,
    ats_score   REAL,
    feedback    TEXT,
    created_at  TEXT NOT NULL,
    updated_at  TEXT NOT NULL,
    FOREIGN KEY (user_id) REFERENCES users(id)
);

CREATE TABLE IF NOT EXISTS cover_letters (
    id              TEXT PRIMARY KEY,
    user_id         TEXT NOT NULL,
    content         TEXT NOT NULL,
    job_description TEXT,
    company_name    TEXT NOT NULL,
    job_title       TEXT NOT NULL,
    status          TEXT NOT NULL DEFAULT 'completed',
    created_at      TEXT NOT NULL,
    updated_at      TEXT NOT NULL,
    FOREIGN KEY (user_id) REFERENCES users(id)
);

CREATE TABLE IF NOT EXISTS assessments (
    id              TEXT PRIMARY KEY,
    user_id         TEXT NOT NULL,
    quiz_score      REAL NOT NULL,
    questions       TEXT NOT NULL,
    category        TEXT NOT NULL,
    improvement_tip TEXT,
    created_at      TEXT NOT NULL,
    updated_at      TEXT NOT NULL,
    FOREIGN KEY (user_id) REFERENCES users(id)
);
"""

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _datetime_to_str(dt: datetime | None) -> str | None:
    return dt.isoformat() if dt is not None else None


def _str_to_datetime(s: str | None) -> datetime | None:
    return datetime.fromisoformat(s) if s else None


def _json_dumps(obj: Any | None) -> str | None:
    return json.dumps(obj) if obj is not None else None


def _json_loads(s: str | None) -> Any | None:
    return json.loads(s) if s else None


# ---------------------------------------------------------------------------
# Init
# ---------------------------------------------------------------------------


def init_db(path: Path) -> sqlite3.Connection:
    """Create / open the SQLite database and ensure all tables exist."""
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(path))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL;")
    conn.execute("PRAGMA foreign_keys=ON;")
    conn.executescript(_SCHEMA)
    conn.commit()
    return conn


def get_default_db_path() -> Path:
    """Return ``$CAREERCOACH_DB`` or ``data/careercoach.db`` under the project root."""
    override = os.environ.get("CAREERCOACH_DB")
    if override:
        return Path(override)

    from careercoach.core.paths import data_dir

    return data_dir() / "careercoach.db"


@contextmanager
def transaction(
    conn: sqlite3.Connection, timeout: float = TRANSACTION_TIMEOUT
) -> Iterator[sqlite3.Connection]:
    """Run the body inside one ``BEGIN IMMEDIATE`` transaction.

    The write lock is waited for at most *timeout* seconds, and the whole
    body must finish within *timeout* seconds or it is rolled back.
    Writes inside the body must pass ``commit=False``.
    """
    if conn.in_transaction:
        conn.commit()
    conn.execute(f"PRAGMA busy_timeout = {int(timeout * 1000)}")
    started = time.monotonic()
    conn.execute("BEGIN IMMEDIATE")
    try:
        yield conn
    except BaseException:
        conn.rollback()
        raise
    elapsed = time.monotonic() - started
    if elapsed > timeout:
        conn.rollback()
        raise PersistenceError(
            f"Transaction took {elapsed:.1f}s (limit {timeout:.0f}s); rolled back."
        )
    conn.commit()


# ---------------------------------------------------------------------------
# User CRUD
# ---------------------------------------------------------------------------


def save_user(conn: sqlite3.Connection, user: User, *, commit: bool = True) -> None:
    conn.execute(
        """
        INSERT OR REPLACE INTO users
            (id, subject, email, name, industry, experience, bio, skills,
             created_at, updated_at)
        VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        """,
        (
            user.id,
            user.subject,
            user.email,
            user.name,
            user.industry,
            user.experience,
            user.bio,
            _json_dumps(user.skills),
            _datetime_to_str(user.created_at),
            _datetime_to_str(user.updated_at),
        ),
    )
    if commit:
        conn.commit()


def _row_to_user(row: sqlite3.Row) -> User:
    return User(
        id=row["id"],
        subject=row["subject"],
        email=row["email"],
        name=row["name"],
        industry=row["industry"],
        experience=row["experience"],
        bio=row["bio"],
        skills=_json_loads(row["skills"]) or [],
        created_at=_str_to_datetime(row["created_at"]),  # type: ignore[arg-type]
        updated_at=_str_to_datetime(row["updated_at"]),  # type: ignore[arg-type]
    )


def get_user(conn: sqlite3.Connection, id: str) -> User | None:
    cur = conn.execute("SELECT * FROM users WHERE id = ?", (id,))
    row = cur.fetchone()
    return _row_to_user(row) if row else None


def get_user_by_subject(conn: sqlite3.Connection, subject: str) -> User | None:
    cur = conn.execute("SELECT * FROM users WHERE subject = ?", (subject,))
    row = cur.fetchone()
    return _row_to_user(row) if row else None


# ---------------------------------------------------------------------------
# Industry insight cache (shared, not owner-scoped)
# ---------------------------------------------------------------------------


def save_industry_insight(
    conn: sqlite3.Connection, insight: IndustryInsight, *, commit: bool = True
) -> None:
    conn.execute(
        """
        INSERT OR REPLACE INTO industry_insights
            (id, industry, salary_ranges, growth_rate, demand_level, top_skills,
             market_outlook, key_trends, recommended_skills, last_updated, next_update)
        VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        """,
        (
            insight.id,
            insight.industry,
            _json_dumps([r.model_dump() for r in insight.salary_ranges]),
            insight.growth_rate,
            insight.demand_level.value,
            _json_dumps(insight.top_skills),
            insight.market_outlook.value,
            _json_dumps(insight.key_trends),
            _json_dumps(insight.recommended_skills),
            _datetime_to_str(insight.last_updated),
            _datetime_to_str(insight.next_update),
        ),
    )
    if commit:
        conn.commit()


def _row_to_insight(row: sqlite3.Row) -> IndustryInsight:
    return IndustryInsight(
        id=row["id"],
        industry=row["industry"],
        salary_ranges=[SalaryRange(**r) for r in _json_loads(row["salary_ranges"]) or []],
        growth_rate=row["growth_rate"],
        demand_level=DemandLevel(row["demand_level"]),
        top_skills=_json_loads(row["top_skills"]) or [],
        market_outlook=MarketOutlook(row["market_outlook"]),
        key_trends=_json_loads(row["key_trends"]) or [],
        recommended_skills=_json_loads(row["recommended_skills"]) or [],
        last_updated=_str_to_datetime(row["last_updated"]),  # type: ignore[arg-type]
        next_update=_str_to_datetime(row["next_update"]),  # type: ignore[arg-type]
    )


def get_industry_insight(conn: sqlite3.Connection, industry: str) -> IndustryInsight | None:
    cur = conn.execute("SELECT * FROM industry_insights WHERE industry = ?", (industry,))
    row = cur.fetchone()
    return _row_to_insight(row) if row else None


# ---------------------------------------------------------------------------
# Resume (one per user)
# ---------------------------------------------------------------------------


def _row_to_resume(row: sqlite3.Row) -> Resume:
    return Resume(
        id=row["id"],
        user_id=row["user_id"],
        content=row["content"],
        ats_score=row["ats_score"],
        feedback=row["feedback"],
        created_at=_str_to_datetime(row["created_at"]),  # type: ignore[arg-type]
        updated_at=_str_to_datetime(row["updated_at"]),  # type: ignore[arg-type]
    )


def upsert_resume(conn: sqlite3.Connection, user_id: str, content: str) -> Resume:
    """Create the user's resume or replace its content."""
    now = _datetime_to_str(datetime.now())
    new = Resume(user_id=user_id, content=content)
    conn.execute(
        """
        INSERT INTO resumes (id, user_id, content, created_at, updated_at)
        VALUES (?, ?, ?, ?, ?)
        ON CONFLICT(user_id) DO UPDATE SET
            content = excluded.content,
            updated_at = excluded.updated_at
        """,
        (new.id, user_id, content, now, now),
    )
    conn.commit()
    resume = get_resume(conn, user_id)
    assert resume is not None
    return resume


def get_resume(conn: sqlite3.Connection, user_id: str) -> Resume | None:
    cur = conn.execute("SELECT * FROM resumes WHERE user_id = ?", (user_id,))
    row = cur.fetchone()
    return _row_to_resume(row) if row else None


# ---------------------------------------------------------------------------
# Cover letters
# ---------------------------------------------------------------------------


def save_cover_letter(conn: sqlite3.Connection, letter: CoverLetter) -> None:
    conn.execute(
        """
        INSERT OR REPLACE INTO cover_letters
            (id, user_id, content, job_description, company_name, job_title,
             status, created_at, updated_at)
        VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
        """,
        (
            letter.id,
            letter.user_id,
            letter.content,
            letter.job_description,
            letter.company_name,
            letter.job_title,
            letter.status.value,
            _datetime_to_str(letter.created_at),
            _datetime_to_str(letter.updated_at),
        ),
    )
    conn.commit()


def _row_to_cover_letter(row: sqlite3.Row) -> CoverLetter:
    return CoverLetter(
        id=row["id"],
        user_id=row["user_id"],
        content=row["content"],
        job_description=row["job_description"],
        company_name=row["company_name"],
        job_title=row["job_title"],
        status=ArtifactStatus(row["status"]),
        created_at=_str_to_datetime(row["created_at"]),  # type: ignore[arg-type]
        updated_at=_str_to_datetime(row["updated_at"]),  # type: ignore[arg-type]
    )


def get_cover_letter(
    conn: sqlite3.Connection, id: str, user_id: str
) -> CoverLetter | None:
    cur = conn.execute(
        "SELECT * FROM cover_letters WHERE id = ? AND user_id = ?", (id, user_id)
    )
    row = cur.fetchone()
    return _row_to_cover_letter(row) if row else None


def list_cover_letters(conn: sqlite3.Connection, user_id: str) -> list[CoverLetter]:
    cur = conn.execute(
        "SELECT * FROM cover_letters WHERE user_id = ? ORDER BY created_at DESC",
        (user_id,),
    )
    return [_row_to_cover_letter(row) for row in cur.fetchall()]


def delete_cover_letter(conn: sqlite3.Connection, id: str, user_id: str) -> bool:
    """Delete one of the user's cover letters. Returns False if nothing matched."""
    cur = conn.execute(
        "DELETE FROM cover_letters WHERE id = ? AND user_id = ?", (id, user_id)
    )
    conn.commit()
    return cur.rowcount > 0


# ---------------------------------------------------------------------------
# Assessments
# ---------------------------------------------------------------------------


def save_assessment(conn: sqlite3.Connection, assessment: Assessment) -> None:
    conn.execute(
        """
        INSERT OR REPLACE INTO assessments
            (id, user_id, quiz_score, questions, category, improvement_tip,
             created_at, updated_at)
        VALUES (?, ?, ?, ?, ?, ?, ?, ?)
        """,
        (
            assessment.id,
            assessment.user_id,
            assessment.quiz_score,
            _json_dumps([q.model_dump() for q in assessment.questions]),
            assessment.category,
            assessment.improvement_tip,
            _datetime_to_str(assessment.created_at),
            _datetime_to_str(assessment.updated_at),
        ),
    )
    conn.commit()


def _row_to_assessment(row: sqlite3.Row) -> Assessment:
    return Assessment(
        id=row["id"],
        user_id=row["user_id"],
        quiz_score=row["quiz_score"],
        questions=[QuestionResult(**q) for q in _json_loads(row["questions"]) or []],
        category=row["category"],
        improvement_tip=row["improvement_tip"],
        created_at=_str_to_datetime(row["created_at"]),  # type: ignore[arg-type]
        updated_at=_str_to_datetime(row["updated_at"]),  # type: ignore[arg-type]
    )


def list_assessments(conn: sqlite3.Connection, user_id: str) -> list[Assessment]:
    cur = conn.execute(
        "SELECT * FROM assessments WHERE user_id = ? ORDER BY created_at ASC",
        (user_id,),
    )
    return [_row_to_assessment(row) for row in cur.fetchall()]
