from __future__ import annotations

import sqlite3
import time
from datetime import datetime, timedelta
from pathlib import Path

import pytest

from careercoach.core.database import (
    delete_cover_letter,
    get_cover_letter,
    get_default_db_path,
    get_industry_insight,
    get_resume,
    get_user,
    get_user_by_subject,
    init_db,
    list_assessments,
    list_cover_letters,
    save_assessment,
    save_cover_letter,
    save_industry_insight,
    save_user,
    transaction,
    upsert_resume,
)
from careercoach.core.errors import PersistenceError
from careercoach.core.models import (
    ArtifactStatus,
    Assessment,
    CoverLetter,
    DemandLevel,
    IndustryInsight,
    MarketOutlook,
    QuestionResult,
    SalaryRange,
    User,
)


def _letter(user_id: str, company: str, created_at: datetime, **kwargs) -> CoverLetter:
    return CoverLetter(
        user_id=user_id,
        content=f"Dear {company}",
        company_name=company,
        job_title="Backend Developer",
        job_description="Build APIs",
        created_at=created_at,
        updated_at=created_at,
        **kwargs,
    )


def _insight(industry: str = "tech-software-development") -> IndustryInsight:
    now = datetime(2025, 3, 1, 12, 0, 0)
    return IndustryInsight(
        industry=industry,
        salary_ranges=[SalaryRange(role="Engineer", min=80000, max=150000, median=110000, location="US")],
        growth_rate=7.5,
        demand_level=DemandLevel.HIGH,
        top_skills=["Python", "Cloud"],
        market_outlook=MarketOutlook.POSITIVE,
        key_trends=["AI tooling"],
        recommended_skills=["Rust"],
        last_updated=now,
        next_update=now + timedelta(days=7),
    )


class TestInit:
    def test_creates_tables(self, db: sqlite3.Connection):
        names = {
            row["name"]
            for row in db.execute("SELECT name FROM sqlite_master WHERE type='table'")
        }
        assert {"users", "industry_insights", "resumes", "cover_letters", "assessments"} <= names

    def test_idempotent(self, db_path: Path):
        init_db(db_path).close()
        init_db(db_path).close()

    def test_default_path_env_override(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
        monkeypatch.setenv("CAREERCOACH_DB", str(tmp_path / "x.db"))
        assert get_default_db_path() == tmp_path / "x.db"

    def test_default_path_under_data(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv("CAREERCOACH_DB", raising=False)
        path = get_default_db_path()
        assert path.name == "careercoach.db"
        assert path.parent.name == "data"


class TestUsers:
    def test_round_trip(self, db: sqlite3.Connection):
        user = User(subject="s1", email="a@x.com", industry="finance", experience=3, skills=["Excel"])
        save_user(db, user)
        assert get_user(db, user.id) == user
        assert get_user_by_subject(db, "s1") == user

    def test_unknown(self, db: sqlite3.Connection):
        assert get_user(db, "nope") is None
        assert get_user_by_subject(db, "nope") is None

    def test_one_row_per_subject(self, db: sqlite3.Connection):
        save_user(db, User(subject="s1", email="a@x.com"))
        save_user(db, User(subject="s1", email="b@x.com"))
        assert db.execute("SELECT COUNT(*) FROM users").fetchone()[0] == 1
        assert get_user_by_subject(db, "s1").email == "b@x.com"


class TestIndustryInsights:
    def test_round_trip(self, db: sqlite3.Connection):
        insight = _insight()
        save_industry_insight(db, insight)
        assert get_industry_insight(db, insight.industry) == insight

    def test_missing(self, db: sqlite3.Connection):
        assert get_industry_insight(db, "unknown") is None

    def test_one_row_per_industry(self, db: sqlite3.Connection):
        save_industry_insight(db, _insight())
        replacement = _insight().model_copy(update={"growth_rate": 1.0})
        save_industry_insight(db, replacement)
        assert db.execute("SELECT COUNT(*) FROM industry_insights").fetchone()[0] == 1
        assert get_industry_insight(db, replacement.industry).growth_rate == 1.0


class TestResumes:
    def test_upsert_creates_then_replaces(self, db: sqlite3.Connection, user: User):
        first = upsert_resume(db, user.id, "## A")
        second = upsert_resume(db, user.id, "## B")
        assert second.id == first.id
        assert second.content == "## B"
        assert second.created_at == first.created_at
        assert db.execute("SELECT COUNT(*) FROM resumes").fetchone()[0] == 1

    def test_get_missing(self, db: sqlite3.Connection, user: User):
        assert get_resume(db, user.id) is None


class TestCoverLetters:
    def test_list_newest_first(self, db: sqlite3.Connection, user: User):
        t0 = datetime(2025, 1, 1, 9, 0, 0)
        old = _letter(user.id, "Old Co", t0)
        new = _letter(user.id, "New Co", t0 + timedelta(hours=1))
        save_cover_letter(db, old)
        save_cover_letter(db, new)
        assert [l.company_name for l in list_cover_letters(db, user.id)] == ["New Co", "Old Co"]

    def test_status_round_trip(self, db: sqlite3.Connection, user: User):
        letter = _letter(user.id, "Acme", datetime.now(), status=ArtifactStatus.FAILED)
        save_cover_letter(db, letter)
        assert get_cover_letter(db, letter.id, user.id).status is ArtifactStatus.FAILED

    def test_owner_scoping(self, db: sqlite3.Connection, user: User):
        other = User(subject="s-other", email="o@x.com")
        save_user(db, other)
        letter = _letter(user.id, "Acme", datetime.now())
        save_cover_letter(db, letter)

        assert get_cover_letter(db, letter.id, other.id) is None
        assert list_cover_letters(db, other.id) == []
        assert delete_cover_letter(db, letter.id, other.id) is False
        assert get_cover_letter(db, letter.id, user.id) is not None

    def test_delete(self, db: sqlite3.Connection, user: User):
        letter = _letter(user.id, "Acme", datetime.now())
        save_cover_letter(db, letter)
        assert delete_cover_letter(db, letter.id, user.id) is True
        assert get_cover_letter(db, letter.id, user.id) is None


class TestAssessments:
    def test_list_oldest_first_with_questions(self, db: sqlite3.Connection, user: User):
        t0 = datetime(2025, 1, 1, 9, 0, 0)
        result = QuestionResult(
            question="2+2?", answer="4", user_answer="5", is_correct=False, explanation="math"
        )
        later = Assessment(user_id=user.id, quiz_score=50.0, questions=[result], created_at=t0 + timedelta(days=1))
        earlier = Assessment(user_id=user.id, quiz_score=80.0, questions=[], created_at=t0)
        save_assessment(db, later)
        save_assessment(db, earlier)

        listed = list_assessments(db, user.id)
        assert [a.quiz_score for a in listed] == [80.0, 50.0]
        assert listed[1].questions == [result]


class TestTransaction:
    def test_commits_on_success(self, db: sqlite3.Connection):
        with transaction(db):
            save_user(db, User(subject="tx", email="t@x.com"), commit=False)
        assert get_user_by_subject(db, "tx") is not None

    def test_rolls_back_on_error(self, db: sqlite3.Connection):
        with pytest.raises(RuntimeError):
            with transaction(db):
                save_user(db, User(subject="tx", email="t@x.com"), commit=False)
                raise RuntimeError("boom")
        assert get_user_by_subject(db, "tx") is None

    def test_overrunning_body_is_rolled_back(self, db: sqlite3.Connection):
        with pytest.raises(PersistenceError):
            with transaction(db, timeout=0.01):
                save_user(db, User(subject="tx", email="t@x.com"), commit=False)
                time.sleep(0.05)
        assert get_user_by_subject(db, "tx") is None

    def test_second_writer_waits_then_fails(self, db_path: Path):
        holder = init_db(db_path)
        waiter = init_db(db_path)
        with transaction(holder):
            with pytest.raises(sqlite3.OperationalError):
                with transaction(waiter, timeout=0.1):
                    pass
        holder.close()
        waiter.close()
