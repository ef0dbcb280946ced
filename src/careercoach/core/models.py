from __future__ import annotations

import enum
from datetime import datetime
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# ---------------------------------------------------------------------------
# Resume form (structured input to the assembler and the PDF renderer)
# ---------------------------------------------------------------------------

class ContactInfo(BaseModel):
    email: str | None = None
    mobile: str | None = None
    linkedin: str | None = None
    twitter: str | None = None


class Entry(BaseModel):
    """One repeated block within experience, education or projects."""

    title: str | None = None
    organization: str | None = None
    duration: str | None = None
    description: str | None = None

    def is_empty(self) -> bool:
        return not any(
            (v or "").strip()
            for v in (self.title, self.organization, self.duration, self.description)
        )


class ResumeForm(BaseModel):
    contact_info: ContactInfo = Field(default_factory=ContactInfo)
    summary: str = ""
    skills: str = ""
    experience: list[Entry] = Field(default_factory=list)
    education: list[Entry] = Field(default_factory=list)
    projects: list[Entry] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------

class User(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid4()))
    subject: str
    email: str
    name: str | None = None
    industry: str | None = None
    experience: int | None = None
    bio: str | None = None
    skills: list[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)


class ProfileUpdate(BaseModel):
    industry: str
    experience: int | None = None
    bio: str | None = None
    skills: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Persisted artifacts
# ---------------------------------------------------------------------------

class ArtifactStatus(str, enum.Enum):
    COMPLETED = "completed"
    FAILED = "failed"


class Resume(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid4()))
    user_id: str
    content: str
    ats_score: float | None = None
    feedback: str | None = None
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)


class CoverLetter(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid4()))
    user_id: str
    content: str
    job_description: str | None = None
    company_name: str
    job_title: str
    status: ArtifactStatus = ArtifactStatus.COMPLETED
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)


class QuizQuestion(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    question: str
    options: list[str]
    correct_answer: str
    explanation: str = ""


class QuestionResult(BaseModel):
    question: str
    answer: str
    user_answer: str | None = None
    is_correct: bool
    explanation: str = ""


class Assessment(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid4()))
    user_id: str
    quiz_score: float
    questions: list[QuestionResult]
    category: str = "Technical"
    improvement_tip: str | None = None
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)


# ---------------------------------------------------------------------------
# Industry insights (shared cache keyed by industry)
# ---------------------------------------------------------------------------

class DemandLevel(str, enum.Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class MarketOutlook(str, enum.Enum):
    POSITIVE = "Positive"
    NEUTRAL = "Neutral"
    NEGATIVE = "Negative"


class SalaryRange(BaseModel):
    role: str
    min: float
    max: float
    median: float
    location: str | None = None


class InsightData(BaseModel):
    """The generated part of an insight, as returned by the LLM (camelCase keys)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    salary_ranges: list[SalaryRange] = Field(default_factory=list)
    growth_rate: float = 0.0
    demand_level: DemandLevel = DemandLevel.MEDIUM
    top_skills: list[str] = Field(default_factory=list)
    market_outlook: MarketOutlook = MarketOutlook.NEUTRAL
    key_trends: list[str] = Field(default_factory=list)
    recommended_skills: list[str] = Field(default_factory=list)


class IndustryInsight(InsightData):
    id: str = Field(default_factory=lambda: str(uuid4()))
    industry: str
    last_updated: datetime = Field(default_factory=datetime.now)
    next_update: datetime
