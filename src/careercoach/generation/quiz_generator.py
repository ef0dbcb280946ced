"""Interview quiz: question generation, grading and assessment history."""

from __future__ import annotations

import logging
import sqlite3

from pydantic import BaseModel

from careercoach.core.database import list_assessments as _list_assessments
from careercoach.core.database import save_assessment
from careercoach.core.errors import PersistenceError
from careercoach.core.identity import require_user
from careercoach.core.models import Assessment, QuestionResult, QuizQuestion, User
from careercoach.core.prompt_helpers import format_industry
from careercoach.generation.config import IMPROVEMENT_TIP_PROMPT, QUIZ_PROMPT, QUIZ_QUESTION_COUNT
from careercoach.llm.client import GenerationClient

logger = logging.getLogger(__name__)


class _Quiz(BaseModel):
    """LLM output for a quiz request."""

    questions: list[QuizQuestion]


def _build_quiz_prompt(user: User, count: int = QUIZ_QUESTION_COUNT) -> str:
    expertise = f" with expertise in {', '.join(user.skills)}" if user.skills else ""
    return QUIZ_PROMPT.format(
        count=count, industry=format_industry(user), expertise=expertise
    )


def _build_tip_prompt(user: User, wrong: list[QuestionResult]) -> str:
    wrong_answers = "\n\n".join(
        f'Question: "{q.question}"\n'
        f'Correct Answer: "{q.answer}"\n'
        f'User Answer: "{q.user_answer}"'
        for q in wrong
    )
    return IMPROVEMENT_TIP_PROMPT.format(
        industry=format_industry(user), wrong_answers=wrong_answers
    )


async def generate_quiz(
    conn: sqlite3.Connection,
    subject: str | None,
    client: GenerationClient,
    *,
    count: int = QUIZ_QUESTION_COUNT,
) -> list[QuizQuestion]:
    """Ask the LLM for multiple-choice questions tailored to the user.

    Raises ``ProviderMalformedOutput`` when the answer is not the expected JSON.
    """
    user = require_user(conn, subject)
    quiz = await client.generate_model(_build_quiz_prompt(user, count), _Quiz)
    logger.debug("Generated %d quiz questions for %s", len(quiz.questions), user.id)
    return quiz.questions


def grade_quiz(
    questions: list[QuizQuestion], answers: list[str | None]
) -> list[QuestionResult]:
    """Pair each question with the user's answer; missing answers are wrong."""
    results = []
    for i, q in enumerate(questions):
        user_answer = answers[i] if i < len(answers) else None
        results.append(
            QuestionResult(
                question=q.question,
                answer=q.correct_answer,
                user_answer=user_answer,
                is_correct=user_answer == q.correct_answer,
                explanation=q.explanation,
            )
        )
    return results


def score_results(results: list[QuestionResult]) -> float:
    """Percentage of correct answers (0 for an empty quiz)."""
    if not results:
        return 0.0
    return 100.0 * sum(r.is_correct for r in results) / len(results)


async def save_quiz_result(
    conn: sqlite3.Connection,
    subject: str | None,
    client: GenerationClient,
    questions: list[QuizQuestion],
    answers: list[str | None],
    score: float | None = None,
) -> Assessment:
    """Grade and persist a completed quiz.

    When any answer is wrong, a short improvement tip is requested; the tip
    is best-effort and simply absent if generation fails.
    """
    user = require_user(conn, subject)
    results = grade_quiz(questions, answers)

    improvement_tip = None
    wrong = [r for r in results if not r.is_correct]
    if wrong:
        improvement_tip = await client.generate_optional(_build_tip_prompt(user, wrong))

    assessment = Assessment(
        user_id=user.id,
        quiz_score=score if score is not None else score_results(results),
        questions=results,
        category="Technical",
        improvement_tip=improvement_tip,
    )
    try:
        save_assessment(conn, assessment)
    except sqlite3.Error as exc:
        logger.exception("Error saving quiz result for %s", user.id)
        raise PersistenceError("Failed to save quiz result") from exc
    return assessment


def list_assessments(conn: sqlite3.Connection, subject: str | None) -> list[Assessment]:
    """The user's assessments, oldest first."""
    user = require_user(conn, subject)
    return _list_assessments(conn, user.id)
