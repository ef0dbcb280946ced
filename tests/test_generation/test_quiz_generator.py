"""Tests for quiz generation, grading and assessment history."""

from __future__ import annotations

import json
import sqlite3

import pytest
from pydantic_ai.exceptions import ModelHTTPError

from careercoach.core.errors import ProviderMalformedOutput
from careercoach.core.models import QuizQuestion, User
from careercoach.generation.quiz_generator import (
    _build_quiz_prompt,
    generate_quiz,
    grade_quiz,
    list_assessments,
    save_quiz_result,
    score_results,
)


def _questions() -> list[QuizQuestion]:
    return [
        QuizQuestion(question="2+2?", options=["3", "4", "5", "6"], correct_answer="4", explanation="Sum."),
        QuizQuestion(question="Capital of France?", options=["Paris", "Rome"], correct_answer="Paris"),
    ]


def _quiz_json(n: int = 2) -> str:
    questions = [
        {
            "question": f"Question {i}?",
            "options": ["a", "b", "c", "d"],
            "correctAnswer": "a",
            "explanation": "Because.",
        }
        for i in range(n)
    ]
    return "```json\n" + json.dumps({"questions": questions}) + "\n```"


class TestBuildQuizPrompt:
    def test_mentions_industry_and_skills(self, onboarded_user: User):
        prompt = _build_quiz_prompt(onboarded_user)
        assert "Generate 10 technical interview questions" in prompt
        assert "tech-software-development professional with expertise in Python, PostgreSQL, Docker" in prompt
        assert '"correctAnswer"' in prompt

    def test_without_skills(self, user: User):
        prompt = _build_quiz_prompt(user, count=3)
        assert "Generate 3 technical interview questions for a general professional." in prompt


class TestGenerateQuiz:
    async def test_parses_fenced_json(
        self, db: sqlite3.Connection, onboarded_user: User, subject: str, make_client
    ):
        questions = await generate_quiz(db, subject, make_client(lambda p: _quiz_json(3)), count=3)
        assert len(questions) == 3
        assert questions[0].correct_answer == "a"

    async def test_malformed_answer(
        self, db: sqlite3.Connection, onboarded_user: User, subject: str, make_client
    ):
        with pytest.raises(ProviderMalformedOutput):
            await generate_quiz(db, subject, make_client(lambda p: "Here are your questions!"))


class TestGrading:
    def test_grade_and_score(self):
        results = grade_quiz(_questions(), ["4", "Rome"])
        assert [r.is_correct for r in results] == [True, False]
        assert results[1].answer == "Paris"
        assert results[1].user_answer == "Rome"
        assert score_results(results) == 50.0

    def test_missing_answers_are_wrong(self):
        results = grade_quiz(_questions(), ["4"])
        assert results[1].user_answer is None
        assert not results[1].is_correct

    def test_empty_quiz_scores_zero(self):
        assert score_results([]) == 0.0


class TestSaveQuizResult:
    async def test_all_correct_skips_tip(
        self, db: sqlite3.Connection, onboarded_user: User, subject: str, make_client
    ):
        calls: list[str] = []

        def respond(prompt: str) -> str:
            calls.append(prompt)
            return "tip"

        assessment = await save_quiz_result(db, subject, make_client(respond), _questions(), ["4", "Paris"])
        assert assessment.quiz_score == 100.0
        assert assessment.improvement_tip is None
        assert calls == []

    async def test_wrong_answers_get_a_tip(
        self, db: sqlite3.Connection, onboarded_user: User, subject: str, make_client
    ):
        prompts: list[str] = []

        def respond(prompt: str) -> str:
            prompts.append(prompt)
            return "Review European capitals."

        assessment = await save_quiz_result(db, subject, make_client(respond), _questions(), ["4", "Rome"])
        assert assessment.improvement_tip == "Review European capitals."
        assert 'Question: "Capital of France?"' in prompts[0]
        assert 'User Answer: "Rome"' in prompts[0]
        assert "2+2?" not in prompts[0]

        [stored] = list_assessments(db, subject)
        assert stored.id == assessment.id
        assert stored.quiz_score == 50.0
        assert stored.category == "Technical"
        assert len(stored.questions) == 2

    async def test_tip_failure_still_saves(
        self, db: sqlite3.Connection, onboarded_user: User, subject: str, make_client
    ):
        def respond(prompt: str) -> str:
            raise ModelHTTPError(429, "test-model")

        assessment = await save_quiz_result(db, subject, make_client(respond), _questions(), ["3", "Rome"])
        assert assessment.improvement_tip is None
        assert assessment.quiz_score == 0.0
        assert len(list_assessments(db, subject)) == 1

    async def test_explicit_score_is_kept(
        self, db: sqlite3.Connection, onboarded_user: User, subject: str, make_client
    ):
        assessment = await save_quiz_result(
            db, subject, make_client(lambda p: "tip"), _questions(), ["4", "Paris"], score=90.0
        )
        assert assessment.quiz_score == 90.0
