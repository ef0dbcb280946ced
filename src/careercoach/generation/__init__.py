"""AI-backed features: cover letters, interview quizzes, insights, resume polish."""

from careercoach.generation.insight_generator import get_industry_insights
from careercoach.generation.letter_generator import generate_cover_letter
from careercoach.generation.quiz_generator import generate_quiz, save_quiz_result
from careercoach.generation.resume_improver import improve_with_ai

__all__ = [
    "generate_cover_letter",
    "generate_quiz",
    "get_industry_insights",
    "improve_with_ai",
    "save_quiz_result",
]
