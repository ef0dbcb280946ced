"""Interview preparation CLI commands: take a quiz, review past results."""

from __future__ import annotations

import asyncio

import typer
from rich.panel import Panel
from rich.table import Table

from careercoach.cli import (
    build_client,
    console,
    current_subject,
    db_connection,
    user_errors,
)
from careercoach.core.models import QuizQuestion
from careercoach.generation.config import QUIZ_QUESTION_COUNT
from careercoach.generation.quiz_generator import generate_quiz, list_assessments, save_quiz_result

interview_app = typer.Typer(
    name="interview",
    help="Practice interview questions and track your progress.",
    no_args_is_help=True,
)


def _ask(question: QuizQuestion, number: int, total: int) -> str | None:
    console.print(f"\n[bold cyan]Question {number} of {total}[/bold cyan]")
    console.print(question.question)
    for i, option in enumerate(question.options, start=1):
        console.print(f"  {i}. {option}")
    raw = console.input("> ").strip()
    if raw.isdigit() and 1 <= int(raw) <= len(question.options):
        return question.options[int(raw) - 1]
    return None


@interview_app.command("quiz")
def interview_quiz(
    count: int = typer.Option(QUIZ_QUESTION_COUNT, "--count", help="Number of questions."),
) -> None:
    """Take a multiple-choice quiz tailored to your industry and skills."""
    client = build_client()
    with user_errors(), db_connection() as conn:
        with console.status("Generating questions..."):
            questions = asyncio.run(generate_quiz(conn, current_subject(), client, count=count))

        answers = [_ask(q, i, len(questions)) for i, q in enumerate(questions, start=1)]

        with console.status("Saving results..."):
            assessment = asyncio.run(
                save_quiz_result(conn, current_subject(), client, questions, answers)
            )

    console.print(
        f"\n[bold]Score:[/bold] {assessment.quiz_score:.1f}%"
    )
    for result in assessment.questions:
        mark = "[green]correct[/green]" if result.is_correct else "[red]wrong[/red]"
        console.print(f"\n{mark}  {result.question}")
        if not result.is_correct:
            console.print(f"  Answer: {result.answer}")
        if result.explanation:
            console.print(f"  [dim]{result.explanation}[/dim]")
    if assessment.improvement_tip:
        console.print(Panel(assessment.improvement_tip, title="Tip", border_style="yellow"))


@interview_app.command("history")
def interview_history() -> None:
    """List your past quiz results."""
    with user_errors(), db_connection() as conn:
        assessments = list_assessments(conn, current_subject())

    if not assessments:
        console.print("[dim]No quizzes taken yet.[/dim]")
        return

    table = Table(title="Quiz History")
    table.add_column("Date")
    table.add_column("Category")
    table.add_column("Score", justify="right")
    table.add_column("Tip")
    for a in assessments:
        table.add_row(
            a.created_at.strftime("%Y-%m-%d %H:%M"),
            a.category,
            f"{a.quiz_score:.1f}%",
            a.improvement_tip or "",
        )
    console.print(table)

    average = sum(a.quiz_score for a in assessments) / len(assessments)
    console.print(f"[bold]Average score:[/bold] {average:.1f}%")
