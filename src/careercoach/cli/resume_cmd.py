"""Resume builder CLI commands."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.markdown import Markdown
from rich.panel import Panel

from careercoach.cli import (
    build_client,
    cli_error,
    console,
    current_subject,
    db_connection,
    user_errors,
)
from careercoach.core.identity import require_user
from careercoach.generation.resume_improver import improve_with_ai
from careercoach.rendering.markdown_renderer import render_resume_markdown
from careercoach.rendering.pdf_renderer import write_resume_pdf
from careercoach.rendering.sections import ResumePreview, Section, build_preview, preview_entries
from careercoach.resume.form_store import load_resume_form, sample_resume_form, save_resume_form
from careercoach.resume.store import get_resume, save_resume

resume_app = typer.Typer(
    name="resume",
    help="Build, preview and export your resume.",
    no_args_is_help=True,
)


def _load_form(path: Path):
    if not path.exists():
        cli_error(f"Resume form not found: {path}")
    try:
        return load_resume_form(path)
    except Exception as exc:
        cli_error(f"Error loading resume form: {exc}")


@resume_app.command("init")
def resume_init(
    path: Path = typer.Argument(Path("resume.yaml"), help="Where to write the form."),
) -> None:
    """Write a sample resume form to fill in."""
    if path.exists():
        cli_error(f"{path} already exists.")
    save_resume_form(sample_resume_form(), path)
    console.print(f"[green]Wrote[/green] {path}")


@resume_app.command("build")
def resume_build(
    form_path: Path = typer.Argument(..., help="YAML resume form."),
    save: bool = typer.Option(True, "--save/--no-save", help="Save the markdown to your account."),
    markdown_out: Optional[Path] = typer.Option(None, "--markdown", help="Also write the markdown here."),
) -> None:
    """Assemble the form into markdown and save it."""
    form = _load_form(form_path)
    with user_errors(), db_connection() as conn:
        user = require_user(conn, current_subject())
        content = render_resume_markdown(form, user.name)
        if save:
            save_resume(conn, current_subject(), content)

    if markdown_out:
        markdown_out.parent.mkdir(parents=True, exist_ok=True)
        markdown_out.write_text(content, encoding="utf-8")
    console.print(Markdown(content))
    if save:
        console.print("[green]Resume saved.[/green]")


@resume_app.command("pdf")
def resume_pdf(
    form_path: Path = typer.Argument(..., help="YAML resume form."),
    out: Path = typer.Option(Path("."), "--out", help="Output file or directory."),
) -> None:
    """Export the form as a PDF."""
    form = _load_form(form_path)
    with user_errors(), db_connection() as conn:
        user = require_user(conn, current_subject())
    path = write_resume_pdf(form, out, user.name)
    console.print(f"[green]PDF written to[/green] {path}")


def _print_entries(section: Section) -> None:
    console.print(f"\n[bold blue]{section.title.upper()}[/bold blue]")
    for entry in preview_entries(section):
        console.print(f"[bold]{entry.heading}[/bold]")
        for line in entry.lines:
            console.print(f"  • {line}")


def _print_preview(preview: ResumePreview, name: str | None) -> None:
    header = f"[bold]{name or 'Your Name'}[/bold]"
    if preview.contact:
        header += "\n" + "  |  ".join(preview.contact)
    console.print(Panel(header, border_style="blue"))

    if preview.summary:
        console.print(f"\n[bold blue]{preview.summary.title.upper()}[/bold blue]")
        console.print(preview.summary.content)
    if preview.skills:
        console.print(f"\n[bold blue]{preview.skills_title.upper()}[/bold blue]")
        console.print(", ".join(preview.skills))
    for section in (preview.experience, preview.education, preview.projects):
        if section:
            _print_entries(section)


@resume_app.command("preview")
def resume_preview(
    form_path: Optional[Path] = typer.Argument(
        None, help="Preview this form instead of the saved resume."
    ),
) -> None:
    """Preview the saved resume (or a form) section by section."""
    with user_errors(), db_connection() as conn:
        user = require_user(conn, current_subject())
        if form_path is not None:
            content = render_resume_markdown(_load_form(form_path), user.name)
        else:
            resume = get_resume(conn, current_subject())
            content = resume.content if resume else ""

    preview = build_preview(content)
    if preview.is_empty:
        console.print(
            Panel(
                "Start building your resume with "
                "[bold green]careercoach resume init[/bold green] and "
                "[bold green]careercoach resume build[/bold green].",
                title="No Resume Content",
                border_style="yellow",
            )
        )
        raise typer.Exit(code=0)
    _print_preview(preview, user.name)


@resume_app.command("improve")
def resume_improve(
    current: str = typer.Argument(..., help="The text to improve."),
    type: str = typer.Option("experience", "--type", help="What the text describes."),
) -> None:
    """Rewrite one resume description with AI."""
    client = build_client()
    with user_errors(), db_connection() as conn:
        improved = asyncio.run(
            improve_with_ai(conn, current_subject(), client, current=current, type=type)
        )
    console.print(Panel(improved, title="Improved", border_style="green"))
