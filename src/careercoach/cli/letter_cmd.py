"""Cover letter CLI commands."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table

from careercoach.cli import (
    build_client,
    cli_error,
    console,
    current_subject,
    db_connection,
    user_errors,
)
from careercoach.core.models import ArtifactStatus
from careercoach.generation.letter_generator import (
    delete_cover_letter,
    generate_cover_letter,
    get_cover_letter,
    list_cover_letters,
)

letter_app = typer.Typer(
    name="letter",
    help="Generate and manage cover letters.",
    no_args_is_help=True,
)


@letter_app.command("generate")
def letter_generate(
    job_title: str = typer.Option(..., "--job-title", help="Position you are applying for."),
    company: str = typer.Option(..., "--company", help="Company name."),
    description: Optional[str] = typer.Option(None, "--description", help="Job description text."),
    description_file: Optional[Path] = typer.Option(
        None, "--description-file", help="Read the job description from a file."
    ),
) -> None:
    """Write a cover letter for one job."""
    if description_file is not None:
        if not description_file.exists():
            cli_error(f"File not found: {description_file}")
        description = description_file.read_text(encoding="utf-8")
    if not description:
        cli_error("Provide --description or --description-file.")

    client = build_client()
    with console.status(f"Writing cover letter for {company}..."):
        with user_errors(), db_connection() as conn:
            letter = asyncio.run(
                generate_cover_letter(
                    conn,
                    current_subject(),
                    client,
                    job_title=job_title,
                    company_name=company,
                    job_description=description,
                )
            )

    if letter.status == ArtifactStatus.FAILED:
        console.print(Panel(letter.content, title="Generation failed", border_style="red"))
        console.print(f"[dim]Saved as {letter.id}[/dim]")
        return
    console.print(Markdown(letter.content))
    console.print(f"\n[green]Saved as[/green] {letter.id}")


@letter_app.command("list")
def letter_list() -> None:
    """List your cover letters, newest first."""
    with user_errors(), db_connection() as conn:
        letters = list_cover_letters(conn, current_subject())

    if not letters:
        console.print("[dim]No cover letters yet.[/dim]")
        return

    table = Table(title="Cover Letters")
    table.add_column("ID", style="dim")
    table.add_column("Job Title")
    table.add_column("Company")
    table.add_column("Status")
    table.add_column("Created")
    for letter in letters:
        status_style = "red" if letter.status == ArtifactStatus.FAILED else "green"
        table.add_row(
            letter.id,
            letter.job_title,
            letter.company_name,
            f"[{status_style}]{letter.status.value}[/{status_style}]",
            letter.created_at.strftime("%Y-%m-%d %H:%M"),
        )
    console.print(table)


@letter_app.command("show")
def letter_show(
    letter_id: str = typer.Argument(..., help="Cover letter ID."),
) -> None:
    """Print one cover letter."""
    with user_errors(), db_connection() as conn:
        letter = get_cover_letter(conn, current_subject(), letter_id)
    if letter is None:
        cli_error(f"Cover letter not found: {letter_id}")

    console.print(
        f"[bold]{letter.job_title}[/bold] at [bold]{letter.company_name}[/bold]"
    )
    console.print(Markdown(letter.content))


@letter_app.command("delete")
def letter_delete(
    letter_id: str = typer.Argument(..., help="Cover letter ID."),
) -> None:
    """Delete one of your cover letters."""
    with user_errors(), db_connection() as conn:
        deleted = delete_cover_letter(conn, current_subject(), letter_id)
    if not deleted:
        cli_error(f"Cover letter not found: {letter_id}")
    console.print(f"[green]Deleted[/green] {letter_id}")
