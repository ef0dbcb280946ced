"""Profile management CLI commands."""

from __future__ import annotations

import asyncio
from typing import Optional

import typer
from rich.panel import Panel

from careercoach.cli import (
    build_client,
    console,
    current_subject,
    db_connection,
    user_errors,
)
from careercoach.core.identity import register_user, require_user
from careercoach.core.models import ProfileUpdate
from careercoach.profile.onboarding import get_onboarding_status, update_user

profile_app = typer.Typer(
    name="profile",
    help="Manage your professional profile.",
    no_args_is_help=True,
)


@profile_app.command("register")
def profile_register(
    email: str = typer.Option(..., "--email", help="Account email."),
    name: Optional[str] = typer.Option(None, "--name", help="Display name."),
) -> None:
    """Create your account for the current identity (first sign-in)."""
    with user_errors(), db_connection() as conn:
        user = register_user(conn, current_subject(), email=email, name=name)
    console.print(f"[green]Signed in as[/green] {user.name or user.email}")


@profile_app.command("update")
def profile_update(
    industry: str = typer.Option(..., "--industry", help="Industry, e.g. tech-software-development."),
    experience: Optional[int] = typer.Option(None, "--experience", help="Years of experience."),
    bio: Optional[str] = typer.Option(None, "--bio", help="Short professional background."),
    skills: str = typer.Option("", "--skills", help="Comma-separated skills."),
    ai_insights: bool = typer.Option(
        True, "--ai-insights/--no-ai-insights",
        help="Generate insights for a new industry with the LLM.",
    ),
) -> None:
    """Complete onboarding or change your profile."""
    update = ProfileUpdate(
        industry=industry,
        experience=experience,
        bio=bio,
        skills=[s.strip() for s in skills.split(",") if s.strip()],
    )
    client = build_client() if ai_insights else None
    with user_errors(), db_connection() as conn:
        user = asyncio.run(update_user(conn, current_subject(), update, client=client))
    console.print(f"[green]Profile updated.[/green] Industry: {user.industry}")


@profile_app.command("show")
def profile_show() -> None:
    """Display your profile."""
    with user_errors(), db_connection() as conn:
        user = require_user(conn, current_subject())

    lines = [f"[bold]{user.name or 'Your Name'}[/bold]", user.email]
    if user.industry:
        lines.append(f"\n[bold]Industry:[/bold] {user.industry}")
    if user.experience is not None:
        lines.append(f"[bold]Experience:[/bold] {user.experience} years")
    if user.skills:
        lines.append(f"[bold]Skills:[/bold] {', '.join(user.skills)}")
    if user.bio:
        lines.append(f"\n{user.bio}")
    console.print(Panel("\n".join(lines), title="Profile", border_style="blue"))


@profile_app.command("status")
def profile_status() -> None:
    """Show whether onboarding is complete."""
    with user_errors(), db_connection() as conn:
        onboarded = get_onboarding_status(conn, current_subject())
    if onboarded:
        console.print("[green]Onboarded.[/green]")
    else:
        console.print(
            "[yellow]Not onboarded.[/yellow] Run "
            "[bold green]careercoach profile update --industry ...[/bold green] first."
        )
