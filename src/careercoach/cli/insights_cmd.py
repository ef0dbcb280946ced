"""Industry insights CLI command."""

from __future__ import annotations

import asyncio

import typer
from rich.table import Table

from careercoach.cli import (
    build_client,
    console,
    current_subject,
    db_connection,
    user_errors,
)
from careercoach.core.models import IndustryInsight
from careercoach.generation.insight_generator import get_industry_insights

insights_app = typer.Typer(
    name="insights",
    help="Salary ranges, demand and trends for your industry.",
    no_args_is_help=True,
)


def _print_insight(insight: IndustryInsight) -> None:
    console.print(f"[bold]Industry:[/bold] {insight.industry}")
    console.print(
        f"[bold]Outlook:[/bold] {insight.market_outlook.value}   "
        f"[bold]Growth:[/bold] {insight.growth_rate:.1f}%   "
        f"[bold]Demand:[/bold] {insight.demand_level.value}"
    )

    if insight.salary_ranges:
        table = Table(title="Salary Ranges (thousands)")
        table.add_column("Role")
        table.add_column("Min", justify="right")
        table.add_column("Median", justify="right")
        table.add_column("Max", justify="right")
        table.add_column("Location")
        for r in insight.salary_ranges:
            table.add_row(
                r.role,
                f"{r.min / 1000:.0f}K",
                f"{r.median / 1000:.0f}K",
                f"{r.max / 1000:.0f}K",
                r.location or "",
            )
        console.print(table)

    for title, items in (
        ("Top Skills", insight.top_skills),
        ("Key Trends", insight.key_trends),
        ("Recommended Skills", insight.recommended_skills),
    ):
        if items:
            console.print(f"\n[bold blue]{title}[/bold blue]")
            for item in items:
                console.print(f"  • {item}")

    console.print(
        f"\n[dim]Last updated {insight.last_updated:%Y-%m-%d}, "
        f"next update {insight.next_update:%Y-%m-%d}[/dim]"
    )


@insights_app.command("show")
def insights_show() -> None:
    """Show insights for your industry, generating them on first use."""
    client = build_client()
    with user_errors(), db_connection() as conn:
        with console.status("Loading industry insights..."):
            insight = asyncio.run(get_industry_insights(conn, current_subject(), client))
    if insight.id == "fallback":
        console.print("[yellow]Insights are temporarily unavailable.[/yellow]")
    _print_insight(insight)
