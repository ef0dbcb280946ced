import logging
import os
from importlib.metadata import version as pkg_version
from typing import Optional

import typer

from careercoach.cli import SUBJECT_ENV, console
from careercoach.cli.insights_cmd import insights_app
from careercoach.cli.interview_cmd import interview_app
from careercoach.cli.letter_cmd import letter_app
from careercoach.cli.profile_cmd import profile_app
from careercoach.cli.resume_cmd import resume_app
from careercoach.core.logging_setup import configure_file_logging

app = typer.Typer(
    name="careercoach",
    help="AI career coach: resumes, cover letters, interview practice and industry insights.",
    no_args_is_help=True,
    invoke_without_command=True,
)

app.add_typer(profile_app, name="profile")
app.add_typer(resume_app, name="resume")
app.add_typer(letter_app, name="letter")
app.add_typer(interview_app, name="interview")
app.add_typer(insights_app, name="insights")


def version_callback(value: bool):
    if value:
        typer.echo(f"careercoach {pkg_version('careercoach')}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None, "--version", "-v", callback=version_callback, is_eager=True,
        help="Show version and exit.",
    ),
    debug: bool = typer.Option(
        False, "--debug", help="Enable debug logging.",
    ),
    log_file: bool = typer.Option(
        False, "--log-file", help="Also write INFO+ logs to data/logs/careercoach.log.",
    ),
    user: Optional[str] = typer.Option(
        None, "--user", help=f"Act as this identity (defaults to ${SUBJECT_ENV}).",
    ),
):
    """AI career coach: resumes, cover letters, interview practice and industry insights."""
    level = logging.DEBUG if debug else logging.WARNING
    logging.basicConfig(level=logging.WARNING, format="%(name)s %(levelname)s: %(message)s")
    logging.getLogger("careercoach").setLevel(level)
    if log_file:
        path = configure_file_logging()
        if debug:
            console.print(f"[dim]Logging to {path}[/dim]")
    if user:
        os.environ[SUBJECT_ENV] = user


if __name__ == "__main__":
    app()
