from __future__ import annotations

import logging
from pathlib import Path

import yaml

from careercoach.core.models import ContactInfo, Entry, ResumeForm

logger = logging.getLogger(__name__)


def load_resume_form(path: Path) -> ResumeForm:
    """Read a YAML file and return a validated ResumeForm."""
    logger.debug("Loading resume form from %s", path)
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        raise ValueError(f"Resume form is empty: {path}")
    return ResumeForm.model_validate(data)


def save_resume_form(form: ResumeForm, path: Path) -> None:
    """Serialize a ResumeForm to human-readable YAML and write it to *path*."""
    logger.debug("Saving resume form to %s", path)
    data = form.model_dump(mode="python", exclude_none=True)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(
            data,
            f,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
        )


def sample_resume_form() -> ResumeForm:
    """A filled-in starting point for ``careercoach resume init``."""
    return ResumeForm(
        contact_info=ContactInfo(
            email="you@example.com",
            mobile="+1 234 567 8900",
            linkedin="https://linkedin.com/in/your-profile",
        ),
        summary="Write a compelling professional summary...",
        skills="Python\nSQL\nCloud infrastructure",
        experience=[
            Entry(
                title="Software Engineer",
                organization="Acme Corp",
                duration="2021 - Present",
                description="- Built things\n- Shipped things",
            )
        ],
        education=[
            Entry(title="BSc Computer Science", organization="State University", duration="2017 - 2021")
        ],
        projects=[],
    )
