"""Render a structured resume form to a single markdown document."""

from __future__ import annotations

from pathlib import Path

from careercoach.core.models import ContactInfo, Entry, ResumeForm
from careercoach.rendering.sections import (
    CONTACT_GLYPHS,
    CONTACT_SEPARATOR,
    EDUCATION_TITLE,
    EXPERIENCE_TITLE,
    PROJECTS_TITLE,
    SKILLS_TITLE,
    SUMMARY_TITLE,
    entry_header,
    section_header,
)

DEFAULT_DISPLAY_NAME = "Your Name"


def entry_heading(entry: Entry, separator: str = " | ") -> str:
    """'title | organization', or whichever of the two is present."""
    parts = [p.strip() for p in (entry.title, entry.organization) if p and p.strip()]
    return separator.join(parts)


def render_contact_markdown(contact: ContactInfo, name: str | None = None) -> str:
    """Name header plus one glyph-prefixed line of the present contact fields."""
    parts = []
    if contact.email:
        parts.append(f"{CONTACT_GLYPHS['email']} {contact.email}")
    if contact.mobile:
        parts.append(f"{CONTACT_GLYPHS['mobile']} {contact.mobile}")
    if contact.linkedin:
        parts.append(f"{CONTACT_GLYPHS['linkedin']} [LinkedIn]({contact.linkedin})")
    if contact.twitter:
        parts.append(f"{CONTACT_GLYPHS['twitter']} [Twitter]({contact.twitter})")

    header = section_header(name or DEFAULT_DISPLAY_NAME)
    if not parts:
        return header
    return f"{header}\n\n{CONTACT_SEPARATOR.join(parts)}"


def render_entry_markdown(entry: Entry) -> str:
    lines = []
    heading = entry_heading(entry)
    if heading:
        lines.append(entry_header(heading))
    if entry.duration and entry.duration.strip():
        lines.append(entry.duration.strip())
    if entry.description and entry.description.strip():
        lines.append(entry.description.strip())
    return "\n".join(lines)


def entries_to_markdown(entries: list[Entry], title: str) -> str:
    """Section header followed by one ``### `` block per non-empty entry."""
    blocks = [render_entry_markdown(e) for e in entries if not e.is_empty()]
    if not blocks:
        return ""
    return f"{section_header(title)}\n\n" + "\n\n".join(blocks)


def render_resume_markdown(form: ResumeForm, name: str | None = None) -> str:
    """Render the whole form; empty sections are left out entirely."""
    summary = form.summary.strip()
    skills = form.skills.strip()
    sections = [
        render_contact_markdown(form.contact_info, name),
        summary and f"{section_header(SUMMARY_TITLE)}\n\n{summary}",
        skills and f"{section_header(SKILLS_TITLE)}\n\n{skills}",
        entries_to_markdown(form.experience, EXPERIENCE_TITLE),
        entries_to_markdown(form.education, EDUCATION_TITLE),
        entries_to_markdown(form.projects, PROJECTS_TITLE),
    ]
    return "\n\n".join(s for s in sections if s)


def write_resume_markdown(form: ResumeForm, path: Path, name: str | None = None) -> None:
    """Render and write a resume markdown file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_resume_markdown(form, name), encoding="utf-8")
