"""Render a resume form to a paginated PDF using fpdf2.

Pagination is explicit: every block is measured before it is written and a
page break is inserted when it would cross the bottom margin. Blocks taller
than a whole page fall back to line-by-line breaking.
"""

from __future__ import annotations

import re
from datetime import date
from pathlib import Path

from fpdf import FPDF
from fpdf.enums import MethodReturnValue

from careercoach.core.models import ContactInfo, Entry, ResumeForm
from careercoach.rendering.markdown_renderer import DEFAULT_DISPLAY_NAME, entry_heading
from careercoach.rendering.sections import (
    EDUCATION_TITLE,
    EXPERIENCE_TITLE,
    PROJECTS_TITLE,
    SKILLS_TITLE,
    SUMMARY_TITLE,
    strip_bullet,
)

MARGIN = 25  # mm
LINE_FACTOR = 0.5  # line height in mm per point of font size
BULLET = "\u00b7"  # middle dot; the real bullet is outside Latin-1

PRIMARY = (41, 128, 185)
SECONDARY = (52, 73, 94)
CONTACT_GRAY = (100, 100, 100)
MUTED = (120, 120, 120)
FOOTER_GRAY = (150, 150, 150)
RULE_GRAY = (200, 200, 200)

# Helvetica is Latin-1 only. Replace common Unicode characters.
_UNICODE_REPLACEMENTS = {
    "\u2014": "--",   # em-dash
    "\u2013": "-",    # en-dash
    "\u2018": "'",    # left single quote
    "\u2019": "'",    # right single quote
    "\u201c": '"',    # left double quote
    "\u201d": '"',    # right double quote
    "\u2026": "...",  # ellipsis
    "\u2022": BULLET,  # bullet
    "\u00a0": " ",    # non-breaking space
}


def _sanitize(text: str) -> str:
    """Replace characters unsupported by Helvetica with Latin-1 fallbacks."""
    for char, replacement in _UNICODE_REPLACEMENTS.items():
        text = text.replace(char, replacement)
    return text.encode("latin-1", "replace").decode("latin-1")


def resume_pdf_filename(name: str | None, year: int | None = None) -> str:
    """``Jane_Doe_2026.pdf``; ``resume_<year>.pdf`` when there is no name."""
    stem = re.sub(r"\s+", "_", name.strip()) if name and name.strip() else "resume"
    return f"{stem}_{year or date.today().year}.pdf"


class _ResumePDF(FPDF):
    def footer(self) -> None:
        self.set_y(-12)
        self.set_font("Helvetica", "", 8)
        self.set_text_color(*FOOTER_GRAY)
        self.cell(0, 4, f"Page {self.page_no()} of {{nb}}", align="R")


class _Layout:
    """Running cursor over an A4 document with manual page breaks."""

    def __init__(self) -> None:
        pdf = _ResumePDF(orientation="portrait", unit="mm", format="A4")
        pdf.set_margins(MARGIN, MARGIN, MARGIN)
        pdf.set_auto_page_break(auto=False, margin=MARGIN)
        pdf.add_page()
        self.pdf = pdf
        self.content_width = pdf.w - 2 * MARGIN

    @property
    def bottom(self) -> float:
        return self.pdf.h - MARGIN

    @property
    def page_height(self) -> float:
        return self.bottom - MARGIN

    def ensure_space(self, height: float) -> None:
        if self.pdf.get_y() + height > self.bottom:
            self.pdf.add_page()
            self.pdf.set_y(MARGIN)

    def space(self, height: float) -> None:
        self.pdf.set_y(self.pdf.get_y() + height)

    def wrap(self, text: str, width: float) -> list[str]:
        return self.pdf.multi_cell(
            width, 1, text, dry_run=True, output=MethodReturnValue.LINES
        )

    def block(
        self,
        text: str,
        *,
        size: float,
        style: str = "",
        color: tuple[int, int, int] = SECONDARY,
        indent: float = 0,
        spacing: float = 0,
    ) -> None:
        """Write wrapped text, moving to a new page first if it would overflow."""
        self.pdf.set_font("Helvetica", style, size)
        self.pdf.set_text_color(*color)
        width = self.content_width - indent
        line_height = size * LINE_FACTOR
        lines = self.wrap(_sanitize(text), width)

        height = len(lines) * line_height
        if height <= self.page_height:
            self.ensure_space(height)
        for line in lines:
            self.ensure_space(line_height)
            self.pdf.set_x(MARGIN + indent)
            self.pdf.cell(width, line_height, line, new_x="LMARGIN", new_y="NEXT")
        if spacing:
            self.space(spacing)

    def rule(self, color: tuple[int, int, int], width: float) -> None:
        y = self.pdf.get_y()
        self.pdf.set_draw_color(*color)
        self.pdf.set_line_width(width)
        self.pdf.line(MARGIN, y, self.pdf.w - MARGIN, y)

    def section_header(self, title: str) -> None:
        # Keep the header together with its underline and first line of body.
        self.ensure_space(16 * LINE_FACTOR + 12)
        self.block(title.upper(), size=16, style="B", color=PRIMARY, spacing=1)
        self.rule(PRIMARY, 0.5)
        self.space(5)

    def bullet_list(self, items: list[str], indent: float = 5) -> None:
        for item in items:
            self.block(f"{BULLET} {item}", size=11, indent=indent, spacing=1)
        self.space(2)


def _contact_line(contact: ContactInfo) -> str:
    parts = []
    if contact.email:
        parts.append(f"Email: {contact.email}")
    if contact.mobile:
        parts.append(f"Phone: {contact.mobile}")
    if contact.linkedin:
        parts.append(f"LinkedIn: {contact.linkedin}")
    if contact.twitter:
        parts.append(f"Twitter: {contact.twitter}")
    return " | ".join(parts)


def _description_items(description: str | None) -> list[str]:
    if not description:
        return []
    return [strip_bullet(line) for line in description.split("\n") if line.strip()]


def _render_entries(layout: _Layout, title: str, entries: list[Entry]) -> None:
    entries = [e for e in entries if not e.is_empty()]
    if not entries:
        return
    layout.section_header(title)
    for entry in entries:
        heading = entry_heading(entry)
        if heading:
            layout.block(heading, size=12, style="B")
        if entry.duration and entry.duration.strip():
            layout.block(entry.duration.strip(), size=10, style="I", color=MUTED, spacing=1)
        items = _description_items(entry.description)
        if items:
            layout.bullet_list(items)
        layout.space(4)


def render_resume_pdf(form: ResumeForm, name: str | None = None) -> bytes:
    """Lay out *form* and return the PDF bytes."""
    layout = _Layout()

    # Header
    layout.block(name or DEFAULT_DISPLAY_NAME, size=28, style="B", color=PRIMARY, spacing=2)

    contact = _contact_line(form.contact_info)
    if contact:
        layout.block(contact, size=10, color=CONTACT_GRAY, spacing=4)

    layout.rule(RULE_GRAY, 0.3)
    layout.space(8)

    if form.summary.strip():
        layout.section_header(SUMMARY_TITLE)
        layout.block(form.summary.strip(), size=11, spacing=5)

    if form.skills.strip():
        layout.section_header(SKILLS_TITLE)
        skills = [s.strip() for s in form.skills.split("\n") if s.strip()]
        layout.block(f" {BULLET} ".join(skills), size=11, spacing=5)

    _render_entries(layout, EXPERIENCE_TITLE, form.experience)
    _render_entries(layout, EDUCATION_TITLE, form.education)
    _render_entries(layout, PROJECTS_TITLE, form.projects)

    return bytes(layout.pdf.output())


def write_resume_pdf(
    form: ResumeForm,
    out: Path,
    name: str | None = None,
) -> Path:
    """Write the PDF to *out*; a directory gets the conventional filename."""
    path = out / resume_pdf_filename(name) if out.is_dir() else out
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(render_resume_pdf(form, name))
    return path
