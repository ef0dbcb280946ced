"""Parse resume markdown back into sections for preview.

The header constants here are the only definition of the markdown structure;
``markdown_renderer`` imports them so writer and reader cannot drift apart.

Known limitations of ``parse_sections`` (kept on purpose):

- blank lines are dropped, so blank-line separation between entries does not
  survive parsing; ``split_entries`` recovers entries from ``### `` lines;
- anything before the first ``## `` header is discarded, and a document
  without headers parses to an empty list.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

SECTION_PREFIX = "## "
ENTRY_PREFIX = "### "
CONTACT_SEPARATOR = " | "

SUMMARY_TITLE = "Professional Summary"
SKILLS_TITLE = "Skills"
EXPERIENCE_TITLE = "Work Experience"
EDUCATION_TITLE = "Education"
PROJECTS_TITLE = "Projects"

CONTACT_GLYPHS = {
    "email": "\U0001f4e7",
    "mobile": "\U0001f4f1",
    "linkedin": "\U0001f4bc",
    "twitter": "\U0001f426",
}


def section_header(title: str) -> str:
    return f"{SECTION_PREFIX}{title}"


def entry_header(title: str) -> str:
    return f"{ENTRY_PREFIX}{title}"


@dataclass
class Section:
    title: str
    content: str


def parse_sections(markdown: str) -> list[Section]:
    """Split *markdown* on ``## `` headers into ordered sections."""
    if not markdown:
        return []

    sections: list[Section] = []
    title: str | None = None
    buffer: list[str] = []
    discarded = 0

    for line in markdown.split("\n"):
        if line.startswith(SECTION_PREFIX):
            if title is not None:
                sections.append(Section(title, "\n".join(buffer).strip()))
            title = line[len(SECTION_PREFIX):].strip()
            buffer = []
        elif line.startswith(ENTRY_PREFIX) or line.strip():
            if title is None:
                discarded += 1
                continue
            buffer.append(line)

    if title is not None:
        sections.append(Section(title, "\n".join(buffer).strip()))

    if discarded:
        logger.debug("Discarded %d line(s) before the first section header", discarded)
    return sections


def split_entries(content: str) -> list[list[str]]:
    """Group section content into entries, one per ``### `` line.

    Lines before the first entry header form an entry of their own.
    """
    entries: list[list[str]] = []
    for line in content.split("\n"):
        if not line.strip():
            continue
        if line.startswith(ENTRY_PREFIX) or not entries:
            entries.append([line])
        else:
            entries[-1].append(line)
    return entries


# ---------------------------------------------------------------------------
# Preview
# ---------------------------------------------------------------------------

_SUMMARY_RE = re.compile(r"professional summary|summary", re.IGNORECASE)
_SKILLS_RE = re.compile(r"skills", re.IGNORECASE)
_EXPERIENCE_RE = re.compile(r"work experience|experience", re.IGNORECASE)
_EDUCATION_RE = re.compile(r"education", re.IGNORECASE)
_PROJECTS_RE = re.compile(r"projects", re.IGNORECASE)
_KNOWN_RE = re.compile(
    r"professional summary|skills|work experience|education|projects",
    re.IGNORECASE,
)
_SECTION_TITLE_RE = re.compile(
    r"(professional )?summary|skills|(work )?experience|education|projects", re.IGNORECASE
)
_LINK_RE = re.compile(r"\[(.*?)\]\((.*?)\)")
_SKILL_SPLIT_RE = re.compile(r"[,•\-\n]")
_BULLET_RE = re.compile(r"^[•\-]\s*")


@dataclass
class PreviewEntry:
    heading: str
    lines: list[str] = field(default_factory=list)


@dataclass
class ResumePreview:
    header: Section | None = None
    contact: list[str] = field(default_factory=list)
    summary: Section | None = None
    skills: list[str] = field(default_factory=list)
    skills_title: str = SKILLS_TITLE
    experience: Section | None = None
    education: Section | None = None
    projects: Section | None = None

    @property
    def is_empty(self) -> bool:
        return not any(
            (self.header, self.summary, self.skills, self.experience,
             self.education, self.projects)
        )


def _find(sections: list[Section], pattern: re.Pattern[str]) -> Section | None:
    return next((s for s in sections if pattern.search(s.title)), None)


def clean_contact_item(item: str) -> str:
    """Drop contact glyphs and unwrap ``[label](url)`` links to the URL."""
    for glyph in CONTACT_GLYPHS.values():
        item = item.replace(glyph, "")
    return _LINK_RE.sub(r"\2", item).strip()


def strip_bullet(line: str) -> str:
    return _BULLET_RE.sub("", line.strip())


def preview_entries(section: Section) -> list[PreviewEntry]:
    entries = []
    for lines in split_entries(section.content):
        heading = lines[0]
        if heading.startswith(ENTRY_PREFIX):
            heading = heading[len(ENTRY_PREFIX):].strip()
        entries.append(PreviewEntry(heading, [strip_bullet(l) for l in lines[1:]]))
    return entries


def build_preview(markdown: str) -> ResumePreview:
    """Classify the parsed sections of *markdown* for display."""
    sections = parse_sections(markdown)
    preview = ResumePreview()
    if not sections:
        return preview

    # The contact block comes first; a name such as "Skills Expert" is still a name.
    first = sections[0]
    if _SECTION_TITLE_RE.fullmatch(first.title):
        preview.header = next((s for s in sections if not _KNOWN_RE.search(s.title)), None)
    else:
        preview.header = first
    sections = [s for s in sections if s is not preview.header]
    if preview.header and preview.header.content:
        preview.contact = [
            clean_contact_item(item)
            for item in preview.header.content.split("|")
            if clean_contact_item(item)
        ]

    preview.summary = _find(sections, _SUMMARY_RE)
    skills = _find(sections, _SKILLS_RE)
    if skills:
        preview.skills_title = skills.title
        preview.skills = [s.strip() for s in _SKILL_SPLIT_RE.split(skills.content) if s.strip()]
    preview.experience = _find(sections, _EXPERIENCE_RE)
    preview.education = _find(sections, _EDUCATION_RE)
    preview.projects = _find(sections, _PROJECTS_RE)
    return preview
