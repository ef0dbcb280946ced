"""Rendering: resume form to markdown and PDF, and markdown back to sections."""

from careercoach.rendering.markdown_renderer import render_resume_markdown
from careercoach.rendering.pdf_renderer import render_resume_pdf, resume_pdf_filename
from careercoach.rendering.sections import Section, build_preview, parse_sections

__all__ = [
    "Section",
    "build_preview",
    "parse_sections",
    "render_resume_markdown",
    "render_resume_pdf",
    "resume_pdf_filename",
]
