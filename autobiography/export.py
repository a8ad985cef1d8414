"""
Export Projections

Pure renderings of an aggregate snapshot. None of them feed back into the
aggregate or touch the network:

- render_pdf: paginated document (fpdf2)
- render_docx: structured heading/paragraph document (python-docx)
- render_shared_view: read-only view model behind a share link
"""

import io
import re
from typing import List, Optional

from docx import Document
from docx.shared import Pt
from fpdf import FPDF
from pydantic import BaseModel

from autobiography.schemas import AutobiographyData, FontFamily, SharedStory


EXPORT_FILENAMES = {
    "pdf": "autobiography.pdf",
    "docx": "autobiography.docx",
}

# =============================================================================
# PDF
# =============================================================================

PDF_FONTS = {
    FontFamily.SERIF: "Times",
    FontFamily.SANS: "Helvetica",
    FontFamily.MONO: "Courier",
}

PAGE_MARGIN = 40
LINE_HEIGHT = 18
BLOCK_GAP = 6


def _winansi(text: str) -> str:
    # Core PDF fonts are written with WinAnsi (cp1252) encoding
    return text.encode("cp1252", "replace").decode("cp1252")


def wrap_text(pdf: FPDF, text: str, max_width: float) -> List[str]:
    """
    Greedy word wrap against the current font. Explicit newlines always
    break; a word wider than the line is split by character.
    """
    lines: List[str] = []
    for paragraph in text.split("\n"):
        current = ""
        for word in paragraph.split(" "):
            candidate = f"{current} {word}" if current else word
            if pdf.get_string_width(candidate) <= max_width:
                current = candidate
                continue
            if current:
                lines.append(current)
            current = ""
            for char in word:
                if current and pdf.get_string_width(current + char) > max_width:
                    lines.append(current)
                    current = ""
                current += char
        lines.append(current)
    return lines


class _PdfWriter:
    """Cursor-based block writer that starts a new page when space runs out."""

    def __init__(self, font: str, compress: bool = True):
        self.pdf = FPDF(orientation="P", unit="pt", format="A4")
        self.pdf.core_fonts_encoding = "windows-1252"
        self.pdf.set_compression(compress)
        self.pdf.set_auto_page_break(False)
        self.pdf.add_page()
        self.font = font
        self.cursor_y = PAGE_MARGIN
        self.max_width = self.pdf.w - PAGE_MARGIN * 2

    def write_block(self, text: str, size: int = 12, bold: bool = False):
        self.pdf.set_font(self.font, style="B" if bold else "", size=size)
        for line in wrap_text(self.pdf, _winansi(text), self.max_width):
            if self.cursor_y > self.pdf.h - PAGE_MARGIN:
                self.pdf.add_page()
                self.cursor_y = PAGE_MARGIN
            if line:
                self.pdf.text(PAGE_MARGIN, self.cursor_y, line)
            self.cursor_y += LINE_HEIGHT
        self.cursor_y += BLOCK_GAP

    def output(self) -> bytes:
        return bytes(self.pdf.output())


def render_pdf(data: AutobiographyData, compress: bool = True) -> bytes:
    """Title (26pt bold), subtitle, optional quote, blank line, then the story."""
    custom = data.customizations
    writer = _PdfWriter(PDF_FONTS[custom.font_family], compress=compress)

    writer.write_block(custom.title, size=26, bold=True)
    writer.write_block(custom.subtitle, size=14)
    if custom.quote:
        writer.write_block(f'"{custom.quote}"', size=12)
    writer.write_block("")
    writer.write_block(data.generated_story or "", size=12)

    return writer.output()


# =============================================================================
# DOCX
# =============================================================================

# Control characters XML 1.0 does not allow; tab, newline and carriage return are kept
_XML_ILLEGAL = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f]")


def _xml_safe(text: str) -> str:
    return _XML_ILLEGAL.sub("", text)


def render_docx(data: AutobiographyData) -> bytes:
    """
    Heading 1 title, subtitle paragraph, italic quote if present, then one
    paragraph per newline-delimited segment of the story.
    """
    custom = data.customizations
    doc = Document()

    doc.add_heading(_xml_safe(custom.title), level=1)

    subtitle = doc.add_paragraph(_xml_safe(custom.subtitle))
    subtitle.paragraph_format.space_after = Pt(10)

    if custom.quote:
        quote = doc.add_paragraph()
        quote.add_run(_xml_safe(f'"{custom.quote}"')).italic = True
        quote.paragraph_format.space_after = Pt(20)

    for segment in (data.generated_story or "").split("\n"):
        paragraph = doc.add_paragraph()
        paragraph.add_run(_xml_safe(segment))
        paragraph.paragraph_format.space_after = Pt(10)

    buffer = io.BytesIO()
    doc.save(buffer)
    return buffer.getvalue()


# =============================================================================
# SHARED VIEW
# =============================================================================

FONT_STACKS = {
    FontFamily.SERIF: "Playfair Display, serif",
    FontFamily.SANS: "Inter, sans-serif",
    FontFamily.MONO: "Space Mono, monospace",
}


class SharedStoryView(BaseModel):
    """What the public share page renders. Read-only."""
    share_id: str
    title: str
    subtitle: str
    quote: Optional[str] = None
    accent_color: str
    cover_image: Optional[str] = None
    font_stack: str
    paragraphs: List[str]


def render_shared_view(shared: SharedStory) -> SharedStoryView:
    custom = shared.data.customizations
    return SharedStoryView(
        share_id=shared.share_id,
        title=custom.title,
        subtitle=custom.subtitle,
        quote=custom.quote or None,
        accent_color=custom.accent_color,
        cover_image=custom.cover_image,
        font_stack=FONT_STACKS[custom.font_family],
        paragraphs=[p for p in (shared.data.generated_story or "").split("\n") if p],
    )
