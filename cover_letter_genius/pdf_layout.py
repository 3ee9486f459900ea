"""Single-page cover letter layout on top of fpdf2.

Coordinates follow fpdf2: the origin is the top-left corner and the layout
cursor ``y`` is the baseline of the next line, measured downwards. Content
that would fall below the bottom margin is dropped; there is never a second
page.
"""

from __future__ import annotations

import datetime
import logging
import re
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Callable, List, Optional

from fpdf import FPDF

from .model import ContactInfo, LetterBody

logger = logging.getLogger(__name__)

FONT_SIZE_HEADER = 14
FONT_SIZE_BODY = 11
LINE_HEIGHT = FONT_SIZE_BODY * 1.4
MARGIN = 72
BORDER_MARGIN = 40
BORDER_COLOR = (204, 204, 204)
TEXT_COLOR = (26, 26, 26)

FALLBACK_MANAGER = "Hiring Manager"
CLOSING_PARAGRAPH = (
    "I am confident I possess the skills to excel in this role and am eager to "
    "discuss my qualifications further. Thank you for your time and consideration."
)

EMBEDDED_FAMILY = "DejaVu"
CORE_FAMILY = "Helvetica"

BUNDLED_FONT = Path(__file__).parent / "fonts" / "DejaVuSans.ttf"

# DejaVu Sans search paths (bundled copy first, then Linux, macOS, Windows)
_FONT_PATHS = [
    str(BUNDLED_FONT),
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/TTF/DejaVuSans.ttf",
    "/Library/Fonts/DejaVuSans.ttf",
    str(Path.home() / "Library/Fonts/DejaVuSans.ttf"),
    "C:/Windows/Fonts/DejaVuSans.ttf",
]

# Helvetica is Latin-1 only. Replace common Unicode characters.
_UNICODE_REPLACEMENTS = {
    "\u2014": "--",
    "\u2013": "-",
    "\u2018": "'",
    "\u2019": "'",
    "\u201c": '"',
    "\u201d": '"',
    "\u2026": "...",
    "\u2022": "*",
    "\u00a0": " ",
}

_WHITESPACE = re.compile(r"\s+")


# -------- Fonts --------
@dataclass(frozen=True)
class FontSpec:
    """The font every line of the letter is set in.

    ``path`` is a TrueType file embedded into the PDF; ``None`` means the
    built-in Helvetica, which only covers Latin-1.
    """

    path: Optional[str] = None

    @property
    def family(self) -> str:
        return EMBEDDED_FAMILY if self.path else CORE_FAMILY

    def install(self, pdf: FPDF) -> None:
        if self.path:
            pdf.add_font(EMBEDDED_FAMILY, "", self.path)

    def prepare(self, text: str) -> str:
        if self.path:
            return text
        for char, replacement in _UNICODE_REPLACEMENTS.items():
            text = text.replace(char, replacement)
        return text.encode("latin-1", errors="replace").decode("latin-1")


@lru_cache(maxsize=None)
def resolve_font(font_path: Optional[str] = None) -> FontSpec:
    """Pick the font once per process (per configured path)."""
    candidates = [font_path] if font_path else []
    for path in candidates + _FONT_PATHS:
        if Path(path).is_file():
            logger.debug("Using font %s", path)
            return FontSpec(path=path)
    if font_path:
        logger.warning("Font file %s not found", font_path)
    logger.warning("No DejaVu Sans font found (bundled copy missing), falling back to core %s (Latin-1 only)", CORE_FAMILY)
    return FontSpec()


# -------- Text helpers --------
def normalize_whitespace(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


def wrap_words(text: str, measure: Callable[[str], float], max_width: float) -> List[str]:
    """Greedy word wrap.

    A line only exceeds ``max_width`` when it is a single word that is wider
    than the line on its own.
    """
    lines: List[str] = []
    current = ""
    for word in normalize_whitespace(text).split(" "):
        if not word:
            continue
        candidate = f"{current} {word}" if current else word
        if measure(candidate) > max_width:
            if current:
                lines.append(current)
            current = word
        else:
            current = candidate
    if current:
        lines.append(current)
    return lines


def format_letter_date(day: datetime.date) -> str:
    return f"{day:%B} {day.day}, {day.year}"


# -------- Layout --------
class LetterLayout:
    """Drawing session for one page; owns the vertical cursor."""

    def __init__(self, pdf: FPDF, font: FontSpec):
        self.pdf = pdf
        self.font = font
        self.y = MARGIN
        self.dropped_lines = 0

    @property
    def usable_width(self) -> float:
        return self.pdf.w - 2 * MARGIN

    @property
    def bottom(self) -> float:
        return self.pdf.h - MARGIN

    @property
    def overflowed(self) -> bool:
        return self.y > self.bottom

    def skip(self, amount: float) -> None:
        self.y += amount

    def measure(self, text: str, size: float = FONT_SIZE_BODY) -> float:
        self.pdf.set_font(self.font.family, size=size)
        return self.pdf.get_string_width(self.font.prepare(text))

    def draw_border(self) -> None:
        self.pdf.set_draw_color(*BORDER_COLOR)
        self.pdf.set_line_width(1)
        self.pdf.rect(
            BORDER_MARGIN,
            BORDER_MARGIN,
            self.pdf.w - 2 * BORDER_MARGIN,
            self.pdf.h - 2 * BORDER_MARGIN,
        )

    def draw_line(self, text: str, size: float = FONT_SIZE_BODY) -> None:
        if not text:
            return
        if self.overflowed:
            self.dropped_lines += 1
            return
        self.pdf.set_font(self.font.family, size=size)
        self.pdf.text(MARGIN, self.y, self.font.prepare(text.strip()))
        self.y += size * 1.2

    def draw_paragraph(self, text: str) -> None:
        if not text:
            return
        for line in wrap_words(text, self.measure, self.usable_width):
            self.draw_line(line)
        self.skip(LINE_HEIGHT)


def _new_pdf(font: FontSpec) -> FPDF:
    pdf = FPDF(orientation="P", unit="pt", format="A4")
    pdf.set_auto_page_break(False)
    pdf.add_page()
    font.install(pdf)
    pdf.set_text_color(*TEXT_COLOR)
    return pdf


def layout_letter(
    layout: LetterLayout,
    contact: ContactInfo,
    body: LetterBody,
    today: datetime.date,
) -> None:
    layout.draw_border()

    # Header
    layout.draw_line(contact.full_name, FONT_SIZE_HEADER)
    layout.skip(4)
    if contact.address:
        layout.draw_line(contact.address)
    if contact.phone and contact.email:
        layout.draw_line(f"{contact.phone} | {contact.email}")
    else:
        layout.draw_line(contact.phone)
        layout.draw_line(contact.email)
    layout.skip(LINE_HEIGHT * 1.5)

    layout.draw_line(format_letter_date(today))
    layout.skip(LINE_HEIGHT * 1.5)

    # Recipient
    manager = body.hiring_manager_name or FALLBACK_MANAGER
    layout.draw_line(manager)
    layout.draw_line(body.company_name)
    layout.skip(LINE_HEIGHT * 1.5)

    layout.draw_line(f"Dear {manager},")
    layout.skip(LINE_HEIGHT)

    for paragraph in body.paragraphs:
        layout.draw_paragraph(paragraph)
    layout.draw_paragraph(CLOSING_PARAGRAPH)

    # Signature
    layout.draw_line("Sincerely,")
    layout.skip(LINE_HEIGHT * 3)
    layout.draw_line(contact.full_name)


def render_cover_letter(
    contact: ContactInfo,
    body: LetterBody,
    *,
    today: Optional[datetime.date] = None,
    font_path: Optional[str] = None,
) -> bytes:
    """Lay out the letter on a single A4 page and return the PDF bytes."""
    font = resolve_font(font_path)
    pdf = _new_pdf(font)
    layout = LetterLayout(pdf, font)
    layout_letter(layout, contact, body, today or datetime.date.today())
    if layout.dropped_lines:
        logger.info("Cover letter overflowed the page; %d line(s) dropped", layout.dropped_lines)
    return bytes(pdf.output())
