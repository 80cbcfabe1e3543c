"""
Printable cover page PDF (ReportLab), laid out from a CoverPreview.

Fonts used (built-in Type 1, no files needed):
- University name: Times-Bold, 20
- Department: Times-Roman, 15
- Title: Times-Bold, 24 (wrapped)
- Course block: Times-Roman, 14
- Submitted to / by table: Times-Roman, 12

Names outside Latin-1 (e.g. Bengali) need a TTF font: pass font_path /
bold_font_path (or set COVER_FONT_PATH / COVER_BOLD_FONT_PATH) and it replaces
Times-Roman / Times-Bold everywhere.

Paths:
- Logo and font paths can be relative (resolved relative to this file) or absolute.

Install:
  pip install reportlab
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.pdfgen import canvas

from coverie.services.cover_preview import CoverPreview

logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parent
PathLike = Union[str, Path]

HEADER_COLOR = colors.HexColor("#2E86D6")


# -----------------------------
# Helpers: paths
# -----------------------------
def resolve_path(p: Optional[PathLike], base_dir: Path = BASE_DIR) -> Optional[str]:
    if not p:
        return None
    p = Path(p)
    return str(p if p.is_absolute() else (base_dir / p).resolve())


# -----------------------------
# Helpers: font registry
# -----------------------------
@dataclass(frozen=True)
class CoverFonts:
    regular: str = "Times-Roman"
    bold: str = "Times-Bold"


def safe_register_ttf(font_name: str, font_path: PathLike) -> None:
    if font_name in pdfmetrics.getRegisteredFontNames():
        return
    fp = resolve_path(font_path)
    if not fp or not Path(fp).exists():
        raise FileNotFoundError(f'Font file not found: "{fp}"')
    pdfmetrics.registerFont(TTFont(font_name, fp))


def register_cover_fonts(
    font_path: Optional[PathLike] = None,
    bold_font_path: Optional[PathLike] = None,
) -> CoverFonts:
    if not font_path:
        return CoverFonts()

    # registered under the file stem
    regular = f"Cover-{Path(font_path).stem}"
    safe_register_ttf(regular, font_path)
    bold = regular
    if bold_font_path:
        bold = f"Cover-{Path(bold_font_path).stem}"
        safe_register_ttf(bold, bold_font_path)
    return CoverFonts(regular=regular, bold=bold)


# -----------------------------
# Layout helpers
# -----------------------------
def _draw_centered(c: canvas.Canvas, text: str, y: float, font: str, size: float, page_w: float) -> None:
    c.setFont(font, size)
    c.drawString((page_w - c.stringWidth(text, font, size)) / 2.0, y, text)


def _wrap_lines_hardsplit(c: canvas.Canvas, text: str, font: str, size: float, max_width: float) -> list[str]:
    """
    Word wrap; if a single word is too long, hard-split to fit max_width.
    Also supports empty string.
    """
    text = (text or "").strip()
    if not text:
        return [""]

    def fits(s: str) -> bool:
        return c.stringWidth(s, font, size) <= max_width

    lines: list[str] = []
    cur = ""

    for w in text.split():
        candidate = w if not cur else (cur + " " + w)
        if fits(candidate):
            cur = candidate
            continue

        if cur:
            lines.append(cur)
            cur = ""

        if fits(w):
            cur = w
            continue

        chunk = ""
        for ch in w:
            if fits(chunk + ch):
                chunk += ch
            else:
                if chunk:
                    lines.append(chunk)
                chunk = ch
        cur = chunk

    if cur:
        lines.append(cur)

    return lines


def _draw_wrapped_block_in_cell(
    c: canvas.Canvas,
    lines: list[str],
    x: float,
    y_top: float,
    cell_w: float,
    cell_h: float,
    *,
    font: str,
    size: float,
    padding: float = 6 * mm,
    line_gap: float = 6.0 * mm,
) -> None:
    """
    Draw rows inside a cell (wrap + clip).
    Nothing crosses the cell borders.
    """
    c.saveState()
    path = c.beginPath()
    path.rect(x, y_top - cell_h, cell_w, cell_h)
    c.clipPath(path, stroke=0, fill=0)

    c.setFont(font, size)
    max_width = max(1.0, cell_w - 2 * padding)

    wrapped: list[str] = []
    for ln in lines or [""]:
        wrapped.extend(_wrap_lines_hardsplit(c, ln, font, size, max_width))

    y = y_top - padding - size
    min_y = y_top - cell_h + padding

    for line in wrapped:
        if y < min_y:
            break
        c.drawString(x + padding, y, line)
        y -= line_gap

    c.restoreState()


def _draw_logo(c: canvas.Canvas, logo_path: Optional[str], y: float, size: float, page_w: float) -> None:
    if not logo_path:
        return
    try:
        c.drawImage(
            logo_path,
            (page_w - size) / 2.0,
            y,
            width=size,
            height=size,
            preserveAspectRatio=True,
            mask="auto",
        )
    except Exception as e:
        # a broken logo must not block the export
        logger.warning("Logo not loaded from %s: %s", logo_path, e)
        c.setFont("Times-Italic", 10)
        c.setFillColor(colors.red)
        c.drawString(22 * mm, y + size / 2.0, f"Logo not loaded: {e}")
        c.setFillColor(colors.black)


# -----------------------------
# Page
# -----------------------------
def _draw_cover(c: canvas.Canvas, preview: CoverPreview, logo_path: Optional[str], fonts: CoverFonts) -> None:
    page_w, page_h = A4
    margin_x = 22 * mm
    content_w = page_w - 2 * margin_x

    # Header: logo, university, department
    logo_size = 35 * mm
    logo_y = page_h - 25 * mm - logo_size
    _draw_logo(c, logo_path, logo_y, logo_size, page_w)

    uni_y = logo_y - 12 * mm
    _draw_centered(c, preview.university_name, uni_y, fonts.bold, 20, page_w)
    _draw_centered(c, preview.department_line, uni_y - 9 * mm, fonts.regular, 15, page_w)

    # Title + course block, roughly in the middle of the page
    title_size = 24
    title_lines = _wrap_lines_hardsplit(c, preview.title, fonts.bold, title_size, content_w)
    y = page_h / 2.0 + 25 * mm
    c.setFillColor(HEADER_COLOR)
    for line in title_lines:
        _draw_centered(c, line, y, fonts.bold, title_size, page_w)
        y -= 11 * mm
    c.setFillColor(colors.black)

    y -= 6 * mm
    _draw_centered(c, preview.course_code_line, y, fonts.regular, 14, page_w)
    _draw_centered(c, preview.session_line, y - 7 * mm, fonts.regular, 13, page_w)

    # Bottom table: submitted to | submitted by
    table_x = margin_x
    table_w = content_w
    table_y = 55 * mm
    header_h = 10 * mm
    body_h = 28 * mm
    table_h = header_h + body_h

    c.setLineWidth(1)
    c.rect(table_x, table_y, table_w, table_h)

    c.setFillColor(HEADER_COLOR)
    c.rect(table_x, table_y + body_h, table_w, header_h, fill=1, stroke=0)
    c.setFillColor(colors.white)

    c.setFont(fonts.bold, 11)
    mid_x = table_x + table_w / 2.0
    c.drawCentredString((table_x + mid_x) / 2.0, table_y + body_h + 3 * mm, "SUBMITTED TO:")
    c.drawCentredString((mid_x + table_x + table_w) / 2.0, table_y + body_h + 3 * mm, "SUBMITTED BY:")

    c.setStrokeColor(colors.black)
    c.line(mid_x, table_y, mid_x, table_y + table_h)
    c.setFillColor(colors.black)

    cell_w = table_w / 2.0
    body_top_y = table_y + body_h
    _draw_wrapped_block_in_cell(
        c, list(preview.submitted_to), table_x, body_top_y, cell_w, body_h,
        font=fonts.regular, size=12,
    )
    _draw_wrapped_block_in_cell(
        c, list(preview.submitted_by), table_x + cell_w, body_top_y, cell_w, body_h,
        font=fonts.regular, size=12,
    )

    # Submission date under a dashed rule
    rule_y = table_y - 10 * mm
    c.saveState()
    c.setDash(4, 3)
    c.line(margin_x, rule_y, page_w - margin_x, rule_y)
    c.restoreState()

    _draw_centered(c, "SUBMISSION DATE", rule_y - 8 * mm, fonts.bold, 11, page_w)
    _draw_centered(c, preview.submission_date_line, rule_y - 16 * mm, fonts.regular, 14, page_w)


# -----------------------------
# Main generator
# -----------------------------
def generate_cover_pdf(
    preview: CoverPreview,
    *,
    output_path: PathLike,
    logo_path: Optional[PathLike] = None,
    font_path: Optional[PathLike] = None,
    bold_font_path: Optional[PathLike] = None,
) -> str:
    fonts = register_cover_fonts(font_path, bold_font_path)
    out_path = resolve_path(output_path) or str(output_path)
    Path(out_path).parent.mkdir(parents=True, exist_ok=True)

    c = canvas.Canvas(out_path, pagesize=A4)
    c.setTitle(preview.title)
    _draw_cover(c, preview, resolve_path(logo_path), fonts)
    c.showPage()
    c.save()

    logger.info("Cover page written to %s", out_path)
    return out_path


def render_cover_pdf_bytes(
    preview: CoverPreview,
    *,
    logo_path: Optional[PathLike] = None,
    font_path: Optional[PathLike] = None,
    bold_font_path: Optional[PathLike] = None,
) -> bytes:
    fonts = register_cover_fonts(font_path, bold_font_path)
    buffer = io.BytesIO()
    c = canvas.Canvas(buffer, pagesize=A4)
    c.setTitle(preview.title)
    _draw_cover(c, preview, resolve_path(logo_path), fonts)
    c.showPage()
    c.save()
    return buffer.getvalue()
