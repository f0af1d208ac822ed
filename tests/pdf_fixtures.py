"""
Helpers that build small PDF templates for tests.
"""

import io
import os
import tempfile
from typing import Iterable, Tuple

from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas


def make_blank_pdf(page_size: Tuple[float, float] = A4, pages: int = 1) -> bytes:
    """A template without form fields; each page carries a small label."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=page_size)
    for index in range(pages):
        c.setFont("Helvetica", 8)
        c.drawString(20, 20, f"TEMPLATE PAGE {index + 1}")
        c.showPage()
    c.save()
    return buf.getvalue()


def make_form_pdf(field_names: Iterable[str], page_size: Tuple[float, float] = A4) -> bytes:
    """A template with one AcroForm text field per name."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=page_size)
    for index, name in enumerate(field_names):
        c.acroForm.textfield(name=name, x=72, y=700 - 40 * index, width=200, height=20)
    c.showPage()
    c.save()
    return buf.getvalue()


def write_temp_pdf(pdf_bytes: bytes) -> str:
    """Write PDF bytes to a temporary file and return its path (caller removes it)."""
    fd, path = tempfile.mkstemp(suffix=".pdf")
    with os.fdopen(fd, "wb") as f:
        f.write(pdf_bytes)
    return path


class FixedWidthFont:
    """Font metrics where every character is half the font size wide."""

    name = "Helvetica"

    def width_of_text_at_size(self, text: str, size: float) -> float:
        return len(text) * size * 0.5
