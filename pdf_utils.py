"""
PDF utility functions for certificate generation.

This module provides the PDF plumbing around the layout code:
- Asset loading (local files or http(s) URLs)
- Font registration, measuring and caching
- Template inspection (pages, form fields, fonts)
- Text overlay drawing and merging onto the template
- AcroForm field filling
"""

import io
from typing import Any, Dict, Iterable, List, Optional, Tuple

import requests
from pypdf import PdfReader, PdfWriter
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.pdfgen import canvas

from config import API_TIMEOUT, FALLBACK_FONT, FONT_NAME, FONT_PATH
from text_layout import DrawInstruction


# ========= ASSET LOADING =========
def load_asset_bytes(location: str, what: str = "asset", timeout: int = API_TIMEOUT) -> bytes:
    """
    Read an asset from a local path or download it from an http(s) URL.

    Args:
        location: File path or URL
        what: Human-readable asset name used in error messages
        timeout: Download timeout in seconds

    Returns:
        Raw asset bytes

    Raises:
        RuntimeError: If the asset cannot be read or downloaded
    """
    if location.startswith(("http://", "https://")):
        try:
            response = requests.get(location, timeout=timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise RuntimeError(f"Failed to fetch {what} from {location}: {e}") from e
        return response.content

    try:
        with open(location, "rb") as f:
            return f.read()
    except OSError as e:
        raise RuntimeError(f"Failed to load {what} from {location}: {e}") from e


# ========= FONTS =========
class PdfFont:
    """A font registered with reportlab, measurable at any size."""

    def __init__(self, name: str):
        self.name = name

    def width_of_text_at_size(self, text: str, size: float) -> float:
        return pdfmetrics.stringWidth(text, self.name, size)

    def __repr__(self) -> str:
        return f"PdfFont({self.name!r})"


# Font cache to avoid re-registering fonts: font location -> PdfFont
_font_cache: Dict[str, PdfFont] = {}


def load_font(font_path: Optional[str] = None, font_name: str = FONT_NAME) -> PdfFont:
    """
    Register a TrueType font with caching, falling back to a standard PDF font.

    Args:
        font_path: Local path or URL of the .ttf file (default: config.FONT_PATH)
        font_name: Name to register the font under

    Returns:
        PdfFont for the loaded font, or for config.FALLBACK_FONT if loading failed
    """
    if font_path is None:
        font_path = FONT_PATH

    if font_path in _font_cache:
        return _font_cache[font_path]

    try:
        font_bytes = load_asset_bytes(font_path, what="font")
        pdfmetrics.registerFont(TTFont(font_name, io.BytesIO(font_bytes)))
    except Exception as e:
        # Fallback is not cached so a later call can pick up the real font
        print(f"Warning: Could not load font {font_path}, falling back to {FALLBACK_FONT}: {e}")
        return PdfFont(FALLBACK_FONT)

    font = PdfFont(font_name)
    _font_cache[font_path] = font
    return font


def clear_font_cache() -> None:
    """Clear the font cache. Useful for testing."""
    _font_cache.clear()


# ========= TEMPLATE INSPECTION =========
_FIELD_TYPES = {
    "/Tx": "text",
    "/Btn": "button",
    "/Ch": "choice",
    "/Sig": "signature",
}


def _reader(pdf_bytes: bytes) -> PdfReader:
    return PdfReader(io.BytesIO(pdf_bytes))


def get_page_size(pdf_bytes: bytes, page_index: int = 0) -> Tuple[float, float]:
    """Width and height (points) of a page of the PDF."""
    page = _reader(pdf_bytes).pages[page_index]
    return float(page.mediabox.width), float(page.mediabox.height)


def list_form_fields(pdf_bytes: bytes) -> List[Dict[str, str]]:
    """List AcroForm fields as dicts with keys: name, type."""
    fields = _reader(pdf_bytes).get_fields() or {}
    return [
        {"name": name, "type": _FIELD_TYPES.get(field.get("/FT"), "unknown")}
        for name, field in fields.items()
    ]


def list_page_sizes(pdf_bytes: bytes) -> List[Tuple[float, float]]:
    """Width and height of every page."""
    return [
        (float(page.mediabox.width), float(page.mediabox.height))
        for page in _reader(pdf_bytes).pages
    ]


def list_fonts(pdf_bytes: bytes) -> List[Dict[str, str]]:
    """List fonts referenced by page resources as dicts with keys: base_font, subtype."""
    seen = set()
    fonts = []
    for page in _reader(pdf_bytes).pages:
        resources = page.get("/Resources")
        if resources is None:
            continue
        font_dict = resources.get_object().get("/Font")
        if font_dict is None:
            continue
        for font_ref in font_dict.get_object().values():
            font = font_ref.get_object()
            key = (str(font.get("/BaseFont", "Unknown")), str(font.get("/Subtype", "Unknown")))
            if key in seen:
                continue
            seen.add(key)
            fonts.append({"base_font": key[0], "subtype": key[1]})
    return fonts


def describe_template(pdf_bytes: bytes) -> Dict[str, Any]:
    """Summarize a template: form fields, page sizes and fonts."""
    return {
        "fields": list_form_fields(pdf_bytes),
        "pages": list_page_sizes(pdf_bytes),
        "fonts": list_fonts(pdf_bytes),
    }


# ========= OVERLAY =========
def create_overlay(
    instructions: Iterable[DrawInstruction],
    page_size: Tuple[float, float],
    color: Tuple[float, float, float] = (0, 0, 0),
) -> bytes:
    """
    Create a single-page PDF containing only the given text runs.

    Each instruction's font must be a PdfFont (or expose a registered
    reportlab font name as .name).
    """
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=page_size)
    c.setFillColorRGB(*color)

    for instruction in instructions:
        c.setFont(instruction.font.name, instruction.size)
        c.drawString(instruction.x, instruction.y, instruction.text)

    c.save()
    return buf.getvalue()


def merge_overlay(base_pdf_bytes: bytes, overlay_bytes: bytes, page_index: int = 0) -> bytes:
    """Merge a single-page overlay onto one page of a PDF, keeping every page."""
    base_reader = _reader(base_pdf_bytes)
    overlay_reader = _reader(overlay_bytes)

    writer = PdfWriter()
    for index, page in enumerate(base_reader.pages):
        if index == page_index:
            page.merge_page(overlay_reader.pages[0])
        writer.add_page(page)

    output = io.BytesIO()
    writer.write(output)
    return output.getvalue()


# ========= FORM FILLING =========
def fill_form_fields(pdf_bytes: bytes, values: Dict[str, str]) -> bytes:
    """
    Fill AcroForm text fields by name.

    Args:
        pdf_bytes: PDF with an AcroForm
        values: Field name -> value

    Returns:
        The filled PDF bytes
    """
    writer = PdfWriter(clone_from=_reader(pdf_bytes))
    for page in writer.pages:
        if "/Annots" in page:
            writer.update_page_form_field_values(page, values, auto_regenerate=False)
    writer.set_need_appearances_writer(True)

    output = io.BytesIO()
    writer.write(output)
    return output.getvalue()
