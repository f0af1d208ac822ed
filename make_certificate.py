"""
Reserve-Service Certificate Generator

This module fills the reserve-service approval template with a user's details and
the issue dates. It uses the jewcal library for the Hebrew calendar date, reportlab
for drawing the text overlay and pypdf for merging it onto the template.

Templates that carry AcroForm fields are filled through the form instead of an overlay.
"""

import argparse
import json
import os
from datetime import date
from typing import Any, Dict, Iterable, List, Optional

from calendar_utils import days_ago, format_gregorian_with_hebrew_month, format_numeric_date
from config import BEGINNING_DAYS_AGO, DEFAULT_USER, FONT_SIZE, OUTPUT_PATH, TEMPLATE_PATH, TEXT_COLOR
from hebrew_date import format_hebrew_date
from pdf_utils import (
    PdfFont,
    create_overlay,
    describe_template,
    fill_form_fields,
    get_page_size,
    list_form_fields,
    load_asset_bytes,
    load_font,
    merge_overlay,
)
from text_layout import DrawInstruction, fix_hebrew, layout_plain, layout_rtl
from users import UserDict, load_user, user_from_fields

# Type aliases for clarity
CertificateData = Dict[str, str]
OverlayField = Dict[str, Any]

# ========= OVERLAY LAYOUT =========
# Coordinates are PDF points from the bottom-left corner. "from_top" fields are
# placed at page_height - from_top.
# layout: "plain" draws the value as one run, "rtl" lays out its words right to left.
# shape: convert each drawn run to visual order (reportlab draws logical order).
CERTIFICATE_LAYOUT: List[OverlayField] = [
    {"field": "hebrewDate", "x": 40, "y": 788, "layout": "rtl", "shape": True},
    {"field": "englishDate", "x": 40, "y": 777, "layout": "rtl", "shape": True},
    {"field": "idNumber", "x": 75, "from_top": 195, "layout": "plain"},
    {"field": "firstName", "x": 225, "from_top": 195, "layout": "plain", "shape": True},
    {"field": "lastName", "x": 358, "from_top": 195, "layout": "plain", "shape": True},
    {"field": "privateNumber", "x": 480, "from_top": 195, "layout": "plain"},
    {"field": "beginningDate", "x": 315 + 5.7, "y": 584, "layout": "plain"},
]

# ========= FORM FIELD MAPPING =========
# (substrings of the AcroForm field name, data key); first matching rule wins
FORM_FIELD_RULES = [
    (("id", "ID"), "idNumber"),
    (("private", "personal"), "privateNumber"),
    (("date", "Date"), "beginningDate"),
]

# ========= DOCUMENT CATALOG =========
DOCUMENTS: List[Dict[str, Any]] = [
    {
        "id": 1,
        "title": 'שמ"פ חירום נוכחי',
        "description": "אישור על שירות מילואים על פי צו חירום",
        "icon": "document",
    },
    {
        "id": 2,
        "title": "טופס אישור שירות מילואים מזכה",
        "description": (
            "אישור זה מהווה אסמכתא למשרדי הממשלה ויחידות הסמך וכן למוסדות להשכלה גבוהה. "
            "האישור מציג את היקף ימי המילואים שבוצעו, לטובת מימוש זכאויות ייעודיות "
            "למשרתי המילואים שביצעו שירות מזכה."
        ),
        "icon": "logo",
    },
]


def build_certificate_data(user: UserDict, issue_date: Optional[date] = None) -> CertificateData:
    """
    Build the values printed on the certificate.

    Args:
        user: Dict with keys: firstName, lastName, privateNumber, idNumber
        issue_date: Date the certificate is issued (default: today)

    Returns:
        Dict with keys: hebrewDate, englishDate, idNumber, firstName, lastName,
        privateNumber, beginningDate
    """
    if issue_date is None:
        issue_date = date.today()

    return {
        "hebrewDate": format_hebrew_date(issue_date),
        "englishDate": format_gregorian_with_hebrew_month(issue_date),
        "idNumber": user.get("idNumber", ""),
        "firstName": user.get("firstName", ""),
        "lastName": user.get("lastName", ""),
        "privateNumber": user.get("privateNumber", ""),
        "beginningDate": format_numeric_date(days_ago(BEGINNING_DAYS_AGO, issue_date)),
    }


def field_y(item: OverlayField, page_height: float) -> float:
    """Baseline Y of an overlay field on a page of the given height."""
    if "from_top" in item:
        return page_height - item["from_top"]
    return item["y"]


def layout_overlay(
    data: CertificateData,
    font: PdfFont,
    page_height: float,
    layout: Iterable[OverlayField] = CERTIFICATE_LAYOUT,
    size: float = FONT_SIZE,
) -> List[DrawInstruction]:
    """
    Turn certificate data into draw instructions using the overlay description.

    Fields with no value are skipped.
    """
    instructions: List[DrawInstruction] = []

    for item in layout:
        value = data.get(item["field"], "")
        if not value:
            continue

        x = item["x"]
        y = field_y(item, page_height)
        field_size = item.get("size", size)

        if item.get("layout") == "rtl":
            runs = layout_rtl(value, x, y, font, field_size)
        else:
            runs = layout_plain(value, x, y, font, field_size)

        if item.get("shape"):
            runs = [run._replace(text=fix_hebrew(run.text)) for run in runs]

        instructions.extend(runs)

    return instructions


def render_overlay(
    template_bytes: bytes,
    data: CertificateData,
    font: PdfFont,
    layout: Iterable[OverlayField] = CERTIFICATE_LAYOUT,
    size: float = FONT_SIZE,
) -> bytes:
    """Draw certificate data on the first page of the template and return the PDF bytes."""
    page_size = get_page_size(template_bytes)
    instructions = layout_overlay(data, font, page_size[1], layout=layout, size=size)
    for instruction in instructions:
        print(f"  Drawing {instruction.text!r} at x={instruction.x:.1f}, y={instruction.y:.1f}")
    overlay = create_overlay(instructions, page_size, color=TEXT_COLOR)
    return merge_overlay(template_bytes, overlay)


def match_form_field(field_name: str) -> Optional[str]:
    """Data key for an AcroForm field name, or None if no rule matches."""
    for needles, key in FORM_FIELD_RULES:
        if any(needle in field_name for needle in needles):
            return key
    return None


def form_field_values(field_names: Iterable[str], data: CertificateData) -> Dict[str, str]:
    """Map AcroForm field names to certificate values (unmatched fields are left out)."""
    values = {}
    for name in field_names:
        key = match_form_field(name)
        if key is not None:
            values[name] = data[key]
    return values


def generate_certificate(
    *,
    user: UserDict,
    issue_date: Optional[date] = None,
    template_path: Optional[str] = None,
    font_path: Optional[str] = None,
) -> bytes:
    """
    Generate a filled certificate for one user.

    This is the main entry point for certificate generation. Templates with
    form fields are filled through the form; otherwise the data is drawn as a
    text overlay on the first page.

    Args:
        user: Dict with keys: firstName, lastName, privateNumber, idNumber
        issue_date: Date the certificate is issued (default: today)
        template_path: Template path or URL (default: config.TEMPLATE_PATH)
        font_path: TrueType font path or URL (default: config.FONT_PATH)

    Returns:
        PDF bytes ready to be saved or transmitted

    Raises:
        RuntimeError: If the template cannot be loaded or parsed
    """
    if template_path is None:
        template_path = TEMPLATE_PATH

    data = build_certificate_data(user, issue_date)
    template_bytes = load_asset_bytes(template_path, what="template")

    try:
        field_names = [field["name"] for field in list_form_fields(template_bytes)]
    except Exception as e:
        raise RuntimeError(f"Failed to parse template {template_path}: {e}") from e

    if field_names:
        print(f"Filling {len(field_names)} form fields")
        return fill_form_fields(template_bytes, form_field_values(field_names, data))

    font = load_font(font_path)
    return render_overlay(template_bytes, data, font)


def print_template_info(template_bytes: bytes) -> None:
    """Print a template's form fields, page sizes and fonts."""
    info = describe_template(template_bytes)

    print("=== FORM FIELDS FOUND ===")
    print(f"Total fields: {len(info['fields'])}")
    for index, field in enumerate(info["fields"], start=1):
        print(f'{index}. Name: "{field["name"]}", Type: {field["type"]}')

    print("\n=== PAGES INFO ===")
    print(f"Total pages: {len(info['pages'])}")
    for index, (width, height) in enumerate(info["pages"], start=1):
        print(f"Page {index}: {width} x {height}")

    print("\n=== FONTS IN DOCUMENT ===")
    if not info["fonts"]:
        print("No fonts found in document")
    for index, font in enumerate(info["fonts"], start=1):
        print(f"Font {index}: {font['base_font']} ({font['subtype']})")


def main():
    parser = argparse.ArgumentParser(description="Fill the reserve-service certificate template")
    parser.add_argument("--user", default=None, help=f"User record name (default: {DEFAULT_USER})")
    parser.add_argument("--users-dir", default=None, help="Directory of user JSON files")
    parser.add_argument("--first-name", default=None)
    parser.add_argument("--last-name", default=None)
    parser.add_argument("--id-number", default=None)
    parser.add_argument("--private-number", default=None)
    parser.add_argument("--date", default=None, help="Issue date YYYY-MM-DD, default is today")
    parser.add_argument("--template", default=TEMPLATE_PATH, help="Template PDF path or URL")
    parser.add_argument("--font", default=None, help="TrueType font path or URL")
    parser.add_argument("--out", default=OUTPUT_PATH, help="Output PDF path")
    parser.add_argument("--inspect", action="store_true", help="Print template fields, pages and fonts and exit")
    args = parser.parse_args()

    if args.inspect:
        print_template_info(load_asset_bytes(args.template, what="template"))
        return

    inline = {
        "firstName": args.first_name,
        "lastName": args.last_name,
        "idNumber": args.id_number,
        "privateNumber": args.private_number,
    }
    if args.user is None and any(v is not None for v in inline.values()):
        user = user_from_fields(inline)
    else:
        user = load_user(args.user or DEFAULT_USER, args.users_dir)
        user.update({k: v for k, v in inline.items() if v is not None})

    issue_date = date.fromisoformat(args.date) if args.date else date.today()
    data = build_certificate_data(user, issue_date)
    print("Data to fill:", json.dumps(data, ensure_ascii=False))

    pdf_bytes = generate_certificate(
        user=user,
        issue_date=issue_date,
        template_path=args.template,
        font_path=args.font,
    )

    out_dir = os.path.dirname(args.out)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    with open(args.out, "wb") as f:
        f.write(pdf_bytes)
    print(f"Generated file: {args.out} ({len(pdf_bytes)} bytes)")


if __name__ == "__main__":
    main()
