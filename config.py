"""
Configuration module for the reserve-service certificate generator.

This module centralizes all configuration values and supports environment variable overrides.
Coordinates of the overlay live in make_certificate.py; everything that depends on the
deployment (asset locations, font, timezone, file names) lives here.
"""

import os

_BASE_DIR = os.path.dirname(os.path.abspath(__file__))
_ASSETS_DIR = os.path.join(_BASE_DIR, "assets")

# ========= TEMPLATE CONFIGURATION =========

# Local path or http(s) URL of the certificate template
TEMPLATE_PATH = os.getenv(
    "TEMPLATE_PATH",
    os.path.join(_ASSETS_DIR, "PDF Approval Document.pdf"),
)

# ========= FONT CONFIGURATION =========

FONT_PATH = os.getenv("FONT_PATH", os.path.join(_ASSETS_DIR, "DavidLibre-Regular.ttf"))
FONT_NAME = os.getenv("FONT_NAME", "DavidLibre")
FALLBACK_FONT = os.getenv("FALLBACK_FONT", "Helvetica")


def _get_font_size() -> float:
    """Get overlay font size from environment or use default."""
    return float(os.getenv("FONT_SIZE", "11"))


FONT_SIZE = _get_font_size()
TEXT_COLOR = (0, 0, 0)

# ========= USERS CONFIGURATION =========

USERS_DIR = os.getenv("USERS_DIR", os.path.join(_ASSETS_DIR, "users"))
DEFAULT_USER = os.getenv("DEFAULT_USER", "example")

# ========= DATES CONFIGURATION =========

TZID = os.getenv("TZID", "Asia/Jerusalem")
BEGINNING_DAYS_AGO = int(os.getenv("BEGINNING_DAYS_AGO", "6"))  # Service start, relative to issue date

# ========= OUTPUT CONFIGURATION =========

OUTPUT_FILENAME = os.getenv("OUTPUT_FILENAME", "Attachment.pdf")  # Download name in the web flow
OUTPUT_PATH = os.getenv("OUTPUT_PATH", "output-filled.pdf")  # CLI default

# ========= API TIMEOUT CONFIGURATION =========

API_TIMEOUT = int(os.getenv("API_TIMEOUT", "30"))  # Timeout in seconds for asset downloads
