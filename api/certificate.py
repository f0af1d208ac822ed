import json
import os
import sys
from http.server import BaseHTTPRequestHandler

# Add parent directory to path for Vercel serverless environment
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from datetime import date
from typing import Any, Dict, Optional

from config import DEFAULT_USER, OUTPUT_FILENAME
from make_certificate import generate_certificate
from users import USER_FIELDS, UserNotFoundError, load_user, user_from_fields


def build_certificate_from_payload(payload: Dict[str, Any]) -> bytes:
    """
    Pure logic function that:
    - Receives a dict representing the JSON payload of a request
    - Returns PDF bytes for the filled certificate.

    Expected payload structure (all fields optional):
    {
      "user": "shaked",               # user record name (default: config.DEFAULT_USER)
      "firstName": "...",             # inline details; override the user record
      "lastName": "...",
      "privateNumber": "...",
      "idNumber": "...",
      "date": "YYYY-MM-DD"            # issue date (default: today)
    }

    When no "user" is given but all four inline details are, no user record is read.

    Raises:
        UserNotFoundError: If the requested user has no record
        ValueError: If "date" is not an ISO date
    """
    user_name: Optional[str] = payload.get("user")
    inline = {key: payload[key] for key in USER_FIELDS if payload.get(key) is not None}

    if user_name is None and len(inline) == len(USER_FIELDS):
        user = user_from_fields(inline)
    else:
        user = load_user(user_name or DEFAULT_USER)
        user.update({key: str(value) for key, value in inline.items()})

    date_str: Optional[str] = payload.get("date")
    issue_date = date.fromisoformat(date_str) if date_str else None

    return generate_certificate(user=user, issue_date=issue_date)


# Vercel serverless function handler
class handler(BaseHTTPRequestHandler):
    """Vercel serverless function entrypoint for certificate generation."""

    def _send_text(self, status: int, message: str) -> None:
        body = message.encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", "text/plain; charset=utf-8")
        self.end_headers()
        self.wfile.write(body)

    def do_POST(self):
        """Handle POST request to generate a certificate."""
        try:
            # Read request body
            content_length = int(self.headers.get("Content-Length", 0))
            body = self.rfile.read(content_length) if content_length > 0 else b""

            # Parse JSON payload
            payload = json.loads(body.decode("utf-8")) if body else {}

            pdf_bytes = build_certificate_from_payload(payload)

            # Send successful response
            self.send_response(200)
            self.send_header("Content-Type", "application/pdf")
            self.send_header("Content-Disposition", f'attachment; filename="{OUTPUT_FILENAME}"')
            self.send_header("Content-Length", str(len(pdf_bytes)))
            self.end_headers()
            self.wfile.write(pdf_bytes)

        except json.JSONDecodeError as e:
            self._send_text(400, f"Invalid JSON: {e}")

        except UserNotFoundError as e:
            self._send_text(404, str(e))

        except ValueError as e:
            self._send_text(400, f"Invalid request: {e}")

        except Exception as e:
            self._send_text(500, f"Internal Server Error: {e}")

    def do_OPTIONS(self):
        """Handle CORS preflight requests."""
        self.send_response(200)
        self.send_header("Access-Control-Allow-Origin", "*")
        self.send_header("Access-Control-Allow-Methods", "POST, OPTIONS")
        self.send_header("Access-Control-Allow-Headers", "Content-Type")
        self.end_headers()
