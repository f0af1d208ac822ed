import html
import json
from typing import Any, Dict

from fastapi import FastAPI, Body
from fastapi.responses import HTMLResponse, JSONResponse, Response

from api.certificate import build_certificate_from_payload
from calendar_utils import greeting_for_time
from config import DEFAULT_USER, OUTPUT_FILENAME
from make_certificate import DOCUMENTS
from users import UserNotFoundError, load_user


app = FastAPI()


def _js_string(value: str) -> str:
    """A JavaScript string literal that is safe inside a <script> block."""
    return json.dumps(value).replace("<", "\\u003c").replace(">", "\\u003e")


def render_documents_page(user_name: str) -> str:
    """HTML page greeting the user and listing the downloadable documents."""
    try:
        first_name = load_user(user_name)["firstName"]
    except UserNotFoundError:
        first_name = "..."

    cards = "\n".join([
        f'    <div class="document-card" data-id="{doc["id"]}" onclick="download()">'
        f'<h3>{html.escape(doc["title"])}</h3><p>{html.escape(doc["description"])}</p></div>'
        for doc in DOCUMENTS
    ])

    html_template = """<!DOCTYPE html>
<html lang="he" dir="rtl">
<head>
  <meta charset="UTF-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1.0" />
  <title>האישורים שלי</title>
  <style>
    body { font-family: system-ui, sans-serif; margin: 0; background: #ffffff; }
    header { padding: 12px 16px; border-bottom: 1px solid #e5e7eb; text-align: center; }
    .document-card { margin: 16px; padding: 20px; border-radius: 12px; box-shadow: 0 1px 3px rgba(0,0,0,0.1); cursor: pointer; }
    .document-card h3 { margin: 0 0 8px 0; font-size: 16px; }
    .document-card p { margin: 0; font-size: 14px; color: #4b5563; }
  </style>
</head>
<body>
  <header>GREETING_PLACEHOLDER</header>
DOCUMENT_CARDS_PLACEHOLDER
  <script>
    async function download() {
      try {
        const res = await fetch("/certificate", {
          method: "POST",
          headers: {"Content-Type": "application/json"},
          body: JSON.stringify({user: USER_PLACEHOLDER})
        });
        if (!res.ok) throw new Error(await res.text());
        const blob = await res.blob();
        const link = document.createElement("a");
        link.href = URL.createObjectURL(blob);
        link.download = FILENAME_PLACEHOLDER;
        document.body.appendChild(link);
        link.click();
        document.body.removeChild(link);
        URL.revokeObjectURL(link.href);
      } catch (err) {
        alert("שגיאה ביצירת ה-PDF: " + err.message);
      }
    }
  </script>
</body>
</html>
"""

    # Using placeholders to avoid f-string issues with CSS braces
    greeting = html.escape(f"{greeting_for_time()} {first_name}")
    return (
        html_template
        .replace("GREETING_PLACEHOLDER", greeting)
        .replace("DOCUMENT_CARDS_PLACEHOLDER", cards)
        .replace("USER_PLACEHOLDER", _js_string(user_name))
        .replace("FILENAME_PLACEHOLDER", _js_string(OUTPUT_FILENAME))
    )


@app.get("/", response_class=HTMLResponse)
async def index():
    return render_documents_page(DEFAULT_USER)


@app.get("/documents")
async def documents():
    """The documents offered for download."""
    return DOCUMENTS


@app.get("/users/{user_name}")
async def user_info(user_name: str):
    """User details together with the greeting for the current Israel time."""
    try:
        user = load_user(user_name)
    except UserNotFoundError as e:
        return JSONResponse(status_code=404, content={"error": str(e)})
    return {**user, "greeting": greeting_for_time()}


@app.post("/certificate")
async def create_certificate(payload: Dict[str, Any] = Body(default={})):
    """
    FastAPI endpoint that:
    - Receives JSON payload (see build_certificate_from_payload)
    - Returns the filled certificate as an application/pdf download
    """
    if payload is None:
        payload = {}

    try:
        pdf_bytes = build_certificate_from_payload(payload)
    except UserNotFoundError as e:
        return Response(content=str(e), status_code=404, media_type="text/plain")
    except ValueError as e:
        return Response(content=f"Invalid request: {e}", status_code=400, media_type="text/plain")
    except RuntimeError as e:
        return Response(content=f"Internal Server Error: {e}", status_code=500, media_type="text/plain")

    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{OUTPUT_FILENAME}"'},
    )


# Keep last: matches any single path segment
@app.get("/{user_name}", response_class=HTMLResponse)
async def user_page(user_name: str):
    return render_documents_page(user_name)
