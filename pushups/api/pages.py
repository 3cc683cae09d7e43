"""HTML pages: the public odometer board and the per-user admin page behind a secret link."""

import json
from pathlib import Path
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import FileResponse, HTMLResponse
from sqlalchemy.orm import Session

from pushups.core.database import get_db
from pushups.services.challenge import get_window
from pushups.services.totals import user_challenge_total
from pushups.services.users import find_by_secret

STATIC_DIR = Path(__file__).resolve().parent.parent / "static"

router = APIRouter()


def inject_user_context(html: str, context: dict) -> str:
    """Insert `window.__USER__ = {...}` right before </head>."""
    payload = json.dumps(context).replace("</", "<\\/")
    return html.replace(
        "</head>",
        f"<script>window.__USER__ = {payload};</script>\n</head>",
        1,
    )


@router.get("/", include_in_schema=False)
def odometer_page() -> FileResponse:
    return FileResponse(STATIC_DIR / "index.html", media_type="text/html")


@router.get("/{secret}", response_class=HTMLResponse, include_in_schema=False)
def admin_page(secret: str, db: Annotated[Session, Depends(get_db)]) -> HTMLResponse:
    user = find_by_secret(db, secret)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")
    total = user_challenge_total(db, user, get_window(db))
    html = (STATIC_DIR / "admin.html").read_text(encoding="utf-8")
    return HTMLResponse(
        inject_user_context(html, {"person": user.name, "total": total, "secret": secret})
    )
