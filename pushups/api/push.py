"""Secret-authenticated endpoints: submit pushups, history, admin info."""

import json
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from pushups.core.config import Settings, get_settings
from pushups.core.database import get_db
from pushups.models import User
from pushups.schemas.push import AdminInfoResponse, HistoryItem, PushRequest, PushResponse
from pushups.services.challenge import get_window
from pushups.services.entries import submit_entry
from pushups.services.errors import AuthorizationError, ValidationError
from pushups.services.totals import history, user_challenge_total, user_total
from pushups.services.users import find_by_secret

router = APIRouter()


def _user_for_secret(db: Session, secret: str | None) -> User:
    user = find_by_secret(db, secret)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")
    return user


async def _read_push_body(request: Request) -> PushRequest:
    """Empty body means no credentials (403 later); malformed JSON is a 400 here."""
    raw = await request.body()
    if not raw.strip():
        return PushRequest()
    try:
        data = json.loads(raw)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid JSON body") from e
    if not isinstance(data, dict):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="JSON body must be an object with person, count and secret.",
        )
    return PushRequest.model_validate(data)


@router.post("/push", response_model=PushResponse)
def post_push(
    body: Annotated[PushRequest, Depends(_read_push_body)],
    db: Annotated[Session, Depends(get_db)],
) -> PushResponse:
    """
    Record a pushup count for `person`, authenticated by `secret`.

    403 when the name/secret pair does not match (including an empty body),
    400 when count is not an integer in 1-250 or the body is not a JSON object.
    """
    try:
        result = submit_entry(db, body.person, body.count, body.secret)
    except AuthorizationError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=e.message) from e
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
    return PushResponse(
        total=result.total,
        challenge_total=result.challenge_total,
        counts_for_challenge=result.counts_for_challenge,
    )


@router.get("/history", response_model=list[HistoryItem])
def read_history(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
    secret: str | None = None,
) -> list[HistoryItem]:
    """Most recent entries for the user owning `secret`, newest first."""
    user = _user_for_secret(db, secret)
    return [
        HistoryItem(count=e.count, created_at=e.created_at)
        for e in history(db, user, limit=settings.HISTORY_LIMIT)
    ]


@router.get("/admin-info", response_model=AdminInfoResponse)
def read_admin_info(
    db: Annotated[Session, Depends(get_db)],
    secret: str | None = None,
) -> AdminInfoResponse:
    """Name and totals for the user owning `secret`."""
    user = _user_for_secret(db, secret)
    return AdminInfoResponse(
        person=user.name,
        total=user_total(db, user),
        challenge_total=user_challenge_total(db, user, get_window(db)),
    )
