"""Public read endpoints: challenge settings and leaderboard totals."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.orm import Session

from pushups.core.config import Settings, get_settings
from pushups.core.database import get_db
from pushups.models import User
from pushups.schemas.challenge import ChallengeResponse, RabbitInfo
from pushups.services.challenge import get_challenge
from pushups.services.totals import all_time_totals, challenge_totals

router = APIRouter()


@router.get(
    "/challenge",
    response_model=ChallengeResponse,
    response_model_exclude_none=True,
)
def read_challenge(db: Annotated[Session, Depends(get_db)]) -> ChallengeResponse:
    """Challenge dates plus title, goal and rabbits when configured."""
    challenge = get_challenge(db)
    rabbits = db.execute(
        select(User).where(User.is_rabbit.is_(True)).order_by(User.name)
    ).scalars().all()
    return ChallengeResponse(
        start=challenge.start,
        end=challenge.end,
        title=challenge.title,
        goal=challenge.goal,
        rabbits=[RabbitInfo(name=r.name, target=r.rabbit_target) for r in rabbits] or None,
    )


@router.get("/challenge/totals", response_model=dict[str, int])
def read_challenge_totals(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> dict[str, int]:
    """Totals inside the challenge window, keyed by name; rabbits are paced."""
    return challenge_totals(db, interval_minutes=settings.RABBIT_INTERVAL_MINUTES)


@router.get("/totals", response_model=dict[str, int])
def read_totals(db: Annotated[Session, Depends(get_db)]) -> dict[str, int]:
    """All-time totals keyed by name."""
    return all_time_totals(db)
