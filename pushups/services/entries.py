"""Submitting pushup entries: authenticate, validate, append."""

import logging
import re
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.orm import Session

from pushups.models import PushupEntry
from pushups.services.challenge import get_window
from pushups.services.dates import utcnow
from pushups.services.errors import AuthorizationError, ValidationError
from pushups.services.totals import user_challenge_total, user_total
from pushups.services.users import authenticate

logger = logging.getLogger(__name__)

MIN_COUNT = 1
MAX_COUNT = 250

_INT_RE = re.compile(r"^[+-]?[0-9]+$")


@dataclass(frozen=True)
class SubmitResult:
    total: int
    challenge_total: int
    counts_for_challenge: bool


def parse_count(value: object) -> int:
    """Accept an integer, an integral float or a decimal string within [MIN_COUNT, MAX_COUNT]."""
    message = f"Count must be {MIN_COUNT}-{MAX_COUNT}"
    if isinstance(value, bool):
        raise ValidationError(message)
    if isinstance(value, int):
        number = value
    elif isinstance(value, float) and value.is_integer():
        number = int(value)
    elif isinstance(value, str) and _INT_RE.match(value.strip()):
        number = int(value.strip())
    else:
        raise ValidationError(message)
    if not MIN_COUNT <= number <= MAX_COUNT:
        raise ValidationError(message)
    return number


def submit_entry(
    db: Session,
    name: object,
    count: object,
    secret: object,
    now: datetime | None = None,
) -> SubmitResult:
    """
    Append one entry for the user matching (name, secret) and return fresh totals.

    Authorization is checked before the count so a bad secret never reveals
    anything about the input. Rabbits are pacers and cannot submit.
    """
    user = authenticate(db, name, secret)
    if user is None or user.is_rabbit:
        raise AuthorizationError("Forbidden")
    number = parse_count(count)

    now = (now or utcnow()).replace(microsecond=0)
    db.add(PushupEntry(user_id=user.id, count=number, created_at=now))
    db.commit()
    logger.info("Recorded %s pushups for %s", number, user.name)

    window = get_window(db)
    return SubmitResult(
        total=user_total(db, user),
        challenge_total=user_challenge_total(db, user, window),
        counts_for_challenge=window is not None and window.contains(now.date()),
    )
