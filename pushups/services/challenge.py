"""Settings store and the challenge window derived from it."""

import logging
import re
from dataclasses import dataclass
from datetime import date

from sqlalchemy.orm import Session

from pushups.models import Setting
from pushups.models.setting import (
    CHALLENGE_END,
    CHALLENGE_GOAL,
    CHALLENGE_START,
    CHALLENGE_TITLE,
)
from pushups.services.dates import parse_iso_date
from pushups.services.errors import ValidationError

logger = logging.getLogger(__name__)

_DIGITS_RE = re.compile(r"^[0-9]+$")


@dataclass(frozen=True)
class ChallengeWindow:
    """Inclusive date range; the end date covers its whole calendar day."""

    start: date
    end: date

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


@dataclass(frozen=True)
class Challenge:
    """Challenge settings as stored; None means unset."""

    start: str | None
    end: str | None
    title: str | None
    goal: int | None


def get_setting(db: Session, key: str) -> str | None:
    """Stored value for key, or None when the key is absent."""
    row = db.get(Setting, key)
    return None if row is None else row.value


def set_setting(db: Session, key: str, value: str) -> None:
    row = db.get(Setting, key)
    if row is None:
        db.add(Setting(key=key, value=value))
    else:
        row.value = value


def delete_setting(db: Session, key: str) -> bool:
    """Remove key; returns False when it was not set."""
    row = db.get(Setting, key)
    if row is None:
        return False
    db.delete(row)
    return True


def _parse_goal(raw: str | None) -> int | None:
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring malformed challenge_goal setting: %r", raw)
        return None


def get_challenge(db: Session) -> Challenge:
    return Challenge(
        start=get_setting(db, CHALLENGE_START),
        end=get_setting(db, CHALLENGE_END),
        title=get_setting(db, CHALLENGE_TITLE),
        goal=_parse_goal(get_setting(db, CHALLENGE_GOAL)),
    )


def get_window(db: Session) -> ChallengeWindow | None:
    """Active challenge window, or None when start or end is unset or malformed."""
    start = get_setting(db, CHALLENGE_START)
    end = get_setting(db, CHALLENGE_END)
    if start is None or end is None:
        return None
    try:
        return ChallengeWindow(start=date.fromisoformat(start), end=date.fromisoformat(end))
    except ValueError:
        logger.warning("Ignoring malformed challenge dates: start=%r end=%r", start, end)
        return None


def set_challenge(db: Session, start: str, end: str) -> ChallengeWindow:
    """Validate and store challenge dates (YYYY-MM-DD, start strictly before end)."""
    start_date = parse_iso_date(start, "start")
    end_date = parse_iso_date(end, "end")
    if start_date >= end_date:
        raise ValidationError("start must be before end")
    set_setting(db, CHALLENGE_START, start_date.isoformat())
    set_setting(db, CHALLENGE_END, end_date.isoformat())
    db.commit()
    logger.info("Challenge set: %s .. %s", start_date, end_date)
    return ChallengeWindow(start=start_date, end=end_date)


def clear_challenge(db: Session) -> None:
    delete_setting(db, CHALLENGE_START)
    delete_setting(db, CHALLENGE_END)
    db.commit()
    logger.info("Challenge dates cleared")


def set_title(db: Session, title: str | None) -> None:
    """Store the title; None or blank clears it."""
    if title is None or not title.strip():
        delete_setting(db, CHALLENGE_TITLE)
    else:
        set_setting(db, CHALLENGE_TITLE, title.strip())
    db.commit()


def parse_positive_int(value: object, field: str) -> int:
    """Accept positive ints or their decimal string form."""
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a positive integer")
    if isinstance(value, int):
        number = value
    elif isinstance(value, str) and _DIGITS_RE.match(value.strip()):
        number = int(value.strip())
    else:
        raise ValidationError(f"{field} must be a positive integer")
    if number < 1:
        raise ValidationError(f"{field} must be a positive integer")
    return number


def set_goal(db: Session, goal: object) -> int:
    number = parse_positive_int(goal, "goal")
    set_setting(db, CHALLENGE_GOAL, str(number))
    db.commit()
    return number


def clear_goal(db: Session) -> None:
    delete_setting(db, CHALLENGE_GOAL)
    db.commit()
