"""Read-only aggregation over pushup entries: all-time totals, challenge totals, history."""

from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import String, and_, func, select, type_coerce
from sqlalchemy.orm import Session

from pushups.models import PushupEntry, User
from pushups.services.challenge import ChallengeWindow, get_window
from pushups.services.dates import utcnow, window_bounds
from pushups.services.pacer import virtual_total

DEFAULT_HISTORY_LIMIT = 10

_SQLITE_DATETIME = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class HistoryEntry:
    """created_at is the stored text, e.g. "2025-03-16 08:30:00"."""

    count: int
    created_at: str


def _in_range(lo: datetime, hi: datetime):
    """Half-open [lo, hi) filter on created_at, compared at whole-second precision."""
    created = func.substr(PushupEntry.created_at, 1, 19)
    return and_(
        created >= lo.strftime(_SQLITE_DATETIME),
        created < hi.strftime(_SQLITE_DATETIME),
    )


def _totals_by_user(db: Session, window: ChallengeWindow | None) -> list[tuple[User, int]]:
    join_on = PushupEntry.user_id == User.id
    if window is not None:
        join_on = and_(join_on, _in_range(*window_bounds(window.start, window.end)))
    stmt = (
        select(User, func.coalesce(func.sum(PushupEntry.count), 0))
        .outerjoin(PushupEntry, join_on)
        .group_by(User.id)
        .order_by(User.name)
    )
    return [(user, int(total)) for user, total in db.execute(stmt).all()]


def all_time_totals(db: Session) -> dict[str, int]:
    """Sum of every entry per existing user, name-ordered; users without entries report 0."""
    return {user.name: total for user, total in _totals_by_user(db, None)}


def rabbit_total(
    user: User,
    window: ChallengeWindow | None,
    interval_minutes: float,
    now: datetime | None = None,
) -> int:
    """Paced virtual total for a rabbit; 0 when no challenge window is set."""
    if window is None:
        return 0
    start, end = window_bounds(window.start, window.end)
    return virtual_total(user.rabbit_target or 0, interval_minutes, start, end, now or utcnow())


def challenge_totals(
    db: Session,
    interval_minutes: float,
    now: datetime | None = None,
) -> dict[str, int]:
    """
    Per-user totals for the active challenge, name-ordered.

    Real users sum entries inside the window (end day inclusive). Rabbits never
    sum entries; they report the pacer's value. Without a window, real users
    report all-time totals.
    """
    now = now or utcnow()
    window = get_window(db)
    totals: dict[str, int] = {}
    for user, total in _totals_by_user(db, window):
        if user.is_rabbit:
            totals[user.name] = rabbit_total(user, window, interval_minutes, now)
        else:
            totals[user.name] = total
    return totals


def user_total(db: Session, user: User) -> int:
    """All-time total for one user."""
    stmt = select(func.coalesce(func.sum(PushupEntry.count), 0)).where(
        PushupEntry.user_id == user.id
    )
    return int(db.execute(stmt).scalar_one())


def user_challenge_total(db: Session, user: User, window: ChallengeWindow | None) -> int:
    """Windowed total for one real user; all-time when no window is set."""
    if window is None:
        return user_total(db, user)
    stmt = select(func.coalesce(func.sum(PushupEntry.count), 0)).where(
        PushupEntry.user_id == user.id,
        _in_range(*window_bounds(window.start, window.end)),
    )
    return int(db.execute(stmt).scalar_one())


def history(db: Session, user: User, limit: int = DEFAULT_HISTORY_LIMIT) -> list[HistoryEntry]:
    """Most recent entries first; same-timestamp entries ordered by newest insertion."""
    stmt = (
        select(PushupEntry.count, type_coerce(PushupEntry.created_at, String))
        .where(PushupEntry.user_id == user.id)
        .order_by(PushupEntry.created_at.desc(), PushupEntry.id.desc())
        .limit(limit)
    )
    return [
        HistoryEntry(count=count, created_at=created_at)
        for count, created_at in db.execute(stmt).all()
    ]
