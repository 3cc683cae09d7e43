"""User administration and lookups by name or secret."""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from pushups.models import User
from pushups.services.challenge import parse_positive_int
from pushups.services.errors import NotFoundError, UniquenessError, ValidationError

logger = logging.getLogger(__name__)


def normalize_name(name: str) -> str:
    return name.strip().lower()


def find_by_secret(db: Session, secret: str | None) -> User | None:
    if not secret:
        return None
    return db.execute(select(User).where(User.secret == secret)).scalar_one_or_none()


def find_by_name(db: Session, name: str) -> User | None:
    return db.execute(
        select(User).where(User.name == normalize_name(name))
    ).scalar_one_or_none()


def authenticate(db: Session, name: object, secret: object) -> User | None:
    """User matching both name and secret exactly, or None."""
    if not isinstance(name, str) or not isinstance(secret, str) or not name or not secret:
        return None
    return db.execute(
        select(User).where(User.name == normalize_name(name), User.secret == secret)
    ).scalar_one_or_none()


def _get_existing(db: Session, name: str) -> User:
    user = find_by_name(db, name)
    if user is None:
        raise NotFoundError(f"User {normalize_name(name)} not found.")
    return user


def add_user(db: Session, name: str, secret: str) -> User:
    """Create a participant; names are stored lowercase."""
    normalized = normalize_name(name)
    if not normalized:
        raise ValidationError("Name must not be empty.")
    if not secret or not secret.strip():
        raise ValidationError("Secret must not be empty.")
    user = User(name=normalized, secret=secret.strip(), is_rabbit=False, rabbit_target=0)
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise UniquenessError("User or secret already exists.") from e
    logger.info("Added user %s", normalized)
    return user


def list_users(db: Session) -> list[User]:
    return list(db.execute(select(User).order_by(User.name)).scalars())


def remove_user(db: Session, name: str) -> None:
    """Delete a user. Entries are kept and become unreachable by name."""
    user = _get_existing(db, name)
    db.delete(user)
    db.commit()
    logger.info("Removed user %s; pushup history kept", user.name)


def set_rabbit(db: Session, name: str, target: object) -> User:
    """Flag a user as a rabbit pacer aiming at target by the end of the challenge."""
    number = parse_positive_int(target, "target")
    user = _get_existing(db, name)
    user.is_rabbit = True
    user.rabbit_target = number
    db.commit()
    logger.info("User %s is now a rabbit with target %s", user.name, number)
    return user


def unset_rabbit(db: Session, name: str) -> User:
    user = _get_existing(db, name)
    user.is_rabbit = False
    user.rabbit_target = 0
    db.commit()
    logger.info("User %s is no longer a rabbit", user.name)
    return user
