"""ORM model for participants and rabbit pacers."""

from sqlalchemy import Boolean, Column, Integer, String

from pushups.models.base import Base


class User(Base):
    """
    Participant identified by a lowercase name and an opaque secret link token.

    is_rabbit: synthetic pacer whose challenge total is computed, not summed.
    rabbit_target: virtual total a rabbit reaches at the end of the challenge.
    """

    __tablename__ = "users"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False, unique=True)
    secret = Column(String, nullable=False, unique=True)
    is_rabbit = Column(Boolean, nullable=False, default=False)
    rabbit_target = Column(Integer, nullable=False, default=0)
