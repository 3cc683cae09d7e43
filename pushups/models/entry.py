"""ORM model for submitted pushup counts (append-only)."""

from sqlalchemy import Column, ForeignKey, Integer, func
from sqlalchemy.dialects.sqlite import DATETIME

from pushups.models.base import Base

# Same text form as SQLite's CURRENT_TIMESTAMP, whole seconds.
TIMESTAMP_FORMAT = "%(year)04d-%(month)02d-%(day)02d %(hour)02d:%(minute)02d:%(second)02d"


class PushupEntry(Base):
    """
    One accepted submission. Never updated or deleted by the application.

    user_id is not enforced: removing a user leaves its entries in place.
    """

    __tablename__ = "pushup_entries"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    count = Column(Integer, nullable=False)
    created_at = Column(
        DATETIME(storage_format=TIMESTAMP_FORMAT),
        server_default=func.current_timestamp(),
    )
