"""ORM model for process-wide key/value settings."""

from sqlalchemy import Column, Text

from pushups.models.base import Base

CHALLENGE_START = "challenge_start"
CHALLENGE_END = "challenge_end"
CHALLENGE_TITLE = "challenge_title"
CHALLENGE_GOAL = "challenge_goal"


class Setting(Base):
    """A missing row means the setting is unset; an empty value is a distinct state."""

    __tablename__ = "settings"

    key = Column(Text, primary_key=True)
    value = Column(Text)
