"""SQLAlchemy ORM models."""

from pushups.models.base import Base
from pushups.models.entry import PushupEntry
from pushups.models.setting import Setting
from pushups.models.user import User

__all__ = ["Base", "PushupEntry", "Setting", "User"]
