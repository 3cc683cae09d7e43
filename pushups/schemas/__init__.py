"""Pydantic request/response schemas."""

from pushups.schemas.challenge import ChallengeResponse, RabbitInfo
from pushups.schemas.health import HealthResponse
from pushups.schemas.push import (
    AdminInfoResponse,
    HistoryItem,
    PushRequest,
    PushResponse,
)

__all__ = [
    "AdminInfoResponse",
    "ChallengeResponse",
    "HealthResponse",
    "HistoryItem",
    "PushRequest",
    "PushResponse",
    "RabbitInfo",
]
