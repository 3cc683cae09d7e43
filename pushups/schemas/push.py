"""Request/response schemas for submitting pushups and per-user views."""

from typing import Any

from pydantic import BaseModel, Field


class PushRequest(BaseModel):
    """
    Submission body. Fields are untyped: credential and count errors map to
    403/400 in the service layer rather than a schema 422.
    """

    person: Any = None
    count: Any = None
    secret: Any = None


class PushResponse(BaseModel):
    total: int = Field(..., ge=0, description="All-time total after this entry")
    challenge_total: int = Field(..., ge=0, description="Total inside the challenge window")
    counts_for_challenge: bool = Field(
        ..., description="Whether today falls inside the challenge window"
    )


class HistoryItem(BaseModel):
    count: int
    created_at: str = Field(..., description="Stored timestamp, YYYY-MM-DD HH:MM:SS (UTC)")

    class Config:
        from_attributes = True


class AdminInfoResponse(BaseModel):
    person: str
    total: int
    challenge_total: int
