"""Response schemas for the challenge endpoints."""

from pydantic import BaseModel, Field


class RabbitInfo(BaseModel):
    """A pacer shown on the board."""

    name: str
    target: int = Field(..., ge=0, description="Virtual total reached at challenge end")


class ChallengeResponse(BaseModel):
    """Challenge settings; unset optional fields are omitted from the payload."""

    start: str | None = Field(default=None, description="First day, YYYY-MM-DD")
    end: str | None = Field(default=None, description="Last day (inclusive), YYYY-MM-DD")
    title: str | None = None
    goal: int | None = Field(default=None, ge=1)
    rabbits: list[RabbitInfo] | None = None
