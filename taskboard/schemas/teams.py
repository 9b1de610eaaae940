"""Request/response schemas for teams and team membership."""

from pydantic import BaseModel, ConfigDict, Field


class TeamRequest(BaseModel):
    """Team data sent on create and update."""

    name: str = Field(..., min_length=1, max_length=255)


class TeamResponse(BaseModel):
    """Team returned to clients."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class TeamMembersRequest(BaseModel):
    """Users to add to or remove from a team, by registered email address."""

    members: list[str] = Field(..., min_length=1)
