"""Request/response schemas for boards, lists and cards."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class BoardRequest(BaseModel):
    """Board data sent on create and update; a changed team_id moves the board."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str = Field(default="", max_length=10_000)
    team_id: int


class BoardResponse(BaseModel):
    """Board returned to clients."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str
    team_id: int


class ListRequest(BaseModel):
    """List data sent on create and update; a changed board_id moves the list."""

    name: str = Field(..., min_length=1, max_length=255)
    priority: int = 0
    board_id: int


class ListBatchItem(BaseModel):
    """One list within a batch update (e.g. a reorder)."""

    id: int
    name: str = Field(..., min_length=1, max_length=255)
    priority: int = 0


class ListBatchRequest(BaseModel):
    """Several lists under one board updated together."""

    board_id: int
    lists: list[ListBatchItem]


class ListResponse(BaseModel):
    """List returned to clients."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    priority: int
    board_id: int


class CardRequest(BaseModel):
    """Card data sent on create and update; a changed list_id moves the card."""

    title: str = Field(..., min_length=1, max_length=500)
    description: str = Field(default="", max_length=10_000)
    due_date: datetime | None = None
    priority: int = 0
    list_id: int


class CardBatchItem(CardRequest):
    """One card within a batch update (e.g. a reorder across lists)."""

    id: int


class CardBatchRequest(BaseModel):
    """Several cards updated together."""

    cards: list[CardBatchItem]


class CardResponse(BaseModel):
    """Card returned to clients."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    due_date: datetime | None = None
    priority: int
    list_id: int
