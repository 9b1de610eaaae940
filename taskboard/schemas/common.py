"""Shared response envelopes: error body and paginated listings."""

from datetime import UTC, datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ErrorResponse(BaseModel):
    """Error body: stable machine-readable code plus a human-readable description."""

    error_code: str = Field(..., description="Stable error code (e.g. L1000)")
    error_description: str = Field(..., description="What went wrong and how to fix it")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))


class Page(BaseModel, Generic[T]):
    """One page of a listing."""

    items: list[T]
    total: int = Field(..., ge=0, description="Total matching items across all pages")
    page: int = Field(..., ge=0)
    size: int = Field(..., ge=1)
