"""Query parameters shared by paginated listing endpoints."""

from dataclasses import dataclass
from typing import Annotated

from fastapi import Query

from taskboard.services.pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE


@dataclass(frozen=True)
class PageParams:
    page: int
    size: int


def page_params(
    page: Annotated[int, Query(ge=0, description="Zero-based page number")] = 0,
    size: Annotated[int, Query(ge=1, le=MAX_PAGE_SIZE, description="Items per page")] = DEFAULT_PAGE_SIZE,
) -> PageParams:
    return PageParams(page=page, size=size)
