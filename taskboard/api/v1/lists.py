"""List endpoints, including the batch update used for reordering."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from taskboard.api.v1.auth import get_current_principal
from taskboard.api.v1.paging import PageParams, page_params
from taskboard.core.database import get_db
from taskboard.schemas.auth import Principal
from taskboard.schemas.boards import ListBatchRequest, ListRequest, ListResponse
from taskboard.schemas.common import Page
from taskboard.services import lists as list_service

router = APIRouter()


@router.post("", response_model=ListResponse)
def create_list(
    body: ListRequest,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Annotated[Session, Depends(get_db)],
) -> ListResponse:
    board_list = list_service.create_list(db, principal, body.name, body.priority, body.board_id)
    return ListResponse.model_validate(board_list)


@router.get("", response_model=Page[ListResponse])
def list_lists(
    board_id: Annotated[int, Query(description="Board whose lists to return")],
    paging: Annotated[PageParams, Depends(page_params)],
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Annotated[Session, Depends(get_db)],
) -> Page[ListResponse]:
    """Lists of a board ordered by priority."""
    lists, total = list_service.list_lists_under_board(
        db, principal, board_id, paging.page, paging.size
    )
    return Page[ListResponse](
        items=[ListResponse.model_validate(lst) for lst in lists],
        total=total,
        page=paging.page,
        size=paging.size,
    )


@router.put("", response_model=list[ListResponse])
def update_lists(
    body: ListBatchRequest,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Annotated[Session, Depends(get_db)],
) -> list[ListResponse]:
    """Update several lists of one board at once; all or nothing."""
    lists = list_service.update_lists(db, principal, body.board_id, body.lists)
    return [ListResponse.model_validate(lst) for lst in lists]


@router.get("/{list_id}", response_model=ListResponse)
def get_list(
    list_id: int,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Annotated[Session, Depends(get_db)],
) -> ListResponse:
    return ListResponse.model_validate(list_service.get_list(db, principal, list_id))


@router.put("/{list_id}", response_model=ListResponse)
def update_list(
    list_id: int,
    body: ListRequest,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Annotated[Session, Depends(get_db)],
) -> ListResponse:
    board_list = list_service.update_list(
        db, principal, list_id, body.name, body.priority, body.board_id
    )
    return ListResponse.model_validate(board_list)


@router.delete("/{list_id}", status_code=status.HTTP_204_NO_CONTENT)
def retire_list(
    list_id: int,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Annotated[Session, Depends(get_db)],
) -> Response:
    list_service.retire_list(db, principal, list_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
