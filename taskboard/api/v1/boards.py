"""Board endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from taskboard.api.v1.auth import get_current_principal
from taskboard.api.v1.paging import PageParams, page_params
from taskboard.core.database import get_db
from taskboard.schemas.auth import Principal
from taskboard.schemas.boards import BoardRequest, BoardResponse
from taskboard.schemas.common import Page
from taskboard.services import boards as board_service

router = APIRouter()


@router.post("", response_model=BoardResponse)
def create_board(
    body: BoardRequest,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Annotated[Session, Depends(get_db)],
) -> BoardResponse:
    board = board_service.create_board(db, principal, body.name, body.description, body.team_id)
    return BoardResponse.model_validate(board)


@router.get("", response_model=Page[BoardResponse])
def list_boards(
    user_id: Annotated[int, Query(description="List boards of this user's teams")],
    paging: Annotated[PageParams, Depends(page_params)],
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Annotated[Session, Depends(get_db)],
) -> Page[BoardResponse]:
    boards, total = board_service.list_boards_for_user(
        db, principal, user_id, paging.page, paging.size
    )
    return Page[BoardResponse](
        items=[BoardResponse.model_validate(b) for b in boards],
        total=total,
        page=paging.page,
        size=paging.size,
    )


@router.get("/{board_id}", response_model=BoardResponse)
def get_board(
    board_id: int,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Annotated[Session, Depends(get_db)],
) -> BoardResponse:
    return BoardResponse.model_validate(board_service.get_board(db, principal, board_id))


@router.put("/{board_id}", response_model=BoardResponse)
def update_board(
    board_id: int,
    body: BoardRequest,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Annotated[Session, Depends(get_db)],
) -> BoardResponse:
    """Update a board. Changing team_id moves the board and needs access to both teams."""
    board = board_service.update_board(
        db, principal, board_id, body.name, body.description, body.team_id
    )
    return BoardResponse.model_validate(board)


@router.delete("/{board_id}", status_code=status.HTTP_204_NO_CONTENT)
def retire_board(
    board_id: int,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Annotated[Session, Depends(get_db)],
) -> Response:
    board_service.retire_board(db, principal, board_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
