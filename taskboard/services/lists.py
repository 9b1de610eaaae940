"""Lists on a board, ordered by priority."""

import logging
from collections.abc import Sequence

from sqlalchemy.orm import Session

from taskboard.core.exceptions import BadOperationError, NotFoundError
from taskboard.models import BoardList
from taskboard.schemas.auth import Principal
from taskboard.schemas.boards import ListBatchItem
from taskboard.services.authorization import require_access, require_move
from taskboard.services.boards import find_board
from taskboard.services.pagination import paginate

logger = logging.getLogger(__name__)


def find_list(db: Session, list_id: int) -> BoardList:
    board_list = (
        db.query(BoardList)
        .filter(BoardList.id == list_id, BoardList.retired.is_(False))
        .first()
    )
    if board_list is None:
        logger.warning("Could not find list with ID '%s'", list_id)
        raise NotFoundError(f"Could not find list with ID '{list_id}'")
    return board_list


def create_list(
    db: Session,
    principal: Principal,
    name: str,
    priority: int,
    board_id: int,
) -> BoardList:
    board = find_board(db, board_id)
    require_access(db, principal, board)
    board_list = BoardList(name=name, priority=priority, board_id=board.id)
    db.add(board_list)
    db.commit()
    logger.info("User %s created list %s on board %s", principal.id, board_list.id, board.id)
    return board_list


def get_list(db: Session, principal: Principal, list_id: int) -> BoardList:
    board_list = find_list(db, list_id)
    require_access(db, principal, board_list)
    return board_list


def list_lists_under_board(
    db: Session,
    principal: Principal,
    board_id: int,
    page: int,
    size: int,
) -> tuple[list[BoardList], int]:
    """Active lists of the board, lowest priority first."""
    board = find_board(db, board_id)
    require_access(db, principal, board)
    query = (
        db.query(BoardList)
        .filter(BoardList.board_id == board.id, BoardList.retired.is_(False))
        .order_by(BoardList.priority, BoardList.id)
    )
    return paginate(query, page, size)


def update_list(
    db: Session,
    principal: Principal,
    list_id: int,
    name: str,
    priority: int,
    board_id: int,
) -> BoardList:
    """Update a list; a different board_id moves it, which needs access to both boards."""
    board_list = find_list(db, list_id)
    if board_id != board_list.board_id:
        require_move(db, principal, board_list, find_board(db, board_id))
    else:
        require_access(db, principal, board_list)
    board_list.name = name
    board_list.priority = priority
    board_list.board_id = board_id
    db.commit()
    logger.info("Updated list %s", board_list.id)
    return board_list


def update_lists(
    db: Session,
    principal: Principal,
    board_id: int,
    items: Sequence[ListBatchItem],
) -> list[BoardList]:
    """
    Update several lists of one board together (e.g. a reorder).

    Every list must currently belong to board_id (BadOperationError otherwise) and
    every list is authorized before any is changed. The batch commits as one
    transaction; on any failure nothing is persisted.
    """
    ids = [item.id for item in items]
    if len(set(ids)) != len(ids):
        raise BadOperationError("A list may appear only once in a batch update")

    board_lists = [find_list(db, list_id) for list_id in ids]
    for board_list in board_lists:
        if board_list.board_id != board_id:
            logger.warning(
                "List %s is not under board %s; rejecting batch", board_list.id, board_id
            )
            raise BadOperationError(
                f"List '{board_list.id}' does not belong to board '{board_id}'"
            )
        require_access(db, principal, board_list)

    try:
        for board_list, item in zip(board_lists, items):
            board_list.name = item.name
            board_list.priority = item.priority
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info("Updated %d list(s) on board %s", len(board_lists), board_id)
    return board_lists


def retire_list(db: Session, principal: Principal, list_id: int) -> None:
    board_list = find_list(db, list_id)
    require_access(db, principal, board_list)
    board_list.retire()
    db.commit()
    logger.info("Retired list %s", board_list.id)
