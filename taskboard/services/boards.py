"""Boards: owned by a team, access follows team membership."""

import logging

from sqlalchemy.orm import Session

from taskboard.core.exceptions import NotFoundError
from taskboard.models import Board, Team, team_members
from taskboard.schemas.auth import Principal
from taskboard.services.authorization import (
    require_access,
    require_move,
    require_same_identity_or_admin,
)
from taskboard.services.pagination import paginate
from taskboard.services.teams import find_team

logger = logging.getLogger(__name__)


def find_board(db: Session, board_id: int) -> Board:
    board = db.query(Board).filter(Board.id == board_id, Board.retired.is_(False)).first()
    if board is None:
        logger.warning("Could not find board with ID '%s'", board_id)
        raise NotFoundError(f"Could not find board with ID '{board_id}'")
    return board


def create_board(
    db: Session,
    principal: Principal,
    name: str,
    description: str,
    team_id: int,
) -> Board:
    """Create a board under team_id. The principal needs access to that team."""
    team = find_team(db, team_id)
    require_access(db, principal, team)
    board = Board(name=name, description=description, team_id=team.id)
    db.add(board)
    db.commit()
    logger.info("User %s created board %s in team %s", principal.id, board.id, team.id)
    return board


def get_board(db: Session, principal: Principal, board_id: int) -> Board:
    board = find_board(db, board_id)
    require_access(db, principal, board)
    return board


def list_boards_for_user(
    db: Session,
    principal: Principal,
    user_id: int,
    page: int,
    size: int,
) -> tuple[list[Board], int]:
    """Active boards of the user's active teams."""
    require_same_identity_or_admin(principal, user_id)
    query = (
        db.query(Board)
        .join(Team, Board.team_id == Team.id)
        .join(team_members, team_members.c.team_id == Team.id)
        .filter(
            team_members.c.user_id == user_id,
            Team.retired.is_(False),
            Board.retired.is_(False),
        )
        .order_by(Board.id)
    )
    return paginate(query, page, size)


def update_board(
    db: Session,
    principal: Principal,
    board_id: int,
    name: str,
    description: str,
    team_id: int,
) -> Board:
    """
    Update a board's fields; a different team_id moves it to that team.

    A move needs access to both the current and the new team.
    """
    board = find_board(db, board_id)
    if team_id != board.team_id:
        require_move(db, principal, board, find_team(db, team_id))
        logger.info("Moving board %s from team %s to team %s", board.id, board.team_id, team_id)
    else:
        require_access(db, principal, board)
    board.name = name
    board.description = description
    board.team_id = team_id
    db.commit()
    logger.info("Updated board %s", board.id)
    return board


def retire_board(db: Session, principal: Principal, board_id: int) -> None:
    board = find_board(db, board_id)
    require_access(db, principal, board)
    board.retire()
    db.commit()
    logger.info("Retired board %s", board.id)
