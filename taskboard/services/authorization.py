"""
Authorization policy: ownership-chain access and admin override.

Every board, list and card belongs to exactly one team through parent ids
(Card -> List -> Board -> Team). Access is decided by walking those ids to the root
team at decision time and checking membership; holding the admin permission
overrides membership. Denials raise NotAuthorizedError, never filter silently.
"""

import logging
from collections.abc import Callable
from typing import Any

from sqlalchemy.orm import Session

from taskboard.core.exceptions import NotAuthorizedError, NotFoundError
from taskboard.core.permissions import PERMISSION_ADMIN
from taskboard.models import Board, BoardList, Card, Team, User, team_members
from taskboard.schemas.auth import Principal

logger = logging.getLogger(__name__)


def effective_permissions(user: User) -> frozenset[str]:
    """Union of permission codes across the user's active roles."""
    return frozenset(
        permission.code
        for role in user.roles
        if not role.retired
        for permission in role.permissions
        if not permission.retired
    )


def is_admin(principal: Principal) -> bool:
    """True if the principal holds the admin permission."""
    return PERMISSION_ADMIN in principal.permissions


def _load_parent(db: Session, model: type[Any], entity_id: int) -> Any:
    # Retired parents still resolve: retirement hides rows, it does not break chains.
    entity = db.get(model, entity_id)
    if entity is None:
        raise NotFoundError(f"No {model.__tablename__} row with ID '{entity_id}'")
    return entity


def _team_of_team(db: Session, team: Team) -> Team:
    return team


def _team_of_board(db: Session, board: Board) -> Team:
    return _load_parent(db, Team, board.team_id)


def _team_of_list(db: Session, board_list: BoardList) -> Team:
    return _team_of_board(db, _load_parent(db, Board, board_list.board_id))


def _team_of_card(db: Session, card: Card) -> Team:
    return _team_of_list(db, _load_parent(db, BoardList, card.list_id))


_ROOT_TEAM_RESOLVERS: dict[type, Callable[[Session, Any], Team]] = {
    Team: _team_of_team,
    Board: _team_of_board,
    BoardList: _team_of_list,
    Card: _team_of_card,
}


def resolve_root_team(db: Session, resource: Team | Board | BoardList | Card) -> Team:
    """Walk parent ids from resource up to the team that owns it (at most 3 hops)."""
    resolver = _ROOT_TEAM_RESOLVERS.get(type(resource))
    if resolver is None:
        raise TypeError(f"{type(resource).__name__} is not part of a team ownership chain")
    return resolver(db, resource)


def is_member(db: Session, principal: Principal, team: Team) -> bool:
    row = (
        db.query(team_members)
        .filter(
            team_members.c.team_id == team.id,
            team_members.c.user_id == principal.id,
        )
        .first()
    )
    return row is not None


def require_access(
    db: Session,
    principal: Principal,
    resource: Team | Board | BoardList | Card,
) -> None:
    """
    Allow if principal is a member of the resource's root team or is an admin.

    Raises NotAuthorizedError otherwise. Returns None on success.
    """
    team = resolve_root_team(db, resource)
    if is_member(db, principal, team) or is_admin(principal):
        return
    logger.warning(
        "User '%s' is not authorized for %s '%s' under team '%s'",
        principal.id,
        type(resource).__name__,
        resource.id,
        team.id,
    )
    raise NotAuthorizedError()


def require_move(
    db: Session,
    principal: Principal,
    resource: Board | BoardList | Card,
    new_parent: Team | Board | BoardList,
) -> None:
    """
    Authorize re-parenting resource under new_parent.

    Both the current chain (removing from it) and the new parent's chain (adding to
    it) must pass; callers change the parent id only after this returns.
    """
    require_access(db, principal, resource)
    require_access(db, principal, new_parent)


def require_same_identity_or_admin(principal: Principal, target_user_id: int) -> None:
    """Allow self-service on the principal's own user record, or any record for admins."""
    if principal.id == target_user_id or is_admin(principal):
        return
    logger.warning(
        "User '%s' attempted to act on user '%s' without admin permission",
        principal.id,
        target_user_id,
    )
    raise NotAuthorizedError()


def require_admin(principal: Principal) -> None:
    """Allow only admin permission holders; ignores team membership entirely."""
    if is_admin(principal):
        return
    logger.warning("User '%s' attempted an admin-only operation", principal.id)
    raise NotAuthorizedError()
