"""Teams and their membership. Membership is what grants access to a team's boards."""

import logging

from sqlalchemy.orm import Session

from taskboard.core.exceptions import NotFoundError
from taskboard.models import Team, User, team_members
from taskboard.schemas.auth import Principal
from taskboard.services import users as user_service
from taskboard.services.authorization import (
    require_access,
    require_same_identity_or_admin,
)
from taskboard.services.pagination import paginate

logger = logging.getLogger(__name__)


def find_team(db: Session, team_id: int) -> Team:
    """Return an active team by id without authorizing. Raises NotFoundError."""
    team = db.query(Team).filter(Team.id == team_id, Team.retired.is_(False)).first()
    if team is None:
        logger.warning("Could not find team with ID '%s'", team_id)
        raise NotFoundError(f"Could not find team with ID '{team_id}'")
    return team


def create_team(db: Session, principal: Principal, name: str) -> Team:
    """Create a team with the creating user as its first member."""
    creator = user_service.find_user(db, principal.id)
    team = Team(name=name, members=[creator])
    db.add(team)
    db.commit()
    logger.info("User %s created team %s", principal.id, team.id)
    return team


def get_team(db: Session, principal: Principal, team_id: int) -> Team:
    team = find_team(db, team_id)
    require_access(db, principal, team)
    return team


def list_teams_for_user(
    db: Session,
    principal: Principal,
    user_id: int,
    page: int,
    size: int,
) -> tuple[list[Team], int]:
    """Active teams the user belongs to. Only the user themselves or an admin may list them."""
    require_same_identity_or_admin(principal, user_id)
    query = (
        db.query(Team)
        .join(team_members, team_members.c.team_id == Team.id)
        .filter(team_members.c.user_id == user_id, Team.retired.is_(False))
        .order_by(Team.id)
    )
    return paginate(query, page, size)


def update_team(db: Session, principal: Principal, team_id: int, name: str) -> Team:
    team = find_team(db, team_id)
    require_access(db, principal, team)
    team.name = name
    db.commit()
    logger.info("Updated team %s", team.id)
    return team


def retire_team(db: Session, principal: Principal, team_id: int) -> None:
    team = find_team(db, team_id)
    require_access(db, principal, team)
    team.retire()
    db.commit()
    logger.info("Retired team %s", team.id)


def _users_by_address(db: Session, addresses: list[str]) -> list[User]:
    found = []
    for address in dict.fromkeys(addresses):
        user = user_service.find_by_address(db, address)
        if user is None:
            logger.warning("Could not find user with address '%s'", address)
            raise NotFoundError(f"Could not find user '{address}'")
        found.append(user)
    return found


def get_members(db: Session, principal: Principal, team_id: int) -> list[User]:
    team = get_team(db, principal, team_id)
    return [member for member in team.members if not member.retired]


def add_members(
    db: Session,
    principal: Principal,
    team_id: int,
    addresses: list[str],
) -> list[User]:
    """Add users (by credential address) to the team. Existing members are left as is."""
    team = get_team(db, principal, team_id)
    for user in _users_by_address(db, addresses):
        if user not in team.members:
            team.members.append(user)
    db.commit()
    logger.info("User %s added %d member(s) to team %s", principal.id, len(addresses), team.id)
    return [member for member in team.members if not member.retired]


def remove_members(
    db: Session,
    principal: Principal,
    team_id: int,
    addresses: list[str],
) -> list[User]:
    """Remove users (by credential address) from the team. Non-members are ignored."""
    team = get_team(db, principal, team_id)
    for user in _users_by_address(db, addresses):
        if user in team.members:
            team.members.remove(user)
    db.commit()
    logger.info("User %s removed %d member(s) from team %s", principal.id, len(addresses), team.id)
    return [member for member in team.members if not member.retired]
