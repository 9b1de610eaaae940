"""SQLAlchemy ORM models."""

from taskboard.models.base import Base
from taskboard.models.board import Board, BoardList, Card
from taskboard.models.role import Permission, Role, role_permissions, user_roles
from taskboard.models.team import Team, team_members
from taskboard.models.user import Credential, User

__all__ = [
    "Base",
    "Board",
    "BoardList",
    "Card",
    "Credential",
    "Permission",
    "Role",
    "Team",
    "User",
    "role_permissions",
    "team_members",
    "user_roles",
]
