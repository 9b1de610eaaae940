"""Helpers shared by service and policy tests: a private in-memory database and seeded users."""

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from taskboard.core.permissions import (
    PERMISSION_ADMIN,
    PERMISSION_DEFAULT,
    ROLE_ADMIN,
    ROLE_USER,
    SEEDED_ROLE_PERMISSIONS,
)
from taskboard.models import Base, Board, BoardList, Card, Team, User
from taskboard.schemas.auth import Principal
from taskboard.services import roles as role_service
from taskboard.services import users as user_service

TEST_SECRET = "unit-test-signing-secret-" + "y" * 64


def new_session() -> Session:
    """A session on a fresh, empty in-memory database with all tables created."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)()


def seed_roles(db: Session) -> None:
    role_service.create_permission(db, PERMISSION_DEFAULT, "default")
    role_service.create_permission(db, PERMISSION_ADMIN, "admin")
    for code in (ROLE_USER, ROLE_ADMIN):
        role_service.create_role(db, code, code, list(SEEDED_ROLE_PERMISSIONS[code]))


def make_user(
    db: Session,
    email: str,
    admin: bool = False,
    password: str = "pw123",
) -> tuple[User, Principal]:
    roles = [ROLE_USER, ROLE_ADMIN] if admin else [ROLE_USER]
    first, _, _ = email.partition("@")
    user = user_service.register_user(
        db,
        first_name=first.capitalize(),
        last_name="Tester",
        email_address=email,
        password=password,
        role_codes=roles,
    )
    return user, user_service.to_principal(user)


def make_chain(db: Session, team: Team) -> tuple[Board, BoardList, Card]:
    """One board with one list holding one card, under team."""
    board = Board(name="Release", description="", team_id=team.id)
    db.add(board)
    db.flush()
    board_list = BoardList(name="To Do", priority=0, board_id=board.id)
    db.add(board_list)
    db.flush()
    card = Card(title="Write docs", description="", priority=0, list_id=board_list.id)
    db.add(card)
    db.commit()
    return board, board_list, card
