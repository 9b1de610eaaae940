"""ORM models for boards, their lists and the cards within them."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text

from taskboard.models.base import Base, EntityMixin

# Children reference only their immediate parent by id; the owning team is resolved
# by walking parent ids at authorization time, never cached on the child.


class Board(EntityMixin, Base):
    """A board owned by a team, e.g. the user stories for an upcoming release."""

    __tablename__ = "boards"

    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    team_id = Column(Integer, ForeignKey("teams.id"), nullable=False, index=True)


class BoardList(EntityMixin, Base):
    """An ordered column of cards on a board (e.g. "In Progress")."""

    __tablename__ = "lists"

    name = Column(String(255), nullable=False)
    priority = Column(Integer, nullable=False, default=0)
    board_id = Column(Integer, ForeignKey("boards.id"), nullable=False, index=True)


class Card(EntityMixin, Base):
    """A piece of work within a list, ordered by priority."""

    __tablename__ = "cards"

    title = Column(String(500), nullable=False)
    description = Column(Text, nullable=False, default="")
    due_date = Column(DateTime(timezone=True), nullable=True)
    priority = Column(Integer, nullable=False, default=0)
    list_id = Column(Integer, ForeignKey("lists.id"), nullable=False, index=True)
