"""ORM model for teams, the root of every board's ownership chain."""

from sqlalchemy import Column, ForeignKey, Integer, String, Table
from sqlalchemy.orm import relationship

from taskboard.models.base import Base, EntityMixin

team_members = Table(
    "team_members",
    Base.metadata,
    Column("team_id", Integer, ForeignKey("teams.id"), primary_key=True),
    Column("user_id", Integer, ForeignKey("users.id"), primary_key=True),
)


class Team(EntityMixin, Base):
    """A group of users that owns boards. Membership is the basis of access."""

    __tablename__ = "teams"

    name = Column(String(255), nullable=False)
    members = relationship("User", secondary=team_members, lazy="selectin")
