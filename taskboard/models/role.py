"""ORM models for roles and the permissions they aggregate."""

from sqlalchemy import Column, ForeignKey, Integer, String, Table
from sqlalchemy.orm import relationship

from taskboard.models.base import Base, EntityMixin

role_permissions = Table(
    "role_permissions",
    Base.metadata,
    Column("role_id", Integer, ForeignKey("roles.id"), primary_key=True),
    Column("permission_id", Integer, ForeignKey("permissions.id"), primary_key=True),
)

user_roles = Table(
    "user_roles",
    Base.metadata,
    Column("user_id", Integer, ForeignKey("users.id"), primary_key=True),
    Column("role_id", Integer, ForeignKey("roles.id"), primary_key=True),
)


class Permission(EntityMixin, Base):
    """
    Grants a user the ability to do something specific (e.g. administer the app).

    code is unique among active permissions; authorization compares codes only.
    """

    __tablename__ = "permissions"

    code = Column(String(64), nullable=False, index=True)
    description = Column(String(255), nullable=False, default="")


class Role(EntityMixin, Base):
    """A named bundle of permissions assigned to users."""

    __tablename__ = "roles"

    code = Column(String(64), nullable=False, index=True)
    description = Column(String(255), nullable=False, default="")
    permissions = relationship("Permission", secondary=role_permissions, lazy="selectin")
