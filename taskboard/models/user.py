"""ORM models for application users and their login credentials."""

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from taskboard.models.base import Base, EntityMixin
from taskboard.models.role import user_roles


class Credential(EntityMixin, Base):
    """Login credentials (email address + bcrypt hash) owned by exactly one user."""

    __tablename__ = "credentials"

    email_address = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)


class User(EntityMixin, Base):
    """
    User account for JWT authentication and role/permission based access control.

    Admin status is not stored here: it is derived from the permissions of the
    user's roles.
    """

    __tablename__ = "users"

    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    credential_id = Column(Integer, ForeignKey("credentials.id"), nullable=False, unique=True)
    is_locked = Column(Boolean, nullable=False, default=False)

    credential = relationship("Credential", cascade="all", lazy="joined")
    roles = relationship("Role", secondary=user_roles, lazy="selectin")

    @property
    def email(self) -> str:
        return self.credential.email_address

    @property
    def is_active(self) -> bool:
        return not self.retired and not self.is_locked
