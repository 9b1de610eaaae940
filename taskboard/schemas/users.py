"""Request/response schemas for user registration and management."""

from pydantic import BaseModel, ConfigDict, Field

from taskboard.core.security import (
    ADDRESS_MAX_LEN,
    ADDRESS_MIN_LEN,
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
)


class RegisterRequest(BaseModel):
    """Public registration: user names plus login credentials."""

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email_address: str = Field(..., min_length=ADDRESS_MIN_LEN, max_length=ADDRESS_MAX_LEN)
    password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)


class UserUpdate(BaseModel):
    """Editable profile fields. Credentials are changed separately."""

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)


class PasswordChangeRequest(BaseModel):
    """New password for an existing credential."""

    password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)


class UpdateUserRolesRequest(BaseModel):
    """The complete set of role codes the user should hold."""

    roles: list[str] = Field(default_factory=list)


class UserResponse(BaseModel):
    """User returned to clients (no credential data)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    last_name: str
    email: str
    roles: list[str] = Field(default_factory=list)
