"""Request/response schemas for roles and permissions."""

from pydantic import BaseModel, ConfigDict, Field


class PermissionRequest(BaseModel):
    code: str = Field(..., min_length=1, max_length=64)
    description: str = Field(default="", max_length=255)


class PermissionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    code: str
    description: str


class RoleRequest(BaseModel):
    """Role data; permissions lists permission codes (ignored on update)."""

    code: str = Field(..., min_length=1, max_length=64)
    description: str = Field(default="", max_length=255)
    permissions: list[str] = Field(default_factory=list)


class RoleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    code: str
    description: str
    permissions: list[PermissionResponse] = Field(default_factory=list)
