"""Pydantic request/response schemas."""

from taskboard.schemas.auth import LoginRequest, Principal, RefreshRequest, TokenResponse
from taskboard.schemas.boards import (
    BoardRequest,
    BoardResponse,
    CardBatchItem,
    CardBatchRequest,
    CardRequest,
    CardResponse,
    ListBatchItem,
    ListBatchRequest,
    ListRequest,
    ListResponse,
)
from taskboard.schemas.common import ErrorResponse, Page
from taskboard.schemas.health import HealthResponse
from taskboard.schemas.roles import (
    PermissionRequest,
    PermissionResponse,
    RoleRequest,
    RoleResponse,
)
from taskboard.schemas.teams import TeamMembersRequest, TeamRequest, TeamResponse
from taskboard.schemas.users import (
    PasswordChangeRequest,
    RegisterRequest,
    UpdateUserRolesRequest,
    UserResponse,
    UserUpdate,
)

__all__ = [
    "BoardRequest",
    "BoardResponse",
    "CardBatchItem",
    "CardBatchRequest",
    "CardRequest",
    "CardResponse",
    "ErrorResponse",
    "HealthResponse",
    "ListBatchItem",
    "ListBatchRequest",
    "ListRequest",
    "ListResponse",
    "LoginRequest",
    "Page",
    "PasswordChangeRequest",
    "PermissionRequest",
    "PermissionResponse",
    "Principal",
    "RefreshRequest",
    "RegisterRequest",
    "RoleRequest",
    "RoleResponse",
    "TeamMembersRequest",
    "TeamRequest",
    "TeamResponse",
    "TokenResponse",
    "UpdateUserRolesRequest",
    "UserResponse",
    "UserUpdate",
]
