"""User registration (public) and user management endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from taskboard.api.v1.auth import get_current_principal, require_admin
from taskboard.core.database import get_db
from taskboard.models import User
from taskboard.schemas.auth import Principal
from taskboard.schemas.users import (
    PasswordChangeRequest,
    RegisterRequest,
    UpdateUserRolesRequest,
    UserResponse,
    UserUpdate,
)
from taskboard.services import users as user_service

router = APIRouter()


def to_user_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        first_name=user.first_name,
        last_name=user.last_name,
        email=user.email,
        roles=[role.code for role in user.roles if not role.retired],
    )


@router.post("", response_model=UserResponse)
def register(
    body: RegisterRequest,
    db: Annotated[Session, Depends(get_db)],
) -> UserResponse:
    """Register a new user with the default role. 409 if the address is taken."""
    user = user_service.register_user(
        db,
        first_name=body.first_name,
        last_name=body.last_name,
        email_address=body.email_address,
        password=body.password,
    )
    return to_user_response(user)


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: int,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Annotated[Session, Depends(get_db)],
) -> UserResponse:
    return to_user_response(user_service.get_user(db, principal, user_id))


@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: int,
    body: UserUpdate,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Annotated[Session, Depends(get_db)],
) -> UserResponse:
    user = user_service.update_user(db, principal, user_id, body.first_name, body.last_name)
    return to_user_response(user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def retire_user(
    user_id: int,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Annotated[Session, Depends(get_db)],
) -> Response:
    user_service.retire_user(db, principal, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/{user_id}/roles", response_model=UserResponse)
def update_roles(
    user_id: int,
    body: UpdateUserRolesRequest,
    principal: Annotated[Principal, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> UserResponse:
    """Replace a user's roles (admin only)."""
    return to_user_response(user_service.update_roles(db, principal, user_id, body.roles))


@router.put("/{user_id}/password", status_code=status.HTTP_204_NO_CONTENT)
def change_password(
    user_id: int,
    body: PasswordChangeRequest,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Annotated[Session, Depends(get_db)],
) -> Response:
    user_service.change_password(db, principal, user_id, body.password)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
