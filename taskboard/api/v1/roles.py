"""Role management endpoints (admin only)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from taskboard.api.v1.auth import require_admin
from taskboard.api.v1.paging import PageParams, page_params
from taskboard.core.database import get_db
from taskboard.schemas.common import Page
from taskboard.schemas.roles import RoleRequest, RoleResponse
from taskboard.services import roles as role_service

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("", response_model=Page[RoleResponse])
def list_roles(
    paging: Annotated[PageParams, Depends(page_params)],
    db: Annotated[Session, Depends(get_db)],
) -> Page[RoleResponse]:
    roles, total = role_service.list_roles(db, paging.page, paging.size)
    return Page[RoleResponse](
        items=[RoleResponse.model_validate(r) for r in roles],
        total=total,
        page=paging.page,
        size=paging.size,
    )


@router.post("", response_model=RoleResponse)
def create_role(
    body: RoleRequest,
    db: Annotated[Session, Depends(get_db)],
) -> RoleResponse:
    role = role_service.create_role(db, body.code, body.description, body.permissions)
    return RoleResponse.model_validate(role)


@router.get("/{code}", response_model=RoleResponse)
def get_role(code: str, db: Annotated[Session, Depends(get_db)]) -> RoleResponse:
    return RoleResponse.model_validate(role_service.find_role(db, code))


@router.put("/{code}", response_model=RoleResponse)
def update_role(
    code: str,
    body: RoleRequest,
    db: Annotated[Session, Depends(get_db)],
) -> RoleResponse:
    """Rename or re-describe a role. Permissions are not changed here."""
    role = role_service.update_role(db, code, body.code, body.description)
    return RoleResponse.model_validate(role)


@router.delete("/{code}", status_code=status.HTTP_204_NO_CONTENT)
def retire_role(code: str, db: Annotated[Session, Depends(get_db)]) -> Response:
    role_service.retire_role(db, code)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
