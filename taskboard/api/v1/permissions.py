"""Permission management endpoints (admin only)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from taskboard.api.v1.auth import require_admin
from taskboard.api.v1.paging import PageParams, page_params
from taskboard.core.database import get_db
from taskboard.schemas.common import Page
from taskboard.schemas.roles import PermissionRequest, PermissionResponse
from taskboard.services import roles as role_service

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("", response_model=Page[PermissionResponse])
def list_permissions(
    paging: Annotated[PageParams, Depends(page_params)],
    db: Annotated[Session, Depends(get_db)],
) -> Page[PermissionResponse]:
    permissions, total = role_service.list_permissions(db, paging.page, paging.size)
    return Page[PermissionResponse](
        items=[PermissionResponse.model_validate(p) for p in permissions],
        total=total,
        page=paging.page,
        size=paging.size,
    )


@router.post("", response_model=PermissionResponse)
def create_permission(
    body: PermissionRequest,
    db: Annotated[Session, Depends(get_db)],
) -> PermissionResponse:
    permission = role_service.create_permission(db, body.code, body.description)
    return PermissionResponse.model_validate(permission)


@router.get("/{code}", response_model=PermissionResponse)
def get_permission(code: str, db: Annotated[Session, Depends(get_db)]) -> PermissionResponse:
    return PermissionResponse.model_validate(role_service.find_permission(db, code))


@router.put("/{code}", response_model=PermissionResponse)
def update_permission(
    code: str,
    body: PermissionRequest,
    db: Annotated[Session, Depends(get_db)],
) -> PermissionResponse:
    permission = role_service.update_permission(db, code, body.code, body.description)
    return PermissionResponse.model_validate(permission)


@router.delete("/{code}", status_code=status.HTTP_204_NO_CONTENT)
def retire_permission(code: str, db: Annotated[Session, Depends(get_db)]) -> Response:
    role_service.retire_permission(db, code)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
