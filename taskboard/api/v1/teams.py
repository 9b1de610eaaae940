"""Team endpoints: CRUD, per-user listing and membership."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from taskboard.api.v1.auth import get_current_principal
from taskboard.api.v1.paging import PageParams, page_params
from taskboard.api.v1.users import to_user_response
from taskboard.core.database import get_db
from taskboard.schemas.auth import Principal
from taskboard.schemas.common import Page
from taskboard.schemas.teams import TeamMembersRequest, TeamRequest, TeamResponse
from taskboard.schemas.users import UserResponse
from taskboard.services import teams as team_service

router = APIRouter()


@router.post("", response_model=TeamResponse)
def create_team(
    body: TeamRequest,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Annotated[Session, Depends(get_db)],
) -> TeamResponse:
    """Create a team; the caller becomes its first member."""
    team = team_service.create_team(db, principal, body.name)
    return TeamResponse.model_validate(team)


@router.get("", response_model=Page[TeamResponse])
def list_teams(
    user_id: Annotated[int, Query(description="List teams this user belongs to")],
    paging: Annotated[PageParams, Depends(page_params)],
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Annotated[Session, Depends(get_db)],
) -> Page[TeamResponse]:
    teams, total = team_service.list_teams_for_user(db, principal, user_id, paging.page, paging.size)
    return Page[TeamResponse](
        items=[TeamResponse.model_validate(t) for t in teams],
        total=total,
        page=paging.page,
        size=paging.size,
    )


@router.get("/{team_id}", response_model=TeamResponse)
def get_team(
    team_id: int,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Annotated[Session, Depends(get_db)],
) -> TeamResponse:
    return TeamResponse.model_validate(team_service.get_team(db, principal, team_id))


@router.put("/{team_id}", response_model=TeamResponse)
def update_team(
    team_id: int,
    body: TeamRequest,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Annotated[Session, Depends(get_db)],
) -> TeamResponse:
    return TeamResponse.model_validate(team_service.update_team(db, principal, team_id, body.name))


@router.delete("/{team_id}", status_code=status.HTTP_204_NO_CONTENT)
def retire_team(
    team_id: int,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Annotated[Session, Depends(get_db)],
) -> Response:
    team_service.retire_team(db, principal, team_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{team_id}/members", response_model=list[UserResponse])
def get_members(
    team_id: int,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Annotated[Session, Depends(get_db)],
) -> list[UserResponse]:
    return [to_user_response(u) for u in team_service.get_members(db, principal, team_id)]


@router.put("/{team_id}/members", response_model=list[UserResponse])
def add_members(
    team_id: int,
    body: TeamMembersRequest,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Annotated[Session, Depends(get_db)],
) -> list[UserResponse]:
    """Add members by email address; returns the resulting member list."""
    members = team_service.add_members(db, principal, team_id, body.members)
    return [to_user_response(u) for u in members]


@router.delete("/{team_id}/members", response_model=list[UserResponse])
def remove_members(
    team_id: int,
    body: TeamMembersRequest,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Annotated[Session, Depends(get_db)],
) -> list[UserResponse]:
    """Remove members by email address; returns the remaining member list."""
    members = team_service.remove_members(db, principal, team_id, body.members)
    return [to_user_response(u) for u in members]
