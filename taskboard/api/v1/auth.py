"""Token login/refresh and auth dependencies (get_current_principal, require_admin)."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy.orm import Session

from taskboard.core.database import get_db
from taskboard.core.exceptions import NotFoundError
from taskboard.core.security import TokenError, TokenService
from taskboard.schemas.auth import LoginRequest, Principal, RefreshRequest, TokenResponse
from taskboard.services import credentials as credential_store
from taskboard.services import users as user_service
from taskboard.services.authorization import is_admin

logger = logging.getLogger(__name__)

router = APIRouter()

# Failed logins return 401 with no body so callers can't tell which part was wrong.
_UNAUTHORIZED = {status.HTTP_401_UNAUTHORIZED: {"description": "Authentication failed"}}


def get_token_service(request: Request) -> TokenService:
    """Dependency: the TokenService built at startup."""
    return request.app.state.token_service


def get_current_principal(request: Request) -> Principal:
    """Dependency: the principal attached by the authentication gate. Raises 401 if none."""
    principal = getattr(request.state, "principal", None)
    if principal is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return principal


def require_admin(
    principal: Annotated[Principal, Depends(get_current_principal)],
) -> Principal:
    """Dependency: require the admin permission. Raises 403 otherwise."""
    if not is_admin(principal):
        logger.warning("User '%s' denied an admin-only route", principal.id)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return principal


def _token_response(tokens: TokenService, principal: Principal) -> TokenResponse:
    pair = tokens.issue_pair(principal)
    return TokenResponse(
        access_token=pair.access_token,
        refresh_token=pair.refresh_token,
        token_type="bearer",
        expires_in=pair.expires_in,
    )


@router.post("", response_model=TokenResponse, responses=_UNAUTHORIZED)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> TokenResponse | Response:
    """
    Authenticate with email address and password; returns an access/refresh pair.
    Include the access token in the Authorization header as: Bearer <access_token>
    """
    try:
        matches = credential_store.verify_credential(db, body.username, body.password)
    except NotFoundError:
        matches = False
    principal = user_service.load_principal(db, body.username) if matches else None
    if principal is None:
        logger.info("Failed login attempt")
        return Response(status_code=status.HTTP_401_UNAUTHORIZED)
    logger.info("User %s authenticated", principal.id)
    return _token_response(tokens, principal)


@router.post("/refresh", response_model=TokenResponse, responses=_UNAUTHORIZED)
def refresh(
    body: RefreshRequest,
    db: Annotated[Session, Depends(get_db)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> TokenResponse | Response:
    """Exchange a valid refresh token for a new token pair."""
    try:
        subject = tokens.subject_of(body.refresh_token)
    except TokenError as e:
        logger.info("Refresh rejected: %s", e.message)
        return Response(status_code=status.HTTP_401_UNAUTHORIZED)
    principal = user_service.load_principal(db, subject)
    if principal is None:
        return Response(status_code=status.HTTP_401_UNAUTHORIZED)
    return _token_response(tokens, principal)
