"""
Authentication gate: per-request bearer token resolution.

Runs as HTTP middleware ahead of every route. A valid token whose subject is an
active user attaches a Principal to request.state.principal; anything else leaves
the request unauthenticated. The gate never rejects a request itself: protected
routes enforce the principal through the get_current_principal dependency, so a
route is public exactly when it does not declare that dependency.
"""

import logging
from collections.abc import Awaitable, Callable

from fastapi import Request, Response
from sqlalchemy.orm import Session, sessionmaker
from starlette.concurrency import run_in_threadpool

from taskboard.core.security import TokenExpiredError, TokenInvalidError, TokenService
from taskboard.schemas.auth import Principal
from taskboard.services import users as user_service

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


def extract_bearer_token(header: str | None) -> str | None:
    """Return the token from an "Authorization: Bearer <token>" value, or None."""
    if not header or not header.startswith(BEARER_PREFIX):
        return None
    token = header[len(BEARER_PREFIX):].strip()
    return token or None


class AuthenticationGate:
    """
    Resolve the bearer token on each request and attach the principal.

    token_service and session_factory are fixed at construction; the gate holds no
    per-request state.
    """

    def __init__(
        self,
        token_service: TokenService,
        session_factory: sessionmaker,
    ) -> None:
        self._token_service = token_service
        self._session_factory = session_factory

    def _load_principal(self, subject: str) -> Principal | None:
        db: Session = self._session_factory()
        try:
            return user_service.load_principal(db, subject)
        finally:
            db.close()

    async def authenticate(self, request: Request) -> Principal | None:
        """
        Return the principal for the request's bearer token, or None.

        A principal already attached by an outer layer is kept and the token is not
        re-validated.
        """
        existing = getattr(request.state, "principal", None)
        if existing is not None:
            return existing

        token = extract_bearer_token(request.headers.get("Authorization"))
        if token is None:
            return None
        try:
            subject = self._token_service.subject_of(token)
        except TokenExpiredError:
            logger.info("Expired token on %s %s", request.method, request.url.path)
            return None
        except TokenInvalidError as e:
            logger.warning("Invalid token on %s %s: %s", request.method, request.url.path, e.message)
            return None

        principal = await run_in_threadpool(self._load_principal, subject)
        if principal is None:
            logger.info("Token subject does not resolve to an active user")
        return principal

    async def __call__(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        principal = await self.authenticate(request)
        request.state.principal = principal
        return await call_next(request)
