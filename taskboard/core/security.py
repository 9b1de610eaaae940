"""Password hashing and JWT issue/validation for authentication."""

from __future__ import annotations

import uuid
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any, Literal

import bcrypt
import jwt

if TYPE_CHECKING:
    from taskboard.core.config import Settings
    from taskboard.schemas.auth import Principal

# Bcrypt cost (rounds); 12 is a good default for security vs speed.
BCRYPT_ROUNDS = 12

# Min/max lengths for credential validation (bcrypt only reads the first 72 bytes).
ADDRESS_MIN_LEN = 3
ADDRESS_MAX_LEN = 255
PASSWORD_MIN_LEN = 4
PASSWORD_MAX_LEN = 72

# Claims present on every token; decode fails if any is missing.
REQUIRED_CLAIMS = ("sub", "jti", "iat", "exp")

# Denormalized profile snapshot carried by access tokens only.
PROFILE_CLAIMS = ("user_id", "first_name", "last_name")

TokenKind = Literal["access", "refresh"]


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


class TokenError(Exception):
    """Base exception for token errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class TokenExpiredError(TokenError):
    """Token signature is fine but its expiry has passed."""


class TokenInvalidError(TokenError):
    """Token is malformed, tampered with, or signed with another key."""


@dataclass(frozen=True)
class TokenPair:
    """Access and refresh token minted together."""

    access_token: str
    refresh_token: str
    expires_in: int


def _utc_now() -> datetime:
    return datetime.now(UTC)


class TokenService:
    """
    Issues and validates HMAC-signed JWTs.

    Holds the signing secret and both lifetimes; built once at startup and shared
    read-only by every request. Access and refresh tokens are validated identically;
    the kind only decides the lifetime and whether profile claims are embedded.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str,
        access_lifetime: timedelta,
        refresh_lifetime: timedelta,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        if not secret:
            raise ValueError("Token signing secret must be non-empty")
        self._secret = secret
        self._algorithm = algorithm
        self._lifetimes: dict[str, timedelta] = {
            "access": access_lifetime,
            "refresh": refresh_lifetime,
        }
        self._clock = clock

    def __repr__(self) -> str:
        return f"TokenService(algorithm={self._algorithm!r})"

    @classmethod
    def from_settings(cls, settings: Settings) -> TokenService:
        return cls(
            secret=settings.JWT_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
            access_lifetime=timedelta(seconds=settings.JWT_ACCESS_EXPIRE_SECONDS),
            refresh_lifetime=timedelta(seconds=settings.JWT_REFRESH_EXPIRE_SECONDS),
        )

    @property
    def access_lifetime(self) -> timedelta:
        return self._lifetimes["access"]

    def issue(self, principal: Principal, kind: TokenKind) -> str:
        """
        Create a signed token for principal with sub = credential address.

        Access tokens carry user_id, first_name and last_name so the common request
        path can skip a lookup; refresh tokens carry only the registered claims.
        """
        now = self._clock()
        payload: dict[str, Any] = {
            "sub": principal.email,
            "jti": str(uuid.uuid4()),
            "iat": now,
            "exp": now + self._lifetimes[kind],
        }
        if kind == "access":
            payload["user_id"] = principal.id
            payload["first_name"] = principal.first_name
            payload["last_name"] = principal.last_name
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def issue_pair(self, principal: Principal) -> TokenPair:
        """Mint a fresh access + refresh pair for principal."""
        return TokenPair(
            access_token=self.issue(principal, "access"),
            refresh_token=self.issue(principal, "refresh"),
            expires_in=int(self.access_lifetime.total_seconds()),
        )

    def validate(self, token: str) -> dict[str, Any]:
        """
        Verify signature and expiry; return the decoded claims.

        Raises TokenExpiredError when now >= exp (either from the decoder or the
        explicit check against this service's clock), TokenInvalidError otherwise.
        """
        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": list(REQUIRED_CLAIMS)},
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpiredError("Token has expired") from e
        except jwt.PyJWTError as e:
            raise TokenInvalidError(f"Invalid token: {e}") from e

        expires_at = datetime.fromtimestamp(claims["exp"], tz=UTC)
        if self._clock() >= expires_at:
            raise TokenExpiredError("Token has expired")
        return claims

    def subject_of(self, token: str) -> str:
        """Return the subject (credential address) of a valid token."""
        return self.validate(token)["sub"]
