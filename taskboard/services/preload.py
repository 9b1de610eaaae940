"""Bootstrap data: seeded permissions, roles and the administrator account."""

import logging
from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from taskboard.core.exceptions import NotFoundError
from taskboard.core.permissions import (
    PERMISSION_ADMIN,
    PERMISSION_DEFAULT,
    ROLE_ADMIN,
    ROLE_USER,
    SEEDED_ROLE_PERMISSIONS,
)
from taskboard.models import Credential, Permission, Role, User
from taskboard.services import roles as role_service
from taskboard.services import users as user_service

if TYPE_CHECKING:
    from taskboard.core.config import Settings

logger = logging.getLogger(__name__)


def _ensure_permission(db: Session, code: str, description: str) -> Permission:
    try:
        return role_service.find_permission(db, code)
    except NotFoundError:
        return role_service.create_permission(db, code, description)


def _ensure_role(db: Session, code: str, description: str) -> Role:
    try:
        return role_service.find_role(db, code)
    except NotFoundError:
        return role_service.create_role(db, code, description, list(SEEDED_ROLE_PERMISSIONS[code]))


def run_preload(db: Session, settings: "Settings") -> User | None:
    """
    Create the seeded permissions and roles and the admin user when missing.

    Idempotent: existing rows are left untouched, and the admin user is only
    created if no credential has ADMIN_EMAIL. Returns the newly created admin,
    or None if it already existed.
    """
    _ensure_permission(db, PERMISSION_DEFAULT, settings.PERMISSION_DEFAULT_DESCRIPTION)
    _ensure_permission(db, PERMISSION_ADMIN, settings.PERMISSION_ADMIN_DESCRIPTION)
    _ensure_role(db, ROLE_USER, settings.ROLE_USER_DESCRIPTION)
    _ensure_role(db, ROLE_ADMIN, settings.ROLE_ADMIN_DESCRIPTION)

    existing = (
        db.query(Credential.id)
        .filter(Credential.email_address == settings.ADMIN_EMAIL)
        .first()
    )
    if existing is not None:
        logger.info("Admin credential already present; skipping admin creation")
        return None

    admin = user_service.register_user(
        db,
        first_name=settings.ADMIN_FIRST_NAME,
        last_name=settings.ADMIN_LAST_NAME,
        email_address=settings.ADMIN_EMAIL,
        password=settings.ADMIN_PASSWORD.get_secret_value(),
        role_codes=[ROLE_USER, ROLE_ADMIN],
    )
    logger.info("Preload created admin user %s", admin.id)
    return admin
