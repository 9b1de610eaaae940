"""User registration, profile changes, role assignment and principal resolution."""

import logging

from sqlalchemy.orm import Session

from taskboard.core.exceptions import NotFoundError
from taskboard.core.permissions import ROLE_USER
from taskboard.models import Credential, User
from taskboard.schemas.auth import Principal
from taskboard.services import credentials as credential_store
from taskboard.services import roles as role_service
from taskboard.services.authorization import (
    effective_permissions,
    require_admin,
    require_same_identity_or_admin,
)

logger = logging.getLogger(__name__)


def to_principal(user: User) -> Principal:
    """Snapshot a user and the permissions of its active roles."""
    return Principal(
        id=user.id,
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        permissions=effective_permissions(user),
    )


def register_user(
    db: Session,
    first_name: str,
    last_name: str,
    email_address: str,
    password: str,
    role_codes: list[str] | None = None,
) -> User:
    """
    Create a credential and its user in one transaction.

    New users get the default "user" role unless role_codes is given. Raises
    DuplicateIdentityError if the address is taken and NotFoundError for an
    unknown role code; nothing is persisted in either case.
    """
    try:
        roles = role_service.find_roles(db, role_codes or [ROLE_USER])
        credential = credential_store.create_credential(db, email_address, password)
        user = User(
            first_name=first_name,
            last_name=last_name,
            credential=credential,
            roles=roles,
        )
        db.add(user)
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info("Registered user %s", user.id)
    return user


def find_user(db: Session, user_id: int) -> User:
    """Return an active (not retired) user by id. Raises NotFoundError otherwise."""
    user = db.query(User).filter(User.id == user_id, User.retired.is_(False)).first()
    if user is None:
        logger.warning("Could not find user with ID '%s'", user_id)
        raise NotFoundError(f"Could not find user with ID '{user_id}'")
    return user


def get_user(db: Session, principal: Principal, user_id: int) -> User:
    require_same_identity_or_admin(principal, user_id)
    return find_user(db, user_id)


def update_user(
    db: Session,
    principal: Principal,
    user_id: int,
    first_name: str,
    last_name: str,
) -> User:
    require_same_identity_or_admin(principal, user_id)
    user = find_user(db, user_id)
    user.first_name = first_name
    user.last_name = last_name
    db.commit()
    logger.info("Updated user %s", user.id)
    return user


def retire_user(db: Session, principal: Principal, user_id: int) -> None:
    require_same_identity_or_admin(principal, user_id)
    user = find_user(db, user_id)
    user.retire()
    db.commit()
    logger.info("Retired user %s", user.id)


def update_roles(
    db: Session,
    principal: Principal,
    user_id: int,
    role_codes: list[str],
) -> User:
    """Replace the user's roles with role_codes. Admin only."""
    require_admin(principal)
    user = find_user(db, user_id)
    user.roles = role_service.find_roles(db, role_codes)
    db.commit()
    logger.info(
        "User %s set roles of user %s to [%s]",
        principal.id,
        user.id,
        ", ".join(role.code for role in user.roles),
    )
    return user


def change_password(
    db: Session,
    principal: Principal,
    user_id: int,
    new_password: str,
) -> None:
    require_same_identity_or_admin(principal, user_id)
    user = find_user(db, user_id)
    credential_store.change_password(db, user.email, new_password)


def find_by_address(db: Session, email_address: str) -> User | None:
    """Non-retired user whose credential has this address, or None."""
    return (
        db.query(User)
        .join(Credential, User.credential_id == Credential.id)
        .filter(Credential.email_address == email_address, User.retired.is_(False))
        .first()
    )


def load_principal(db: Session, email_address: str) -> Principal | None:
    """
    Resolve a token subject to a principal.

    Returns None when no user has the address or the user is retired or locked.
    """
    user = find_by_address(db, email_address)
    if user is None or not user.is_active:
        return None
    return to_principal(user)
