"""Roles and permissions: lookup by code, uniqueness among active codes, retirement."""

import logging

from sqlalchemy.orm import Session

from taskboard.core.exceptions import AlreadyExistsError, NotFoundError
from taskboard.models import Permission, Role
from taskboard.services.pagination import paginate

logger = logging.getLogger(__name__)


def _active_permission(db: Session, code: str) -> Permission | None:
    return (
        db.query(Permission)
        .filter(Permission.code == code, Permission.retired.is_(False))
        .first()
    )


def _active_role(db: Session, code: str) -> Role | None:
    return db.query(Role).filter(Role.code == code, Role.retired.is_(False)).first()


def find_permission(db: Session, code: str) -> Permission:
    permission = _active_permission(db, code)
    if permission is None:
        logger.warning("Could not find permission with code '%s'", code)
        raise NotFoundError(f"Could not find permission with code '{code}'")
    return permission


def list_permissions(db: Session, page: int, size: int) -> tuple[list[Permission], int]:
    query = db.query(Permission).filter(Permission.retired.is_(False)).order_by(Permission.code)
    return paginate(query, page, size)


def create_permission(db: Session, code: str, description: str) -> Permission:
    """Create a permission. Raises AlreadyExistsError if an active one has this code."""
    if _active_permission(db, code) is not None:
        raise AlreadyExistsError(f"Can't create permission with code '{code}' as it already exists")
    permission = Permission(code=code, description=description)
    db.add(permission)
    db.commit()
    logger.info("Created permission '%s'", code)
    return permission


def update_permission(db: Session, code: str, new_code: str, description: str) -> Permission:
    permission = find_permission(db, code)
    if new_code != code and _active_permission(db, new_code) is not None:
        raise AlreadyExistsError(f"Can't update permission to code '{new_code}' as it already exists")
    permission.code = new_code
    permission.description = description
    db.commit()
    logger.info("Updated permission %s", permission.id)
    return permission


def retire_permission(db: Session, code: str) -> None:
    permission = find_permission(db, code)
    permission.retire()
    db.commit()
    logger.info("Retired permission %s", permission.id)


def find_role(db: Session, code: str) -> Role:
    role = _active_role(db, code)
    if role is None:
        logger.warning("Could not find role with code '%s'", code)
        raise NotFoundError(f"Could not find role with code '{code}'")
    return role


def find_roles(db: Session, codes: list[str]) -> list[Role]:
    """Resolve every code to an active role. Raises NotFoundError naming the first missing code."""
    return [find_role(db, code) for code in dict.fromkeys(codes)]


def list_roles(db: Session, page: int, size: int) -> tuple[list[Role], int]:
    query = db.query(Role).filter(Role.retired.is_(False)).order_by(Role.code)
    return paginate(query, page, size)


def create_role(
    db: Session,
    code: str,
    description: str,
    permission_codes: list[str] | None = None,
) -> Role:
    """Create a role holding the given permissions. Raises AlreadyExistsError on a taken code."""
    if _active_role(db, code) is not None:
        raise AlreadyExistsError(f"Can't create role with code '{code}' as it already exists")
    permissions = [find_permission(db, c) for c in dict.fromkeys(permission_codes or [])]
    role = Role(code=code, description=description, permissions=permissions)
    db.add(role)
    db.commit()
    logger.info("Created role '%s' with permissions [%s]", code, ", ".join(p.code for p in permissions))
    return role


def update_role(db: Session, code: str, new_code: str, description: str) -> Role:
    role = find_role(db, code)
    if new_code != code and _active_role(db, new_code) is not None:
        raise AlreadyExistsError(f"Can't update role to code '{new_code}' as it already exists")
    role.code = new_code
    role.description = description
    db.commit()
    logger.info("Updated role %s", role.id)
    return role


def retire_role(db: Session, code: str) -> None:
    role = find_role(db, code)
    role.retire()
    db.commit()
    logger.info("Retired role %s", role.id)
