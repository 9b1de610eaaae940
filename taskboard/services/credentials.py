"""Credential store: registered email addresses and their bcrypt password hashes."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from taskboard.core.exceptions import DuplicateIdentityError, NotFoundError
from taskboard.core.security import hash_password, verify_password
from taskboard.models import Credential

logger = logging.getLogger(__name__)


def find_by_address(db: Session, address: str) -> Credential:
    """Return the credential registered under address. Raises NotFoundError if none."""
    credential = (
        db.query(Credential).filter(Credential.email_address == address).first()
    )
    if credential is None:
        raise NotFoundError(f"No credential was found for '{address}'")
    return credential


def create_credential(db: Session, address: str, plain_password: str) -> Credential:
    """
    Hash and persist a new credential (flushed, not committed).

    Raises DuplicateIdentityError if the address is already registered, including
    when a concurrent registration wins the unique index between the check and the
    insert. The caller commits together with the owning user.
    """
    existing = (
        db.query(Credential.id).filter(Credential.email_address == address).first()
    )
    if existing is not None:
        logger.info(
            "Cannot register an address already used by credential '%s'", existing.id
        )
        raise DuplicateIdentityError()

    credential = Credential(
        email_address=address,
        password_hash=hash_password(plain_password),
    )
    db.add(credential)
    try:
        db.flush()
    except IntegrityError as e:
        db.rollback()
        logger.info("Concurrent registration claimed the address first")
        raise DuplicateIdentityError() from e
    return credential


def verify_credential(db: Session, address: str, plain_password: str) -> bool:
    """
    Check plain_password against the stored hash for address.

    Returns False on mismatch; raises NotFoundError only if the address is unknown.
    """
    credential = find_by_address(db, address)
    return verify_password(plain_password, credential.password_hash)


def change_password(db: Session, address: str, new_plain_password: str) -> Credential:
    """Re-hash and store a new password for an existing credential."""
    credential = find_by_address(db, address)
    credential.password_hash = hash_password(new_plain_password)
    db.commit()
    logger.info("Updated password for credential %s", credential.id)
    return credential
