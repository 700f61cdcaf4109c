# key_registry/core/user.py

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from key_registry.core.errors import DatabaseError, EmailAlreadyRegisteredError
from key_registry.infra.postgres import store_errors
from key_registry.models.user import EMAIL_UNIQUE_CONSTRAINT, User

logger = logging.getLogger(__name__)


def is_email_conflict(error: IntegrityError) -> bool:
    """True when the integrity error comes from the email unique constraint."""
    orig = error.orig
    diag = getattr(orig, "diag", None)
    constraint = getattr(diag, "constraint_name", None)
    if constraint is not None:
        return constraint == EMAIL_UNIQUE_CONSTRAINT
    # Drivers without diagnostics (sqlite) only name the column
    message = str(orig)
    return EMAIL_UNIQUE_CONSTRAINT in message or "users.email" in message


def get_aggregated_public_key(db: Session, email: str) -> str | None:
    """Get the aggregated public key registered for email, or None"""
    with store_errors(db, "lookup"):
        return db.execute(
            select(User.aggregated_public_key).where(User.email == email)
        ).scalar_one_or_none()


def register_user(db: Session, email: str, private_key: str, aggregated_public_key: str) -> bool:
    """
    Insert a new user in a single transaction and return its active flag.
    Nothing is committed unless the insert succeeds.
    """
    user = User(
        email=email,
        private_key=private_key,
        aggregated_public_key=aggregated_public_key,
    )

    try:
        with store_errors(db, "insert"):
            db.add(user)
            db.flush()
            active = user.active
            db.commit()
    except IntegrityError as e:
        if is_email_conflict(e):
            logger.info(f"Email already registered: {email}")
            raise EmailAlreadyRegisteredError(email) from e
        logger.error(f"DB integrity error during insert: {e}")
        raise DatabaseError("insert") from e

    if not active:
        logger.warning(f"User {email} was created inactive; reporting success=false")
    return active
