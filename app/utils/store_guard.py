"""Translate store-layer failures into BackendUnavailableError."""

from __future__ import annotations

import contextlib
from typing import Iterator

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.exceptions import BackendUnavailableError
from app.infra.logging_config import get_logger

logger = get_logger("store_guard")

# SQLSTATE for unique_violation
UNIQUE_VIOLATION_PGCODE = "23505"


@contextlib.contextmanager
def store_guard(db: Session, action: str) -> Iterator[None]:
    """
    Roll back and raise BackendUnavailableError on any SQLAlchemy error.
    Domain errors raised inside the block pass through untouched.
    """
    try:
        yield
    except SQLAlchemyError as e:
        db.rollback()
        logger.warning("Store failure during %s: %s", action, e)
        raise BackendUnavailableError() from e


def is_unique_violation(error: IntegrityError) -> bool:
    """True when the integrity failure is a unique or primary-key collision."""
    orig = getattr(error, "orig", None)
    if getattr(orig, "pgcode", None) == UNIQUE_VIOLATION_PGCODE:
        return True
    return "UNIQUE constraint failed" in str(orig)
