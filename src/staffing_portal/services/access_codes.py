"""Access code generation and collision-safe issuing."""

import secrets
from typing import Callable, Optional, TypeVar

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
import structlog

from staffing_portal.core.config import settings
from staffing_portal.core.error_handling import (
    ConflictError, ErrorContext, RetryConfig, RetryManager
)
from staffing_portal.core.logging import mask_access_code
from staffing_portal.repositories.client import ClientRepository

logger = structlog.get_logger(__name__)

T = TypeVar("T")

# Crockford base32: digits plus letters without I, L, O, U
ACCESS_CODE_ALPHABET = "0123456789ABCDEFGHJKMNPQRSTVWXYZ"

# Letters people type for the digits they resemble
_LOOKALIKES = str.maketrans("OIL", "011")

_client_repository = ClientRepository()


def normalize_access_code(code: str) -> str:
    """Canonical form of a typed code: trimmed, uppercase, O read as 0 and I or L as 1."""
    return code.strip().upper().translate(_LOOKALIKES)


def generate_access_code(group_size: Optional[int] = None, groups: Optional[int] = None) -> str:
    """Generate a random access code such as ``7K2M-QX9P-...``.

    With the defaults (7 groups of 4) a code carries 140 bits of randomness.
    """
    group_size = group_size or settings.access_code_group_size
    groups = groups or settings.access_code_groups

    return "-".join(
        "".join(secrets.choice(ACCESS_CODE_ALPHABET) for _ in range(group_size))
        for _ in range(groups)
    )


def fresh_access_code(db: Session) -> str:
    """Generate a code that no client holds at the time of the check.

    The unique constraint on ``clients.access_code`` still guards the insert.
    """
    for _ in range(settings.access_code_max_attempts):
        code = generate_access_code()
        if not _client_repository.access_code_exists(db, code):
            return code
        logger.warning("Generated access code already in use", code_prefix=mask_access_code(code))

    raise ConflictError("Could not generate a unique access code")


def issue_with_unique_code(db: Session, unit: Callable[[str], T], operation: str = "issue_access_code") -> T:
    """Run a unit of work that stores a new access code, retrying on collisions.

    ``unit`` receives a fresh code, performs its writes and commits. An
    ``IntegrityError`` rolls the whole unit back and it runs again with a new
    code, up to ``access_code_max_attempts`` times.

    Args:
        db: Database session
        unit: Callable doing the writes for one attempt
        operation: Name used in retry log lines

    Returns:
        Whatever ``unit`` returns

    Raises:
        ConflictError: If every attempt collided
    """
    def attempt() -> T:
        code = fresh_access_code(db)
        try:
            return unit(code)
        except Exception:
            db.rollback()
            raise

    retry_manager = RetryManager(RetryConfig(
        max_attempts=settings.access_code_max_attempts,
        base_delay=0.0,
        jitter=False,
        retryable_exceptions=(IntegrityError,)
    ))

    try:
        return retry_manager.retry(attempt, context=ErrorContext(operation=operation, component="access_codes"))
    except IntegrityError as e:
        raise ConflictError("Could not store a unique access code", original_error=e)
