"""Role checks applied at the service boundary."""

from functools import wraps
from typing import Callable, Optional

import structlog

from staffing_portal.core.error_handling import AuthenticationError, AuthorizationError
from .models import Principal, Role

logger = structlog.get_logger(__name__)


def ensure_role(principal: Optional[Principal], role: Role) -> Principal:
    """Return the principal if it carries ``role``.

    Raises:
        AuthenticationError: If there is no authenticated caller
        AuthorizationError: If the caller has a different role
    """
    if principal is None:
        logger.warning("Unauthenticated call to role-restricted operation", required_role=role.value)
        raise AuthenticationError("Please log in to access this area")

    if principal.role != role:
        logger.warning(
            "Role check failed",
            subject_id=str(principal.subject_id),
            role=principal.role.value,
            required_role=role.value
        )
        raise AuthorizationError("You don't have permission to access this area")

    return principal


def require_admin(principal: Optional[Principal]) -> Principal:
    return ensure_role(principal, Role.ADMIN)


def require_client(principal: Optional[Principal]) -> Principal:
    return ensure_role(principal, Role.CLIENT)


def requires_role(role: Role) -> Callable:
    """Decorator for service methods whose instance holds ``self.principal``.

    Args:
        role: Role the caller must have

    Returns:
        Decorator function
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(self, *args, **kwargs):
            ensure_role(self.principal, role)
            return func(self, *args, **kwargs)

        return wrapper

    return decorator
