"""Authentication and authorization module."""

from .decorators import require_admin, require_client, requires_role
from .models import AdminUser, Principal, Role, Token, TokenData
from .utils import create_access_token, verify_token, get_password_hash, verify_password

__all__ = [
    "require_admin",
    "require_client",
    "requires_role",
    "AdminUser",
    "Principal",
    "Role",
    "Token",
    "TokenData",
    "create_access_token",
    "verify_token",
    "get_password_hash",
    "verify_password",
]
