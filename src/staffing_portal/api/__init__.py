"""HTTP routers."""

from .admin import router as admin_router
from .auth import router as auth_router
from .client import router as client_router
from .public import router as public_router

__all__ = ["admin_router", "auth_router", "client_router", "public_router"]
