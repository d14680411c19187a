"""Request helpers shared by the routers."""

from typing import Optional

from fastapi import Request


def client_ip(request: Request) -> Optional[str]:
    """Caller IP, preferring the first X-Forwarded-For hop."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else None


def user_agent(request: Request) -> Optional[str]:
    return request.headers.get("user-agent")
