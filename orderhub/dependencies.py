"""
OrderHub — Authentication Dependencies
=======================================

What:  FastAPI dependencies that authenticate the bearer JWT and authorize
       the caller's role.

Usage:
    from orderhub.dependencies import AuthenticatedUser, require_roles

    @router.get("/deliveries")
    async def list_deliveries(
        user: AuthenticatedUser = Depends(require_roles(UserRole.SALE)),
    ):
        ...

Failures are raised as AppError subclasses so the global handlers render
them as {"message": ...}:
    no Authorization header     → 401 "JWT token not found"
    bad / expired token         → 401 "Invalid JWT token"
    role not allowed            → 403 "Unauthorized"
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional
from uuid import UUID

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from orderhub.exceptions import ForbiddenError, UnauthorizedError
from orderhub.models.user import UserRole
from orderhub.services.auth_service import auth_service

logger = logging.getLogger(__name__)

# auto_error=False: missing credentials are reported by get_current_user,
# in the AppError shape, instead of FastAPI's own 403
bearer_scheme = HTTPBearer(
    scheme_name="bearerAuth",
    bearerFormat="JWT",
    auto_error=False,
)


@dataclass(frozen=True)
class AuthenticatedUser:
    id: UUID
    role: UserRole


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> AuthenticatedUser:
    """Decode the bearer token into the caller's id and role."""
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("JWT token not found")

    claims = auth_service.decode_token(credentials.credentials)

    try:
        return AuthenticatedUser(id=UUID(str(claims["sub"])), role=UserRole(claims.get("role")))
    except (KeyError, ValueError):
        logger.warning("Token with unusable claims rejected")
        raise UnauthorizedError("Invalid JWT token")


def require_roles(*roles: UserRole) -> Callable[..., AuthenticatedUser]:
    """Dependency factory: authenticate, then require one of `roles`."""
    allowed = set(roles)

    async def dependency(
        user: AuthenticatedUser = Depends(get_current_user),
    ) -> AuthenticatedUser:
        if user.role not in allowed:
            raise ForbiddenError("Unauthorized", context={"role": user.role.value})
        return user

    return dependency
