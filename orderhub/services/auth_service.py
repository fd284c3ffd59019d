"""
OrderHub — Authentication Primitives
=====================================

What:  Password hashing (bcrypt) and JWT issuance/verification (PyJWT, HS256).
Who:   UserService hashes on sign-up; SessionService verifies and issues
       tokens; the auth dependency decodes tokens on protected routes.

Token claims:
    sub:  user id (string UUID)
    role: 'customer' | 'sale'
    iat:  issued at
    exp:  iat + JWT_EXPIRES_IN seconds
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

import bcrypt
import jwt

from orderhub.config import settings
from orderhub.exceptions import UnauthorizedError
from orderhub.schemas.common import MAX_PASSWORD_BYTES

logger = logging.getLogger(__name__)


class AuthService:
    """Stateless; configuration is read from `settings` on every call."""

    def hash_password(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def verify_password(self, password: str, password_hash: str) -> bool:
        candidate = password.encode("utf-8")
        if len(candidate) > MAX_PASSWORD_BYTES:
            # Sign-up never stores such a password, so it cannot match
            return False
        try:
            return bcrypt.checkpw(candidate, password_hash.encode("utf-8"))
        except ValueError:
            # Stored value is not a bcrypt hash
            logger.warning("Password check against a malformed hash")
            return False

    def create_token(self, user_id: str, role: str) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "sub": user_id,
            "role": role,
            "iat": now,
            "exp": now + timedelta(seconds=settings.jwt_expires_in),
        }
        return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)

    def decode_token(self, token: str) -> Dict[str, Any]:
        """
        Verify signature and expiry and return the claims.

        Raises:
            UnauthorizedError: token expired, tampered with, or missing claims.
        """
        try:
            return jwt.decode(
                token,
                settings.jwt_secret,
                algorithms=[settings.jwt_algorithm],
                options={"require": ["sub", "exp"]},
            )
        except jwt.ExpiredSignatureError:
            raise UnauthorizedError("Invalid JWT token", context={"reason": "expired"})
        except jwt.InvalidTokenError as e:
            raise UnauthorizedError("Invalid JWT token", context={"reason": type(e).__name__})


auth_service = AuthService()
