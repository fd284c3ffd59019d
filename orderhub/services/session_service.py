"""
OrderHub — Session Service
===========================

What:  Exchanges email + password for a JWT.
Who:   Called by POST /sessions.

Unknown email and wrong password produce the same 401 "Invalid credentials"
so the response does not reveal which emails are registered.
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from orderhub import models
from orderhub.exceptions import DatabaseError, UnauthorizedError
from orderhub.schemas.session import CreateSessionRequest, CreateSessionResponse
from orderhub.schemas.user import UserWithoutPassword
from orderhub.services.auth_service import auth_service

logger = logging.getLogger(__name__)


class SessionService:

    async def create_session(
        self, db: AsyncSession, payload: CreateSessionRequest
    ) -> CreateSessionResponse:
        try:
            result = await db.execute(
                select(models.User).where(models.User.email == payload.email)
            )
            user = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error loading user for login: %s", str(e), exc_info=True)
            raise DatabaseError(context={"error_type": type(e).__name__})

        if user is None or not auth_service.verify_password(payload.password, user.password):
            logger.info("Rejected login attempt")
            raise UnauthorizedError("Invalid credentials")

        token = auth_service.create_token(user_id=str(user.id), role=user.role.value)
        logger.info("Session created for user %s", user.id)

        return CreateSessionResponse(
            token=token,
            user_without_password=UserWithoutPassword.model_validate(user),
        )


session_service = SessionService()
