"""
OrderHub — User Service
========================

What:  Sign-up: uniqueness check, password hashing, persistence.
Who:   Called by POST /users.

Error Handling:
    Duplicate email      → ConflictError (409)
    Any other DB failure → DatabaseError (500, details logged)
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from orderhub import models
from orderhub.exceptions import ConflictError, DatabaseError
from orderhub.schemas.user import CreateUserRequest, CreateUserResponse, UserWithoutPassword
from orderhub.services.auth_service import auth_service

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL_MESSAGE = "User with same email already exists"


class UserService:

    async def create_user(self, db: AsyncSession, payload: CreateUserRequest) -> CreateUserResponse:
        """
        Register a new user.

        Args:
            db: Async database session (injected by FastAPI)
            payload: Validated sign-up body; role already defaulted to customer

        Returns:
            CreateUserResponse wrapping the stored user, without its password

        Raises:
            ConflictError: the email is already registered
            DatabaseError: the insert failed for any other reason
        """
        try:
            existing = await db.execute(
                select(models.User.id).where(models.User.email == payload.email)
            )
            if existing.scalar_one_or_none() is not None:
                raise ConflictError(DUPLICATE_EMAIL_MESSAGE)

            user = models.User(
                name=payload.name,
                email=payload.email,
                password=auth_service.hash_password(payload.password),
                role=payload.role,
            )
            db.add(user)
            # Flush so a concurrent duplicate surfaces here as IntegrityError
            await db.flush()

        except IntegrityError:
            raise ConflictError(DUPLICATE_EMAIL_MESSAGE)
        except SQLAlchemyError as e:
            logger.error("Database error creating user: %s", str(e), exc_info=True)
            raise DatabaseError(context={"error_type": type(e).__name__})

        logger.info("User created: %s (role=%s)", user.id, user.role.value)
        return CreateUserResponse(new_user=UserWithoutPassword.model_validate(user))


user_service = UserService()
