"""
OrderHub — User Route Handlers
===============================

What:  POST /users (sign up). No authentication required.
How:   Validates the body (CreateUserRequest), delegates to UserService,
       returns 201 with the new user (password never included).
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from orderhub.database import get_db_session
from orderhub.docs.openapi import (
    SERVER_ERROR_RESPONSE,
    documented_response,
    example,
    request_body,
    validation_example,
)
from orderhub.schemas.user import CreateUserRequest, CreateUserResponse
from orderhub.services.user_service import user_service

router = APIRouter(prefix="/users", tags=["Users"])


@router.post(
    "",
    status_code=201,
    response_model=CreateUserResponse,
    summary="Create a new user",
    openapi_extra=request_body(
        "CreateUserRequest",
        {
            "customer": example(
                "Create a customer",
                {"name": "João Silva", "email": "joao@example.com", "password": "senha123"},
            ),
            "sale": example(
                "Create a seller",
                {
                    "name": "Maria Santos",
                    "email": "maria@example.com",
                    "password": "senha456",
                    "role": "sale",
                },
            ),
        },
    ),
    responses={
        201: documented_response(
            "User created",
            "CreateUserResponse",
            {
                "success": example(
                    "User created",
                    {
                        "newUser": {
                            "id": "123e4567-e89b-12d3-a456-426614174000",
                            "name": "João Silva",
                            "email": "joao@example.com",
                            "role": "customer",
                            "createdAt": "2024-01-15T10:30:00.000Z",
                            "updatedAt": None,
                        }
                    },
                )
            },
        ),
        400: documented_response(
            "Request data failed validation",
            "ValidationError",
            {
                "invalidEmail": example(
                    "Invalid email",
                    validation_example(
                        {"field": "email", "message": "Invalid email", "code": "invalid_string"}
                    ),
                ),
                "shortPassword": example(
                    "Password too short",
                    validation_example(
                        {
                            "field": "password",
                            "message": "String must contain at least 6 character(s)",
                            "code": "too_small",
                        }
                    ),
                ),
                "missingFields": example(
                    "Missing required fields",
                    validation_example(
                        {"field": "name", "message": "Required", "code": "invalid_type"},
                        {"field": "email", "message": "Required", "code": "invalid_type"},
                    ),
                ),
            },
        ),
        409: documented_response(
            "Email already registered",
            "AppError",
            {"duplicate": example("Duplicate email", {"message": "User with same email already exists"})},
        ),
        500: SERVER_ERROR_RESPONSE,
    },
)
async def create_user(
    payload: CreateUserRequest,
    db: AsyncSession = Depends(get_db_session),
) -> CreateUserResponse:
    """
    Create a new user account. Users are created as "customer" by default
    or as "sale" (seller). The password must be 6 characters to 72 bytes long.

    **Note:** this route does not require authentication.
    """
    return await user_service.create_user(db=db, payload=payload)
