"""
OrderHub — Session Route Handlers
==================================

What:  POST /sessions (login). Returns the JWT used by protected routes.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from orderhub.database import get_db_session
from orderhub.docs.openapi import (
    SERVER_ERROR_RESPONSE,
    VALIDATION_ERROR_RESPONSE,
    documented_response,
    example,
    request_body,
)
from orderhub.schemas.session import CreateSessionRequest, CreateSessionResponse
from orderhub.services.session_service import session_service

router = APIRouter(prefix="/sessions", tags=["Sessions"])


@router.post(
    "",
    status_code=201,
    response_model=CreateSessionResponse,
    summary="Log in and obtain a JWT",
    openapi_extra=request_body(
        "CreateSessionRequest",
        {"login": example("Login", {"email": "joao@example.com", "password": "senha123"})},
    ),
    responses={
        201: documented_response("Authenticated", "CreateSessionResponse"),
        400: VALIDATION_ERROR_RESPONSE,
        401: documented_response(
            "Wrong email or password",
            "AppError",
            {"invalidCredentials": example("Invalid credentials", {"message": "Invalid credentials"})},
        ),
        500: SERVER_ERROR_RESPONSE,
    },
)
async def create_session(
    payload: CreateSessionRequest,
    db: AsyncSession = Depends(get_db_session),
) -> CreateSessionResponse:
    """
    Authenticate with email and password. Send the returned token as
    `Authorization: Bearer <token>` on protected routes.
    """
    return await session_service.create_session(db=db, payload=payload)
