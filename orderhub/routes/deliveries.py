"""
OrderHub — Delivery Route Handlers
===================================

Route Inventory (all require a "sale" user):
    POST  /deliveries          create a delivery for a customer
    GET   /deliveries          list deliveries with owner summary
    PATCH /deliveries/status   change a delivery's status (appends a log)
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from orderhub.database import get_db_session
from orderhub.dependencies import AuthenticatedUser, require_roles
from orderhub.docs.openapi import (
    FORBIDDEN_RESPONSE,
    SERVER_ERROR_RESPONSE,
    UNAUTHENTICATED_RESPONSE,
    VALIDATION_ERROR_RESPONSE,
    documented_response,
    example,
    request_body,
)
from orderhub.models.user import UserRole
from orderhub.schemas.delivery import (
    CreateDeliveryRequest,
    DeliveriesListResponse,
    Delivery,
    UpdateDeliveryStatusRequest,
)
from orderhub.services.delivery_service import delivery_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/deliveries", tags=["Deliveries"])

sale_only = require_roles(UserRole.SALE)

AUTH_RESPONSES = {401: UNAUTHENTICATED_RESPONSE, 403: FORBIDDEN_RESPONSE, 500: SERVER_ERROR_RESPONSE}


@router.post(
    "",
    status_code=201,
    response_model=Delivery,
    summary="Create a delivery",
    openapi_extra=request_body(
        "CreateDeliveryRequest",
        {
            "delivery": example(
                "New delivery",
                {
                    "user_id": "123e4567-e89b-12d3-a456-426614174000",
                    "description": "Entrega de produtos eletrônicos",
                },
            )
        },
    ),
    responses={
        201: documented_response("Delivery created", "Delivery"),
        400: VALIDATION_ERROR_RESPONSE,
        404: documented_response(
            "Owner not found",
            "AppError",
            {"userNotFound": example("Unknown user", {"message": "User not found"})},
        ),
        **AUTH_RESPONSES,
    },
)
async def create_delivery(
    payload: CreateDeliveryRequest,
    user: AuthenticatedUser = Depends(sale_only),
    db: AsyncSession = Depends(get_db_session),
) -> Delivery:
    """Create a delivery for an existing user. New deliveries start as "accepted"."""
    logger.info("User %s creating delivery for %s", user.id, payload.user_id)
    return await delivery_service.create_delivery(db=db, payload=payload)


@router.get(
    "",
    response_model=DeliveriesListResponse,
    summary="List deliveries",
    responses={
        200: documented_response("Deliveries, newest first", "DeliveriesListResponse"),
        **AUTH_RESPONSES,
    },
)
async def list_deliveries(
    user: AuthenticatedUser = Depends(sale_only),
    db: AsyncSession = Depends(get_db_session),
) -> DeliveriesListResponse:
    """List every delivery with the owner's name and email."""
    return await delivery_service.list_deliveries(db=db)


@router.patch(
    "/status",
    response_model=Delivery,
    summary="Update a delivery's status",
    openapi_extra=request_body(
        "UpdateDeliveryStatusRequest",
        {
            "shipped": example(
                "Mark as shipped",
                {"id": "123e4567-e89b-12d3-a456-426614174000", "status": "shipped"},
            )
        },
    ),
    responses={
        200: documented_response("Status updated", "Delivery"),
        400: VALIDATION_ERROR_RESPONSE,
        404: documented_response(
            "Delivery not found",
            "AppError",
            {"deliveryNotFound": example("Unknown delivery", {"message": "Delivery not found"})},
        ),
        **AUTH_RESPONSES,
    },
)
async def update_delivery_status(
    payload: UpdateDeliveryStatusRequest,
    user: AuthenticatedUser = Depends(sale_only),
    db: AsyncSession = Depends(get_db_session),
) -> Delivery:
    """
    Set the status of a delivery (accepted, production, shipped, delivered).
    A tracking log with the new status is appended automatically.
    """
    return await delivery_service.update_status(db=db, payload=payload)
