"""
OrderHub — Delivery Log Route Handlers
=======================================

Route Inventory:
    POST /delivery-logs                       append a tracking log (sale)
    GET  /delivery-logs/{delivery_id}/show    delivery + logs (customer: own only, sale: any)
"""

from uuid import UUID

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
    CreateDeliveryLogRequest,
    DeliveryLog,
    DeliveryWithLogsResponse,
)
from orderhub.services.delivery_log_service import delivery_log_service

router = APIRouter(prefix="/delivery-logs", tags=["Delivery Logs"])

DELIVERY_NOT_FOUND_RESPONSE = documented_response(
    "Delivery not found",
    "AppError",
    {"deliveryNotFound": example("Unknown delivery", {"message": "Delivery not found"})},
)


@router.post(
    "",
    status_code=201,
    response_model=DeliveryLog,
    summary="Add a tracking log to a delivery",
    openapi_extra=request_body(
        "CreateDeliveryLogRequest",
        {
            "outForDelivery": example(
                "Out for delivery",
                {
                    "delivery_id": "123e4567-e89b-12d3-a456-426614174000",
                    "description": "Pacote saiu para entrega",
                },
            )
        },
    ),
    responses={
        201: documented_response("Log created", "DeliveryLog"),
        400: VALIDATION_ERROR_RESPONSE,
        401: UNAUTHENTICATED_RESPONSE,
        403: FORBIDDEN_RESPONSE,
        404: DELIVERY_NOT_FOUND_RESPONSE,
        500: SERVER_ERROR_RESPONSE,
    },
)
async def create_delivery_log(
    payload: CreateDeliveryLogRequest,
    user: AuthenticatedUser = Depends(require_roles(UserRole.SALE)),
    db: AsyncSession = Depends(get_db_session),
) -> DeliveryLog:
    """Append a tracking event to a delivery."""
    return await delivery_log_service.create_log(db=db, payload=payload)


@router.get(
    "/{delivery_id}/show",
    response_model=DeliveryWithLogsResponse,
    summary="Show a delivery with its logs",
    responses={
        200: documented_response("Delivery with logs and owner", "DeliveryWithLogsResponse"),
        400: VALIDATION_ERROR_RESPONSE,
        401: UNAUTHENTICATED_RESPONSE,
        403: documented_response(
            "Wrong role, or a customer asking for another user's delivery",
            "AppError",
            {
                "foreign": example(
                    "Not the owner",
                    {"message": "The user can only view their own deliveries"},
                )
            },
        ),
        404: DELIVERY_NOT_FOUND_RESPONSE,
        500: SERVER_ERROR_RESPONSE,
    },
)
async def show_delivery(
    delivery_id: UUID,
    user: AuthenticatedUser = Depends(require_roles(UserRole.CUSTOMER, UserRole.SALE)),
    db: AsyncSession = Depends(get_db_session),
) -> DeliveryWithLogsResponse:
    """
    Return a delivery with its owner summary and full tracking history.
    Customers may only view their own deliveries.
    """
    return await delivery_log_service.show(db=db, delivery_id=delivery_id, viewer=user)
