"""
OrderHub — Delivery Service
============================

What:  Create deliveries, list them with their owner, and change their status.
Who:   Called by the /deliveries routes (sale role only).

Status changes:
    Any DeliveryStatus may be set from any other; only membership in the
    enum is validated (by the request schema). Every change appends a
    DeliveryLog whose description is the new status, so the tracking
    history records each transition.
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from orderhub import models
from orderhub.exceptions import DatabaseError, NotFoundError
from orderhub.schemas.delivery import (
    CreateDeliveryRequest,
    DeliveriesListResponse,
    Delivery,
    DeliveryUserSummary,
    UpdateDeliveryStatusRequest,
)

logger = logging.getLogger(__name__)


def to_delivery_schema(delivery: models.Delivery, include_user: bool = False) -> Delivery:
    """
    Build the response model without touching unloaded relationships.

    Async sessions cannot lazy-load, so `user` is only read when the caller
    eager-loaded it.
    """
    return Delivery(
        id=delivery.id,
        user_id=delivery.user_id,
        description=delivery.description,
        status=delivery.status,
        created_at=delivery.created_at,
        updated_at=delivery.updated_at,
        user=DeliveryUserSummary.model_validate(delivery.user) if include_user else None,
    )


class DeliveryService:

    async def create_delivery(self, db: AsyncSession, payload: CreateDeliveryRequest) -> Delivery:
        """
        Create a delivery for an existing customer.

        Raises:
            NotFoundError: user_id does not match any user (→ 404)
            DatabaseError: insert failed (→ 500)
        """
        try:
            owner = await db.get(models.User, payload.user_id)
            if owner is None:
                raise NotFoundError(resource="user", resource_id=str(payload.user_id))

            delivery = models.Delivery(
                user_id=owner.id,
                description=payload.description,
                status=models.DeliveryStatus.ACCEPTED,
            )
            db.add(delivery)
            await db.flush()

        except SQLAlchemyError as e:
            logger.error("Database error creating delivery: %s", str(e), exc_info=True)
            raise DatabaseError(context={"error_type": type(e).__name__})

        logger.info("Delivery %s created for user %s", delivery.id, delivery.user_id)
        return to_delivery_schema(delivery)

    async def list_deliveries(self, db: AsyncSession) -> DeliveriesListResponse:
        """All deliveries, newest first, each with its owner's name and email."""
        try:
            result = await db.execute(
                select(models.Delivery)
                .options(selectinload(models.Delivery.user))
                .order_by(models.Delivery.created_at.desc())
            )
            deliveries = list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error listing deliveries: %s", str(e), exc_info=True)
            raise DatabaseError(context={"error_type": type(e).__name__})

        return DeliveriesListResponse(
            deliveries=[to_delivery_schema(d, include_user=True) for d in deliveries]
        )

    async def update_status(
        self, db: AsyncSession, payload: UpdateDeliveryStatusRequest
    ) -> Delivery:
        """
        Set a delivery's status and record the change as a log entry.

        Raises:
            NotFoundError: no delivery with payload.id (→ 404)
        """
        try:
            delivery = await db.get(models.Delivery, payload.id)
            if delivery is None:
                raise NotFoundError(resource="delivery", resource_id=str(payload.id))

            previous = delivery.status
            delivery.status = payload.status
            delivery.updated_at = datetime.now(timezone.utc)
            db.add(
                models.DeliveryLog(
                    delivery_id=delivery.id,
                    description=payload.status.value,
                )
            )
            await db.flush()

        except SQLAlchemyError as e:
            logger.error("Database error updating delivery %s: %s", payload.id, str(e), exc_info=True)
            raise DatabaseError(context={"delivery_id": str(payload.id)})

        logger.info(
            "Delivery %s status %s -> %s", delivery.id, previous.value, delivery.status.value
        )
        return to_delivery_schema(delivery)


delivery_service = DeliveryService()
