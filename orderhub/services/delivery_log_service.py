"""
OrderHub — Delivery Log Service
================================

What:  Append tracking events to a delivery and show a delivery with its
       full history.
Who:   Called by the /delivery-logs routes.

Access rules:
    - Appending logs: sale users (enforced by the route dependency)
    - Showing a delivery: sale users see any delivery; customers only
      deliveries they own (ForbiddenError otherwise)
"""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from orderhub import models
from orderhub.dependencies import AuthenticatedUser
from orderhub.exceptions import DatabaseError, ForbiddenError, NotFoundError
from orderhub.schemas.delivery import (
    CreateDeliveryLogRequest,
    DeliveryLog,
    DeliveryUserSummary,
    DeliveryWithLogsResponse,
)

logger = logging.getLogger(__name__)

FOREIGN_DELIVERY_MESSAGE = "The user can only view their own deliveries"


class DeliveryLogService:

    async def create_log(self, db: AsyncSession, payload: CreateDeliveryLogRequest) -> DeliveryLog:
        """
        Append a tracking event.

        Raises:
            NotFoundError: delivery_id does not match any delivery (→ 404)
        """
        try:
            delivery = await db.get(models.Delivery, payload.delivery_id)
            if delivery is None:
                raise NotFoundError(resource="delivery", resource_id=str(payload.delivery_id))

            log = models.DeliveryLog(
                delivery_id=delivery.id,
                description=payload.description,
            )
            db.add(log)
            await db.flush()

        except SQLAlchemyError as e:
            logger.error("Database error creating delivery log: %s", str(e), exc_info=True)
            raise DatabaseError(context={"delivery_id": str(payload.delivery_id)})

        logger.info("Log %s appended to delivery %s", log.id, log.delivery_id)
        return DeliveryLog.model_validate(log)

    async def show(
        self, db: AsyncSession, delivery_id: UUID, viewer: AuthenticatedUser
    ) -> DeliveryWithLogsResponse:
        """
        A delivery with its owner summary and logs (oldest first).

        Raises:
            NotFoundError: unknown delivery (→ 404)
            ForbiddenError: a customer asked for someone else's delivery (→ 403)
        """
        try:
            result = await db.execute(
                select(models.Delivery)
                .where(models.Delivery.id == delivery_id)
                .options(
                    selectinload(models.Delivery.user),
                    selectinload(models.Delivery.logs),
                )
            )
            delivery = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error loading delivery %s: %s", delivery_id, str(e), exc_info=True)
            raise DatabaseError(context={"delivery_id": str(delivery_id)})

        if delivery is None:
            raise NotFoundError(resource="delivery", resource_id=str(delivery_id))

        if viewer.role == models.UserRole.CUSTOMER and delivery.user_id != viewer.id:
            raise ForbiddenError(
                FOREIGN_DELIVERY_MESSAGE,
                context={"delivery_id": str(delivery_id), "user_id": str(viewer.id)},
            )

        return DeliveryWithLogsResponse(
            id=delivery.id,
            user_id=delivery.user_id,
            description=delivery.description,
            status=delivery.status,
            created_at=delivery.created_at,
            updated_at=delivery.updated_at,
            user=DeliveryUserSummary.model_validate(delivery.user),
            logs=[DeliveryLog.model_validate(log) for log in delivery.logs],
        )


delivery_log_service = DeliveryLogService()
