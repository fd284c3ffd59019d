"""
OrderHub — Delivery and DeliveryLog SQLAlchemy Models
======================================================

What:  ORM models for the `deliveries` and `delivery_logs` tables.

Lifecycle:
    1. A sale user creates a delivery for a customer (status = 'accepted')
    2. Sale users move the status through accepted → production → shipped
       → delivered; every status change appends a log entry
    3. Sale users may append free-text tracking logs at any time
    4. Customers read their own delivery with its logs

Query Patterns:
    - List deliveries with owner summary: selectinload(Delivery.user)
    - Show one delivery with logs: selectinload(Delivery.user, Delivery.logs)
"""

import enum
import uuid
from datetime import datetime
from typing import List, Optional

from sqlalchemy import DateTime, Enum, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from orderhub.database import Base
from orderhub.models.user import User, utcnow


class DeliveryStatus(str, enum.Enum):
    """Processing stage of a delivery."""

    ACCEPTED = "accepted"
    PRODUCTION = "production"
    SHIPPED = "shipped"
    DELIVERED = "delivered"


class Delivery(Base):
    __tablename__ = "deliveries"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    description: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[DeliveryStatus] = mapped_column(
        Enum(
            DeliveryStatus,
            name="delivery_status",
            values_callable=lambda members: [m.value for m in members],
        ),
        nullable=False,
        default=DeliveryStatus.ACCEPTED,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
        onupdate=utcnow,
    )

    user: Mapped[User] = relationship(back_populates="deliveries")
    logs: Mapped[List["DeliveryLog"]] = relationship(
        back_populates="delivery",
        order_by="DeliveryLog.created_at",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Delivery(id={self.id}, status='{self.status.value}')>"


class DeliveryLog(Base):
    """A timestamped tracking event attached to a delivery."""

    __tablename__ = "delivery_logs"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    description: Mapped[str] = mapped_column(String(500), nullable=False)
    delivery_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("deliveries.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
        onupdate=utcnow,
    )

    delivery: Mapped[Delivery] = relationship(back_populates="logs")

    def __repr__(self) -> str:
        return f"<DeliveryLog(id={self.id}, delivery_id={self.delivery_id})>"
