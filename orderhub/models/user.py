"""
OrderHub — User SQLAlchemy Model
=================================

What:  ORM model representing the `users` table.
Who:   Used by UserService/SessionService for CRUD and by Alembic for migrations.

Table Design:
    - UUID primary key generated in Python (portable across PostgreSQL and SQLite)
    - email: unique, indexed (login lookup)
    - password: bcrypt hash only, never serialized by any response schema
    - role: 'customer' (default) or 'sale'
    - created_at / updated_at: UTC, timezone-aware
"""

import enum
import uuid
from datetime import datetime, timezone
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import DateTime, Enum, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from orderhub.database import Base

if TYPE_CHECKING:
    from orderhub.models.delivery import Delivery


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserRole(str, enum.Enum):
    """Role of a user in the system."""

    CUSTOMER = "customer"
    SALE = "sale"


class User(Base):
    """
    A registered account.

    Customers own deliveries; sale users create deliveries, move their
    status and append tracking logs.
    """

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[UserRole] = mapped_column(
        Enum(
            UserRole,
            name="user_role",
            values_callable=lambda members: [m.value for m in members],
        ),
        nullable=False,
        default=UserRole.CUSTOMER,
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

    deliveries: Mapped[List["Delivery"]] = relationship(back_populates="user")

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}', role='{self.role.value}')>"
