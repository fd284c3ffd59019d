"""
Delivery and delivery log request/response schemas.

`Delivery.user` and `Delivery.logs` are only populated by the endpoints that
load those relationships (list and show); elsewhere they serialize as null.
"""

import uuid
from typing import List, Optional

from pydantic import BaseModel, Field

from orderhub.models.delivery import DeliveryStatus
from orderhub.schemas.common import CamelModel, UtcDatetime


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class DeliveryLog(CamelModel):
    id: uuid.UUID
    description: str
    delivery_id: uuid.UUID
    created_at: UtcDatetime
    updated_at: Optional[UtcDatetime] = None


class DeliveryUserSummary(CamelModel):
    name: str
    email: str


class Delivery(CamelModel):
    id: uuid.UUID
    user_id: uuid.UUID
    description: str
    status: DeliveryStatus
    created_at: UtcDatetime
    updated_at: Optional[UtcDatetime] = None
    user: Optional[DeliveryUserSummary] = None
    logs: Optional[List[DeliveryLog]] = None


class DeliveryWithLogsResponse(Delivery):
    """A delivery with its owner summary and full log history."""


class DeliveriesListResponse(CamelModel):
    deliveries: List[Delivery]


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class CreateDeliveryRequest(BaseModel):
    user_id: uuid.UUID = Field(description="Customer who owns the delivery")
    description: str = Field(min_length=1, examples=["Entrega de produtos eletrônicos"])


class UpdateDeliveryStatusRequest(BaseModel):
    id: uuid.UUID = Field(description="Delivery to update")
    status: DeliveryStatus


class CreateDeliveryLogRequest(BaseModel):
    delivery_id: uuid.UUID = Field(description="Delivery the log belongs to")
    description: str = Field(min_length=1, max_length=500, examples=["Pacote saiu para entrega"])
