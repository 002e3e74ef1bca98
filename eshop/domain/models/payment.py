from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Dict, List, Optional, Union
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

# Flat, scalar-only extension data attached by the caller
MetadataValue = Union[str, int, float, bool]
PaymentMetadata = Dict[str, MetadataValue]


class PaymentStatus(str, Enum):
    # the mock gateway has no failure path
    SUCCESS = "Success"


class PaymentItem(BaseModel):
    product_id: str
    quantity: int
    unit_price: Decimal

    model_config = {"frozen": True}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PaymentRecord(BaseModel):
    payment_id: UUID = Field(default_factory=uuid4)
    user_id: str
    store_id: Optional[str] = None
    cart_id: Optional[str] = None
    currency: str
    amount: Decimal
    status: PaymentStatus
    payment_method: str
    items: List[PaymentItem]
    metadata: Optional[PaymentMetadata] = None
    created_at: datetime = Field(default_factory=_utcnow)
    processed_at: Optional[datetime] = None

    model_config = {"frozen": True}  # append-only log, records never change
