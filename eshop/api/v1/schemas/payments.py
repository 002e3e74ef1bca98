# eshop/api/v1/schemas/payments.py
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from eshop.api.v1.schemas.base import CamelModel, Money
from eshop.domain.models.payment import PaymentMetadata, PaymentRecord


# Request fields are optional so missing or null data is reported by the
# payment validator as a 400 with a readable reason, not as a 422.
class PaymentItemIn(CamelModel):
    product_id: str = ""
    quantity: int = 0
    unit_price: Decimal = Decimal("0")


class CreatePaymentRequest(CamelModel):
    user_id: Optional[str] = None
    store_id: Optional[str] = None
    cart_id: Optional[str] = None
    currency: Optional[str] = None
    amount: Optional[Decimal] = None
    items: Optional[List[PaymentItemIn]] = None
    payment_method: Optional[str] = None
    metadata: Optional[PaymentMetadata] = None


class CreatePaymentResponse(CamelModel):
    payment_id: str
    status: str
    processed_at: datetime


class PaymentItemOut(CamelModel):
    product_id: str
    quantity: int
    unit_price: Money


class PaymentOut(CamelModel):
    payment_id: str
    user_id: str
    store_id: Optional[str] = None
    cart_id: Optional[str] = None
    currency: str
    amount: Money
    status: str
    payment_method: str
    items: List[PaymentItemOut]
    metadata: Optional[PaymentMetadata] = None
    created_at: datetime
    processed_at: Optional[datetime] = None

    @classmethod
    def from_record(cls, record: PaymentRecord) -> "PaymentOut":
        return cls(
            payment_id=str(record.payment_id),
            user_id=record.user_id,
            store_id=record.store_id,
            cart_id=record.cart_id,
            currency=record.currency,
            amount=record.amount,
            status=record.status.value,
            payment_method=record.payment_method,
            items=[PaymentItemOut(**it.model_dump()) for it in record.items],
            metadata=record.metadata,
            created_at=record.created_at,
            processed_at=record.processed_at,
        )


class PaymentListResponse(CamelModel):
    items: List[PaymentOut]
    total_count: int
