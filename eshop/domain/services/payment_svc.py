# eshop/domain/services/payment_svc.py

from __future__ import annotations
from datetime import datetime, timezone
from typing import List, Optional, Tuple
from uuid import UUID
import logging

from eshop.domain.errors import NotFoundError
from eshop.domain.models.payment import PaymentItem, PaymentRecord, PaymentStatus
from eshop.domain.repositories.payment_repo import PaymentRepo
from eshop.domain.services.payment_validator import validate_payment_request
from eshop.utils.pagination import normalize_paging

logger = logging.getLogger(__name__)


class PaymentService:
    """
    validate -> build record -> persist.

    The gateway is a mock: every valid request is recorded as Success.
    There is no idempotency key, so a retried request stores a second record.
    """

    def __init__(self, repo: PaymentRepo):
        self.repo = repo

    async def create_payment(self, request) -> PaymentRecord:
        validate_payment_request(request)

        now = datetime.now(timezone.utc)
        record = PaymentRecord(
            user_id=request.user_id,
            store_id=request.store_id,
            cart_id=request.cart_id,
            currency=request.currency,
            amount=request.amount,
            status=PaymentStatus.SUCCESS,
            payment_method=request.payment_method,
            items=[
                PaymentItem(product_id=it.product_id, quantity=it.quantity, unit_price=it.unit_price)
                for it in request.items
            ],
            metadata=request.metadata,
            created_at=now,
            processed_at=now,
        )

        stored = await self.repo.create(record)
        logger.info(
            f"Created payment {stored.payment_id} for user {stored.user_id} "
            f"with amount {stored.amount} {stored.currency}"
        )
        return stored

    async def get_payments(
        self,
        page: int = 1,
        page_size: int = 10,
        status: Optional[str] = None,
    ) -> Tuple[List[PaymentRecord], int]:
        page, page_size = normalize_paging(page, page_size)
        return await self.repo.list(page, page_size, status or None)

    async def get_payment(self, payment_id: UUID) -> PaymentRecord:
        record = await self.repo.get_by_id(payment_id)
        if record is None:
            raise NotFoundError(f"Payment {payment_id} not found")
        return record
