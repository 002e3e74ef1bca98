# eshop/api/v1/routers/payments.py
from fastapi import APIRouter, Depends, HTTPException, Query
from typing import Optional
from uuid import UUID
import time
import logging

from eshop.api.deps import payment_service_dep
from eshop.api.v1.schemas.payments import (
    CreatePaymentRequest,
    CreatePaymentResponse,
    PaymentListResponse,
    PaymentOut,
)
from eshop.domain.errors import NotFoundError, ValidationError
from eshop.domain.services.payment_svc import PaymentService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/payments", tags=["payments"])


@router.post("", response_model=CreatePaymentResponse, status_code=201)
async def create_payment(
    request: CreatePaymentRequest,
    svc: PaymentService = Depends(payment_service_dep),
):
    """
    Record a payment. The gateway is mocked: valid requests always succeed.
    400 on validation failure, 500 (generic message) on any other error.
    """
    logger.info(f"Request: create_payment user_id={request.user_id} amount={request.amount} {request.currency}")
    start_time = time.perf_counter()
    try:
        record = await svc.create_payment(request)
    except ValidationError as e:
        # expected client mistake, not a failure
        logger.info(f"Rejected payment for user_id={request.user_id}: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to create payment for user {request.user_id}: {e}")
        raise HTTPException(status_code=500, detail="Internal server error occurred while processing payment")

    logger.info(
        f"Response: create_payment payment_id={record.payment_id} user_id={record.user_id} "
        f"elapsed_time={time.perf_counter() - start_time:.4f}s"
    )
    return CreatePaymentResponse(
        payment_id=str(record.payment_id),
        status=record.status.value,
        processed_at=record.processed_at or record.created_at,
    )


@router.get("", response_model=PaymentListResponse)
async def get_payments(
    page: int = Query(1),
    page_size: int = Query(10, alias="pageSize"),
    status: Optional[str] = Query(None),
    svc: PaymentService = Depends(payment_service_dep),
):
    """Newest first. page < 1 becomes 1; pageSize outside [1, 100] becomes 10."""
    logger.info(f"Request: get_payments page={page} page_size={page_size} status={status}")
    try:
        items, total = await svc.get_payments(page, page_size, status)
    except Exception as e:
        logger.error(f"Failed to get payments for page {page}: {e}")
        raise HTTPException(status_code=500, detail="Internal server error occurred while retrieving payments")
    return PaymentListResponse(items=[PaymentOut.from_record(r) for r in items], total_count=total)


@router.get("/{payment_id}", response_model=PaymentOut)
async def get_payment(
    payment_id: str,
    svc: PaymentService = Depends(payment_service_dep),
):
    try:
        pid = UUID(payment_id)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid payment ID format")

    try:
        record = await svc.get_payment(pid)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Payment not found")
    except Exception as e:
        logger.error(f"Failed to get payment {payment_id}: {e}")
        raise HTTPException(status_code=500, detail="Internal server error occurred while retrieving payment")

    return PaymentOut.from_record(record)
