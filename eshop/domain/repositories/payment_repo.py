# eshop/domain/repositories/payment_repo.py

from __future__ import annotations
from typing import Any, Dict, List, Optional, Tuple
from decimal import Decimal
from uuid import UUID
import logging

from bson.decimal128 import Decimal128
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import DESCENDING
from pymongo.errors import PyMongoError

from eshop.domain.errors import StorageError
from eshop.domain.models.payment import PaymentRecord
from eshop.utils.pagination import page_offset

logger = logging.getLogger(__name__)


def _dec(value: Any) -> Any:
    return value.to_decimal() if isinstance(value, Decimal128) else value


def _to_doc(record: PaymentRecord) -> Dict[str, Any]:
    """Money goes in as Decimal128 so amounts round-trip exactly."""
    return {
        "_id": str(record.payment_id),
        "user_id": record.user_id,
        "store_id": record.store_id,
        "cart_id": record.cart_id,
        "currency": record.currency,
        "amount": Decimal128(record.amount),
        "status": record.status.value,
        "payment_method": record.payment_method,
        "items": [
            {
                "product_id": it.product_id,
                "quantity": it.quantity,
                "unit_price": Decimal128(it.unit_price),
            }
            for it in record.items
        ],
        "metadata": record.metadata,
        "created_at": record.created_at,
        "processed_at": record.processed_at,
    }


def _from_doc(doc: Dict[str, Any]) -> PaymentRecord:
    data = dict(doc)
    data["payment_id"] = data.pop("_id")
    data["amount"] = _dec(data["amount"])
    data["items"] = [{**it, "unit_price": _dec(it["unit_price"])} for it in data.get("items") or []]
    return PaymentRecord.model_validate(data)


class PaymentRepo:
    """
    Append-only payment log backed by the 'payments' collection.
    Documents are keyed by the payment UUID (as string) in `_id`.
    Driver errors surface as StorageError.
    """

    def __init__(self, db: AsyncIOMotorDatabase, collection_name: str = "payments"):
        self.col = db[collection_name]

    async def ensure_indexes(self) -> None:
        try:
            await self.col.create_index([("created_at", DESCENDING)])
            await self.col.create_index("status")
        except PyMongoError as e:
            raise StorageError(f"payments index creation failed: {e}") from e

    async def create(self, record: PaymentRecord) -> PaymentRecord:
        # insert_one is acknowledged before returning (default write concern)
        try:
            await self.col.insert_one(_to_doc(record))
        except PyMongoError as e:
            raise StorageError(f"insert payment {record.payment_id} failed: {e}") from e
        logger.debug(f"Stored payment {record.payment_id}")
        return record

    async def list(
        self,
        page: int,
        page_size: int,
        status: Optional[str] = None,
    ) -> Tuple[List[PaymentRecord], int]:
        """Page through payments, newest first. Returns (items, total_count)."""
        query: Dict[str, Any] = {"status": status} if status else {}
        try:
            total = await self.col.count_documents(query)
            cursor = (
                self.col.find(query)
                .sort("created_at", DESCENDING)
                .skip(page_offset(page, page_size))
                .limit(page_size)
            )
            docs = await cursor.to_list(length=page_size)
        except PyMongoError as e:
            raise StorageError(f"list payments page={page} failed: {e}") from e
        return [_from_doc(d) for d in docs], total

    async def get_by_id(self, payment_id: UUID) -> Optional[PaymentRecord]:
        try:
            doc = await self.col.find_one({"_id": str(payment_id)})
        except PyMongoError as e:
            raise StorageError(f"get payment {payment_id} failed: {e}") from e
        return _from_doc(doc) if doc else None
