# eshop/domain/repositories/product_repo.py

from __future__ import annotations
from typing import Any, Dict, Iterable, List, Optional
from decimal import Decimal
import re

from bson.decimal128 import Decimal128
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import PyMongoError

from eshop.domain.errors import StorageError
from eshop.domain.models.product import Product

_PROJECTION = {"_id": 0, "id": 1, "name": 1, "description": 1, "price": 1, "image_url": 1}


def _from_doc(doc: Dict[str, Any]) -> Product:
    price = doc.get("price")
    if isinstance(price, Decimal128):
        price = price.to_decimal()
    return Product.model_validate({**doc, "price": price})


def _fields(name: str, description: Optional[str], price: Decimal, image_url: Optional[str]) -> Dict[str, Any]:
    return {
        "name": name,
        "description": description,
        "price": Decimal128(price),
        "image_url": image_url,
    }


class ProductRepo:
    """
    Product catalog backed by the 'products' collection.
    Products are addressed by an integer `id` (not Mongo's `_id`).
    This is the source of truth the vector index is rebuilt from.
    """

    def __init__(self, db: AsyncIOMotorDatabase, collection_name: str = "products"):
        self.col = db[collection_name]

    async def ensure_indexes(self) -> None:
        try:
            await self.col.create_index("id", unique=True)
        except PyMongoError as e:
            raise StorageError(f"products index creation failed: {e}") from e

    async def count(self) -> int:
        try:
            return await self.col.count_documents({})
        except PyMongoError as e:
            raise StorageError(f"count products failed: {e}") from e

    async def list_all(self) -> List[Product]:
        try:
            cursor = self.col.find({}, _PROJECTION).sort("id", ASCENDING)
            return [_from_doc(doc) async for doc in cursor]
        except PyMongoError as e:
            raise StorageError(f"list products failed: {e}") from e

    async def get_by_id(self, product_id: int) -> Optional[Product]:
        try:
            doc = await self.col.find_one({"id": product_id}, _PROJECTION)
        except PyMongoError as e:
            raise StorageError(f"get product {product_id} failed: {e}") from e
        return _from_doc(doc) if doc else None

    async def search_by_name(self, text: str) -> List[Product]:
        """Case-insensitive substring match on the product name."""
        query = {"name": {"$regex": re.escape(text), "$options": "i"}}
        try:
            cursor = self.col.find(query, _PROJECTION).sort("id", ASCENDING)
            return [_from_doc(doc) async for doc in cursor]
        except PyMongoError as e:
            raise StorageError(f"keyword search '{text}' failed: {e}") from e

    async def _next_id(self) -> int:
        doc = await self.col.find_one({}, {"_id": 0, "id": 1}, sort=[("id", DESCENDING)])
        return (doc["id"] + 1) if doc else 1

    async def create(
        self,
        *,
        name: str,
        description: Optional[str],
        price: Decimal,
        image_url: Optional[str],
    ) -> Product:
        try:
            new_id = await self._next_id()
            await self.col.insert_one({"id": new_id, **_fields(name, description, price, image_url)})
        except PyMongoError as e:
            raise StorageError(f"create product '{name}' failed: {e}") from e
        return Product(id=new_id, name=name, description=description, price=price, image_url=image_url)

    async def insert_many(self, products: Iterable[Dict[str, Any]]) -> int:
        """Bulk insert raw product dicts (name/description/price/image_url), assigning sequential ids."""
        try:
            next_id = await self._next_id()
            docs = []
            for offset, p in enumerate(products):
                docs.append({
                    "id": next_id + offset,
                    **_fields(p["name"], p.get("description"), Decimal(str(p["price"])), p.get("image_url")),
                })
            if not docs:
                return 0
            res = await self.col.insert_many(docs)
        except PyMongoError as e:
            raise StorageError(f"bulk insert products failed: {e}") from e
        return len(res.inserted_ids)

    async def update(
        self,
        product_id: int,
        *,
        name: str,
        description: Optional[str],
        price: Decimal,
        image_url: Optional[str],
    ) -> Optional[Product]:
        try:
            res = await self.col.update_one(
                {"id": product_id},
                {"$set": _fields(name, description, price, image_url)},
                upsert=False,
            )
        except PyMongoError as e:
            raise StorageError(f"update product {product_id} failed: {e}") from e
        if res.matched_count == 0:
            return None
        return Product(id=product_id, name=name, description=description, price=price, image_url=image_url)

    async def delete(self, product_id: int) -> bool:
        try:
            res = await self.col.delete_one({"id": product_id})
        except PyMongoError as e:
            raise StorageError(f"delete product {product_id} failed: {e}") from e
        return res.deleted_count > 0
