# eshop/api/v1/schemas/products.py
from typing import List, Optional

from pydantic import Field

from eshop.api.v1.schemas.base import CamelModel, Money
from eshop.domain.models.product import Product, SearchResult


class ProductOut(CamelModel):
    id: int
    name: str
    description: Optional[str] = None
    price: Money
    image_url: Optional[str] = None

    @classmethod
    def from_product(cls, p: Product) -> "ProductOut":
        return cls(**p.model_dump())


class ProductIn(CamelModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    price: Money = Field(..., ge=0)
    image_url: Optional[str] = None


class SearchResponseOut(CamelModel):
    response_text: str
    products: List[ProductOut] = Field(default_factory=list)

    @classmethod
    def from_result(cls, res: SearchResult) -> "SearchResponseOut":
        return cls(
            response_text=res.response_text,
            products=[ProductOut.from_product(p) for p in res.products],
        )


class ReindexOut(CamelModel):
    indexed: int
    failed: List[int] = Field(default_factory=list)
    state: str
    processing_time_ms: float
