from pydantic import BaseModel, Field
from typing import Optional, List
from decimal import Decimal

class Product(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    price: Decimal
    image_url: Optional[str] = None

    model_config = {"frozen": True}

class ProductVector(BaseModel):
    """Derived index entry; rebuildable from the products collection."""
    id: int
    name: str
    description: Optional[str] = None
    price: Decimal
    image_url: Optional[str] = None
    vector: List[float]

    model_config = {"frozen": True}

class ScoredProductVector(BaseModel):
    record: ProductVector
    score: float

class SearchResult(BaseModel):
    response_text: str
    products: List[Product] = Field(default_factory=list)
