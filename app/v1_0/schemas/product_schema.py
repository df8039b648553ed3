from typing import Optional
from pydantic import Field
from .base import CamelModel, ListQuery

class ProductRating(CamelModel):
    rate: float = Field(0.0, ge=0.0, le=5.0)
    count: int = Field(0, ge=0)

class ProductUpsert(CamelModel):
    """Schema used for both create and update (full replace) of a product."""
    title: str = Field(..., min_length=1, max_length=200)
    price: float = Field(..., ge=0.0, description="Unit price")
    description: str = Field("", max_length=2000)
    category: str = Field(..., min_length=1, max_length=100)
    image: str = Field("", description="Image URL")
    rating: ProductRating = Field(default_factory=ProductRating)

    model_config = {
        "json_schema_extra": {
            "example": {
                "title": "Smartphone X",
                "price": 699.9,
                "description": "6.1in, 128GB",
                "category": "electronics",
                "image": "https://example.com/x.png",
                "rating": {"rate": 4.5, "count": 120},
            }
        }
    }

class ProductListQuery(ListQuery):
    title: Optional[str] = None
    category: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    min_rate: Optional[float] = None
    max_rate: Optional[float] = None
