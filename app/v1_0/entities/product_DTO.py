from app.v1_0.schemas.base import CamelModel
from .page import PageDTO

class RatingDTO(CamelModel):
    rate: float
    count: int

class ProductDTO(CamelModel):
    """Full product row."""
    id: int
    title: str
    price: float
    description: str
    category: str
    image: str
    rating: RatingDTO

ProductPageDTO = PageDTO[ProductDTO]
