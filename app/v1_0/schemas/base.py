from decimal import Decimal
from typing import Annotated, Optional
from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

# en JSON el dinero sale como numero, no como string
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class CamelModel(BaseModel):
    """Acepta y emite camelCase (customerName) sin perder los nombres python."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ListQuery(BaseModel):
    """_page / _size / _order comunes a todos los listados."""
    page: int = 1
    size: int = 10
    order: Optional[str] = Field(default=None, description='e.g. "price desc, title asc"')
