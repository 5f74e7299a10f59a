from sqlmodel import SQLModel, Field
from sqlalchemy import DateTime
from pydantic import field_validator
from typing import Optional
from datetime import datetime, timezone
from decimal import Decimal


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ProductBase(SQLModel):
    name: str = Field(default="")
    price: str = Field(default="")
    purchased: bool = Field(default=False)

    @field_validator("price", mode="before")
    @classmethod
    def price_as_text(cls, value):
        # Clients may send the price as a JSON number
        if isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
            return str(value)
        return value


class Product(ProductBase, table=True):
    __tablename__ = "products"

    id: str = Field(primary_key=True, index=True, nullable=False)
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))
    updated_at: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))


class ProductCreate(ProductBase):
    id: Optional[str] = None


class ProductRead(ProductBase):
    id: str


def empty_product() -> ProductRead:
    """Placeholder returned when a product could not be processed."""
    return ProductRead(id="", name="", price="", purchased=False)
