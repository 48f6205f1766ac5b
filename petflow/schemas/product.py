from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class ProductCreate(BaseModel):
    name: str = Field(min_length=1)
    sku: str = Field(min_length=1)
    description: Optional[str] = None
    category: Optional[str] = None
    brand: Optional[str] = None
    price: float = Field(default=0, ge=0)
    cost_price: Optional[float] = Field(default=None, ge=0)
    stock: int = 0
    min_stock: int = Field(default=5, ge=0)
    unit: str = "un"
    tags: Optional[str] = None
    image_url: Optional[str] = None
    active: bool = True
    ai_generated: bool = False


class ProductUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    sku: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    category: Optional[str] = None
    brand: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    cost_price: Optional[float] = Field(default=None, ge=0)
    stock: Optional[int] = None
    min_stock: Optional[int] = Field(default=None, ge=0)
    unit: Optional[str] = None
    tags: Optional[str] = None
    image_url: Optional[str] = None
    active: Optional[bool] = None

    @field_validator("name", "sku", "price", "stock", "min_stock", "active")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("may not be null")
        return value


class ProductResponse(BaseModel):
    id: int
    name: str
    sku: str
    description: Optional[str] = None
    category: Optional[str] = None
    brand: Optional[str] = None
    price: float
    cost_price: Optional[float] = None
    stock: int
    min_stock: int
    unit: Optional[str] = None
    tags: Optional[str] = None
    image_url: Optional[str] = None
    active: bool
    ai_generated: bool
    is_low_stock: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ProductGenerateRequest(BaseModel):
    product_name: str = Field(min_length=1)
    category: Optional[str] = None
    brand: Optional[str] = None


class ProductSuggestion(BaseModel):
    """Catalog fields drafted for a product name. Every field is always filled."""

    name: str
    sku: str
    category: str
    brand: str
    description: str
    suggested_price: Optional[float] = None
    cost_price: Optional[float] = None
    min_stock: int = 5
    unit: str = "un"
    tags: list[str] = Field(min_length=1)
    target_animals: str = ""
    ai_generated: bool = False
