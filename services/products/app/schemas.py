"""
Pydantic schemas for request/response validation in the Products service.

These schemas define the structure of data crossing the service boundary.
Business rules (non-negative price, required name) are enforced by the
service layer, not here.
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel

from .models import Category


class ProductBase(BaseModel):
    """Base schema with common product attributes."""
    name: str
    price: Decimal
    category: Category
    description: Optional[str] = None
    image_url: Optional[str] = None


class ProductCreate(ProductBase):
    """Schema for creating a new product. New products are always active."""
    pass


class ProductUpdate(ProductBase):
    """Schema for updating a product. Every field replaces the stored value."""
    active: bool


class Product(ProductBase):
    """
    Schema for product responses, includes all database fields.

    Attributes:
        id (int): Product's unique identifier
        active (bool): Catalog visibility flag
        created_at (datetime): When the product was created
        updated_at (datetime): When the product was last changed
    """
    id: int
    active: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
