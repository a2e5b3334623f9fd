"""
SQLAlchemy ORM models for the Products service.

Defines the database schema for the product catalog.
"""
import enum
from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, Numeric, Boolean, Enum, Index
from .database import Base


class Category(str, enum.Enum):
    """Menu section a product is listed under."""
    SANDWICH = "SANDWICH"
    SIDE = "SIDE"
    DRINK = "DRINK"
    DESSERT = "DESSERT"


class Product(Base):
    """
    Product model representing an item of the catalog.

    Attributes:
        id (int): Primary key, auto-incremented product ID
        name (str): Display name (max 200 characters)
        price (Decimal): Unit price
        category (Category): Menu section of the product
        description (str): Optional description (max 500 characters)
        active (bool): Whether the product is visible in the catalog
        image_url (str): Optional image location (max 500 characters)
        created_at (datetime): Timestamp when the product was created
        updated_at (datetime): Timestamp of the last change
    """
    __tablename__ = "products"
    __table_args__ = (
        Index("ix_products_category", "category"),
        Index("ix_products_active", "active"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    category = Column(Enum(Category, name="product_category"), nullable=False)
    description = Column(String(500), nullable=True)
    active = Column(Boolean, nullable=False, default=True)
    image_url = Column(String(500), nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)
