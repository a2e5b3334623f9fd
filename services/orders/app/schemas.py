"""
Pydantic schemas for request/response validation in the Orders service.

These schemas define the structure of data for API requests and responses.
Field rules are checked by the service layer (see validators.py) so they
apply to every caller, not only HTTP clients.
"""
from datetime import datetime
from typing import Optional, List
from decimal import Decimal
from pydantic import BaseModel, Field

from .models import OrderStatus, PaymentStatus


class OrderItemCreate(BaseModel):
    """Schema for an order line item."""
    product_id: int = Field(..., description="Product ID from the catalog")
    product_name: str = Field(..., description="Product name at the time of ordering")
    quantity: int = Field(..., description="Quantity ordered")
    unit_price: Decimal = Field(..., description="Price per unit")


class OrderCreate(BaseModel):
    """Schema for creating a new order. Status and payment status are assigned by the service."""
    customer_id: int
    number: int
    payment_id: Optional[str] = None
    observation: Optional[str] = None
    items: List[OrderItemCreate] = Field(default_factory=list, description="Order line items")


class OrderUpdate(BaseModel):
    """Schema for updating an order. Every field replaces the stored value."""
    status: OrderStatus
    payment_status: PaymentStatus
    payment_id: Optional[str] = None
    observation: Optional[str] = None


class OrderItem(BaseModel):
    """Schema for order line item responses."""
    id: int
    order_id: int
    product_id: int
    product_name: str
    quantity: int
    unit_price: Decimal
    created_at: datetime

    class Config:
        from_attributes = True


class Order(BaseModel):
    """
    Schema for order responses, includes all database fields.

    Attributes:
        id (int): Order's unique identifier
        customer_id (int): ID of the customer who placed the order
        number (int): Business-facing order number
        status (OrderStatus): Preparation stage
        payment_status (PaymentStatus): Payment state
        items (List[OrderItem]): Order line items
        total (Decimal): Sum of the line items
        created_at (datetime): When the order was created
        updated_at (datetime): When the order was last changed
    """
    id: int
    customer_id: int
    number: int
    status: OrderStatus
    payment_status: PaymentStatus
    payment_id: Optional[str] = None
    observation: Optional[str] = None
    items: List[OrderItem] = Field(default_factory=list)
    total: Decimal
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
