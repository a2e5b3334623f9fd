"""
SQLAlchemy ORM models for the Orders service.

Defines the database schema for order-related tables.
"""
import enum
from datetime import datetime
from decimal import Decimal
from sqlalchemy import Column, Integer, String, DateTime, Numeric, ForeignKey, Enum
from sqlalchemy.orm import relationship
from .database import Base


class OrderStatus(str, enum.Enum):
    """Preparation stage of an order. Any stage may replace any other."""
    RECEIVED = "RECEIVED"
    IN_PREPARATION = "IN_PREPARATION"
    READY = "READY"
    FINALIZED = "FINALIZED"


class PaymentStatus(str, enum.Enum):
    """Payment state reported by the payment gateway."""
    PENDING = "PENDING"
    PAID = "PAID"
    REJECTED = "REJECTED"


class Order(Base):
    """
    Order model representing a customer order in the system.

    Attributes:
        id (int): Primary key, auto-incremented order ID
        customer_id (int): ID of the customer who placed the order
        number (int): Business-facing order number, unique across all orders
        status (OrderStatus): Preparation stage
        payment_status (PaymentStatus): Payment state
        payment_id (str): Payment gateway reference (optional, max 100 characters)
        observation (str): Free-text note (optional, max 500 characters)
        items (list): Order line items, deleted together with the order
        created_at (datetime): Timestamp when the order was created
        updated_at (datetime): Timestamp of the last change
    """
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, autoincrement=True)
    customer_id = Column(Integer, nullable=False, index=True)
    number = Column(Integer, nullable=False, unique=True, index=True)
    status = Column(Enum(OrderStatus, name="order_status"), nullable=False, default=OrderStatus.RECEIVED, index=True)
    payment_status = Column(Enum(PaymentStatus, name="payment_status"), nullable=False, default=PaymentStatus.PENDING)
    payment_id = Column(String(100), nullable=True)
    observation = Column(String(500), nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    items = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItem.id",
    )

    @property
    def total(self) -> Decimal:
        """Sum of quantity * unit_price over all items."""
        return sum((Decimal(item.unit_price) * item.quantity for item in self.items), Decimal("0"))


class OrderItem(Base):
    """
    OrderItem model representing one line of an order.

    Attributes:
        id (int): Primary key, auto-incremented item ID
        order_id (int): Foreign key to the owning order (cascade delete)
        product_id (int): ID of the product in the Products service
        product_name (str): Product name at the time of ordering (max 200 characters)
        quantity (int): Units ordered, always positive
        unit_price (Decimal): Price per unit, never negative
        created_at (datetime): Timestamp when the item was created
    """
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Integer, nullable=False, index=True)
    product_name = Column(String(200), nullable=False)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(10, 2), nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    order = relationship("Order", back_populates="items")
