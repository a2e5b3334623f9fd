"""
Persistence port and adapters for the Orders service.

OrderRepository is the contract the service layer depends on. The SQLAlchemy
adapter enforces order number uniqueness through the unique index on
orders.number and deletes items through the ORM cascade; the in-memory
adapter reproduces both rules.

The methods are coroutines, but the SQLAlchemy adapter drives a synchronous
Session, so each call blocks the event loop while the query runs.
"""
import itertools
import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, List, Optional
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from . import errors, models

logger = logging.getLogger(__name__)


class OrderRepository(ABC):
    """Abstract order persistence interface."""

    @abstractmethod
    async def get_by_id(self, order_id: int) -> Optional[models.Order]:
        """Return the order with the given id, or None."""
        ...

    @abstractmethod
    async def get_all(self) -> List[models.Order]:
        """Return every order."""
        ...

    @abstractmethod
    async def get_by_status(self, status: models.OrderStatus) -> List[models.Order]:
        """Return the orders in one status."""
        ...

    @abstractmethod
    async def get_by_customer(self, customer_id: int) -> List[models.Order]:
        """Return the orders placed by one customer."""
        ...

    @abstractmethod
    async def get_items_by_order_id(self, order_id: int) -> List[models.OrderItem]:
        """Return the stored items of an order, empty if the order is gone."""
        ...

    @abstractmethod
    async def add(self, order: models.Order) -> models.Order:
        """
        Persist a new order with its items.

        Raises:
            ConflictError: if another order already uses the same number
        """
        ...

    @abstractmethod
    async def update(self, order: models.Order) -> models.Order:
        """Persist changes made to an existing order."""
        ...

    @abstractmethod
    async def delete(self, order_id: int) -> bool:
        """Remove an order and its items. Returns False if nothing matched."""
        ...


class SqlAlchemyOrderRepository(OrderRepository):
    """OrderRepository backed by a SQLAlchemy session."""

    def __init__(self, db: Session):
        self.db = db

    async def get_by_id(self, order_id: int) -> Optional[models.Order]:
        return self.db.query(models.Order).filter(models.Order.id == order_id).first()

    async def get_all(self) -> List[models.Order]:
        return self.db.query(models.Order).order_by(models.Order.id).all()

    async def get_by_status(self, status: models.OrderStatus) -> List[models.Order]:
        return (
            self.db.query(models.Order)
            .filter(models.Order.status == status)
            .order_by(models.Order.id)
            .all()
        )

    async def get_by_customer(self, customer_id: int) -> List[models.Order]:
        return (
            self.db.query(models.Order)
            .filter(models.Order.customer_id == customer_id)
            .order_by(models.Order.id)
            .all()
        )

    async def get_items_by_order_id(self, order_id: int) -> List[models.OrderItem]:
        return (
            self.db.query(models.OrderItem)
            .filter(models.OrderItem.order_id == order_id)
            .order_by(models.OrderItem.id)
            .all()
        )

    async def add(self, order: models.Order) -> models.Order:
        self.db.add(order)
        self._commit(order.number)
        self.db.refresh(order)
        return order

    async def update(self, order: models.Order) -> models.Order:
        db_order = self.db.merge(order)
        self._commit()
        self.db.refresh(db_order)
        return db_order

    async def delete(self, order_id: int) -> bool:
        db_order = await self.get_by_id(order_id)
        if db_order is None:
            return False

        # items go with the order through the delete-orphan cascade
        self.db.delete(db_order)
        self._commit()
        return True

    def _commit(self, number: Optional[int] = None) -> None:
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            # only an insert can collide on the unique order number
            if number is not None and self._number_taken(number):
                logger.warning(f"Order number {number} already exists")
                raise errors.ConflictError(f"Order number {number} already exists")
            raise
        except SQLAlchemyError:
            self.db.rollback()
            raise

    def _number_taken(self, number: int) -> bool:
        return self.db.query(models.Order.id).filter(models.Order.number == number).first() is not None


class InMemoryOrderRepository(OrderRepository):
    """Dictionary-backed OrderRepository. Ids are generated from 1."""

    def __init__(self):
        self._orders: Dict[int, models.Order] = {}
        self._order_ids = itertools.count(1)
        self._item_ids = itertools.count(1)

    async def get_by_id(self, order_id: int) -> Optional[models.Order]:
        return self._orders.get(order_id)

    async def get_all(self) -> List[models.Order]:
        return list(self._orders.values())

    async def get_by_status(self, status: models.OrderStatus) -> List[models.Order]:
        return [o for o in self._orders.values() if o.status == status]

    async def get_by_customer(self, customer_id: int) -> List[models.Order]:
        return [o for o in self._orders.values() if o.customer_id == customer_id]

    async def get_items_by_order_id(self, order_id: int) -> List[models.OrderItem]:
        order = self._orders.get(order_id)
        return list(order.items) if order is not None else []

    async def add(self, order: models.Order) -> models.Order:
        self._check_number(order)
        now = datetime.utcnow()
        order.id = next(self._order_ids)
        if order.status is None:
            order.status = models.OrderStatus.RECEIVED
        if order.payment_status is None:
            order.payment_status = models.PaymentStatus.PENDING
        order.created_at = order.created_at or now
        order.updated_at = order.updated_at or now
        for item in order.items:
            item.id = next(self._item_ids)
            item.order_id = order.id
            item.created_at = item.created_at or now
        self._orders[order.id] = order
        return order

    async def update(self, order: models.Order) -> models.Order:
        if order.id not in self._orders:
            raise KeyError(order.id)
        self._check_number(order)
        self._orders[order.id] = order
        return order

    async def delete(self, order_id: int) -> bool:
        return self._orders.pop(order_id, None) is not None

    def _check_number(self, order: models.Order) -> None:
        for other in self._orders.values():
            if other.number == order.number and other.id != order.id:
                raise errors.ConflictError(f"Order number {order.number} already exists")
