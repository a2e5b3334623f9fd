"""
Business logic for order management.

OrderService validates orders and their line items, assigns the initial
status, and delegates persistence to an OrderRepository. Status changes are
not restricted: any status may replace any other.
"""
import logging
from datetime import datetime
from typing import List, Optional
from . import errors, models, schemas, validators
from .repository import OrderRepository

logger = logging.getLogger(__name__)


class OrderService:
    """Use cases of the Orders service."""

    def __init__(self, repository: OrderRepository):
        self.repository = repository

    async def get_by_id(self, order_id: int) -> Optional[schemas.Order]:
        """
        Retrieve a single order by ID.

        Returns:
            Order representation or None if not found
        """
        order = await self.repository.get_by_id(order_id)
        if order is None:
            return None
        return schemas.Order.model_validate(order)

    async def get_all(self) -> List[schemas.Order]:
        orders = await self.repository.get_all()
        return [schemas.Order.model_validate(o) for o in orders]

    async def get_by_status(self, status: models.OrderStatus) -> List[schemas.Order]:
        orders = await self.repository.get_by_status(status)
        return [schemas.Order.model_validate(o) for o in orders]

    async def get_by_customer(self, customer_id: int) -> List[schemas.Order]:
        orders = await self.repository.get_by_customer(customer_id)
        return [schemas.Order.model_validate(o) for o in orders]

    async def get_items(self, order_id: int) -> List[schemas.OrderItem]:
        """Return the stored line items of an order; empty if the order does not exist."""
        items = await self.repository.get_items_by_order_id(order_id)
        return [schemas.OrderItem.model_validate(i) for i in items]

    async def create(self, order: schemas.OrderCreate) -> schemas.Order:
        """
        Create a new order in status RECEIVED with payment PENDING.

        Args:
            order: Order data to create

        Returns:
            Created order representation

        Raises:
            ValidationError: if an item or a text field breaks a business rule
            ConflictError: if the order number is already used
        """
        is_valid, error_message = validators.validate_order_items(order.items)
        if is_valid:
            is_valid, error_message = validators.validate_order_details(order.payment_id, order.observation)
        if not is_valid:
            logger.warning(f"Rejected order {order.number}: {error_message}")
            raise errors.ValidationError(error_message)

        db_order = models.Order(
            customer_id=order.customer_id,
            number=order.number,
            status=models.OrderStatus.RECEIVED,
            payment_status=models.PaymentStatus.PENDING,
            payment_id=order.payment_id,
            observation=order.observation,
            items=[
                models.OrderItem(
                    product_id=item.product_id,
                    product_name=item.product_name,
                    quantity=item.quantity,
                    unit_price=item.unit_price,
                )
                for item in order.items
            ],
        )
        created = await self.repository.add(db_order)
        logger.info(f"Created order {created.id} (number {created.number}) with {len(created.items)} items")
        return schemas.Order.model_validate(created)

    async def update(self, order_id: int, order: schemas.OrderUpdate) -> schemas.Order:
        """
        Replace the status, payment data and observation of an order.

        Raises:
            NotFoundError: if no order has this ID
            ValidationError: if a text field is too long
        """
        db_order = await self.repository.get_by_id(order_id)
        if db_order is None:
            raise errors.NotFoundError("Order", order_id)

        is_valid, error_message = validators.validate_order_details(order.payment_id, order.observation)
        if not is_valid:
            logger.warning(f"Rejected update of order {order_id}: {error_message}")
            raise errors.ValidationError(error_message)

        old_status = db_order.status
        db_order.status = order.status
        db_order.payment_status = order.payment_status
        db_order.payment_id = order.payment_id
        db_order.observation = order.observation
        db_order.updated_at = datetime.utcnow()

        updated = await self.repository.update(db_order)
        if old_status != updated.status:
            logger.info(f"Order {order_id} status changed from {old_status.value} to {updated.status.value}")
        else:
            logger.info(f"Updated order {order_id}")
        return schemas.Order.model_validate(updated)

    async def delete(self, order_id: int) -> bool:
        """
        Delete an order together with its items.

        Returns:
            True if the order was deleted, False if not found
        """
        deleted = await self.repository.delete(order_id)
        if deleted:
            logger.info(f"Deleted order {order_id}")
        return deleted
