"""Tests for the SQLAlchemy order repository and the orders table layout."""

import asyncio
from decimal import Decimal

import pytest
from sqlalchemy import inspect, text
from sqlalchemy.exc import IntegrityError

from services.orders.app import errors
from services.orders.app.models import Order, OrderItem, OrderStatus, PaymentStatus
from services.orders.app.repository import SqlAlchemyOrderRepository
from services.orders.app.schemas import OrderCreate, OrderItemCreate, OrderUpdate
from services.orders.app.service import OrderService


def new_order(number, customer_id=1, items=1):
    return Order(
        customer_id=customer_id,
        number=number,
        items=[
            OrderItem(product_id=i + 1, product_name=f"Product {i + 1}", quantity=1, unit_price=Decimal("10.00"))
            for i in range(items)
        ],
    )


class TestOrdersTables:
    def test_table_names(self):
        assert Order.__tablename__ == "orders"
        assert OrderItem.__tablename__ == "order_items"

    def test_order_columns(self):
        columns = Order.__table__.c
        assert columns.payment_id.type.length == 100
        assert columns.observation.type.length == 500
        for name in ("customer_id", "number", "status", "payment_status", "created_at", "updated_at"):
            assert columns[name].nullable is False, name

    def test_order_item_columns(self):
        columns = OrderItem.__table__.c
        assert columns.product_name.type.length == 200
        for name in ("order_id", "product_id", "product_name", "quantity", "unit_price", "created_at"):
            assert columns[name].nullable is False, name

    def test_order_item_foreign_key_cascades(self):
        (foreign_key,) = OrderItem.__table__.c.order_id.foreign_keys
        assert foreign_key.column is Order.__table__.c.id
        assert foreign_key.ondelete == "CASCADE"

    def test_items_relationship_cascades_deletes(self):
        relationship = inspect(Order).relationships["items"]
        assert relationship.uselist is True
        assert relationship.cascade.delete
        assert relationship.cascade.delete_orphan

    def test_indexes(self, engine):
        inspector = inspect(engine)
        order_indexes = {tuple(i["column_names"]): i["unique"] for i in inspector.get_indexes("orders")}
        item_indexes = {tuple(i["column_names"]) for i in inspector.get_indexes("order_items")}

        assert order_indexes[("number",)]
        assert ("status",) in order_indexes
        assert ("customer_id",) in order_indexes
        assert ("product_id",) in item_indexes
        assert ("order_id",) in item_indexes


class TestSqlAlchemyOrderRepository:
    def test_add_generates_ids_and_defaults(self, db):
        repository = SqlAlchemyOrderRepository(db)

        order = asyncio.run(repository.add(new_order(100, items=2)))

        assert order.id > 0
        assert order.status == OrderStatus.RECEIVED
        assert order.payment_status == PaymentStatus.PENDING
        assert len(order.items) == 2
        assert all(item.id > 0 and item.order_id == order.id for item in order.items)
        assert all(item.created_at is not None for item in order.items)

    def test_duplicate_number_raises_conflict(self, db):
        repository = SqlAlchemyOrderRepository(db)
        asyncio.run(repository.add(new_order(200)))

        with pytest.raises(errors.ConflictError, match="200"):
            asyncio.run(repository.add(new_order(200, customer_id=2)))

        assert len(asyncio.run(repository.get_all())) == 1

    def test_other_integrity_errors_propagate(self, db):
        repository = SqlAlchemyOrderRepository(db)
        broken = Order(customer_id=None, number=300)

        with pytest.raises(IntegrityError):
            asyncio.run(repository.add(broken))

    def test_integrity_errors_on_update_are_not_conflicts(self, db):
        repository = SqlAlchemyOrderRepository(db)
        order = asyncio.run(repository.add(new_order(77)))
        order.payment_status = None

        with pytest.raises(IntegrityError):
            asyncio.run(repository.update(order))

        stored = asyncio.run(repository.get_by_id(order.id))
        assert stored.payment_status == PaymentStatus.PENDING

    def test_session_usable_after_conflict(self, db):
        repository = SqlAlchemyOrderRepository(db)
        asyncio.run(repository.add(new_order(1)))
        with pytest.raises(errors.ConflictError):
            asyncio.run(repository.add(new_order(1)))

        order = asyncio.run(repository.add(new_order(2)))

        assert order.id > 0

    def test_queries(self, db):
        repository = SqlAlchemyOrderRepository(db)
        first = asyncio.run(repository.add(new_order(1, customer_id=7)))
        asyncio.run(repository.add(new_order(2, customer_id=8)))
        first.status = OrderStatus.IN_PREPARATION
        asyncio.run(repository.update(first))

        assert [o.number for o in asyncio.run(repository.get_by_status(OrderStatus.IN_PREPARATION))] == [1]
        assert [o.number for o in asyncio.run(repository.get_by_customer(8))] == [2]
        assert asyncio.run(repository.get_by_customer(99)) == []
        assert len(asyncio.run(repository.get_items_by_order_id(first.id))) == 1

    def test_delete_cascades_to_items(self, db):
        repository = SqlAlchemyOrderRepository(db)
        order = asyncio.run(repository.add(new_order(400, items=3)))
        order_id = order.id

        assert asyncio.run(repository.delete(order_id)) is True

        assert asyncio.run(repository.get_by_id(order_id)) is None
        assert asyncio.run(repository.get_items_by_order_id(order_id)) == []
        assert db.query(OrderItem).count() == 0

    def test_database_level_cascade(self, db):
        repository = SqlAlchemyOrderRepository(db)
        order = asyncio.run(repository.add(new_order(500, items=2)))
        order_id = order.id
        db.expunge_all()

        db.execute(text("DELETE FROM orders WHERE id = :id"), {"id": order_id})
        db.commit()

        assert db.query(OrderItem).filter(OrderItem.order_id == order_id).count() == 0

    def test_delete_missing_returns_false(self, db):
        assert asyncio.run(SqlAlchemyOrderRepository(db).delete(999)) is False


class TestOrderServiceWithDatabase:
    def test_full_lifecycle(self, db):
        service = OrderService(SqlAlchemyOrderRepository(db))
        created = asyncio.run(service.create(OrderCreate(
            customer_id=3,
            number=900,
            items=[OrderItemCreate(product_id=2, product_name="X-Bacon", quantity=2, unit_price=Decimal("29.90"))],
        )))

        assert created.total == Decimal("59.80")

        updated = asyncio.run(service.update(created.id, OrderUpdate(
            status=OrderStatus.FINALIZED,
            payment_status=PaymentStatus.PAID,
            payment_id="pay_900",
        )))
        assert updated.status == OrderStatus.FINALIZED
        assert updated.updated_at >= created.updated_at

        assert asyncio.run(service.delete(created.id)) is True
        assert asyncio.run(service.get_items(created.id)) == []

    def test_duplicate_number_through_service(self, db):
        service = OrderService(SqlAlchemyOrderRepository(db))
        asyncio.run(service.create(OrderCreate(customer_id=1, number=42)))

        with pytest.raises(errors.ConflictError):
            asyncio.run(service.create(OrderCreate(customer_id=2, number=42)))
