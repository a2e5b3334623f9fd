"""
Persistence port and adapters for the Products service.

ProductRepository is the contract the service layer depends on. Two adapters
implement it: SqlAlchemyProductRepository for the relational store and
InMemoryProductRepository for tests and local experiments.

The methods are coroutines, but the SQLAlchemy adapter drives a synchronous
Session, so each call blocks the event loop while the query runs.
"""
import itertools
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, List, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from . import models


class ProductRepository(ABC):
    """Abstract product persistence interface."""

    @abstractmethod
    async def get_by_id(self, product_id: int) -> Optional[models.Product]:
        """Return the product with the given id, or None."""
        ...

    @abstractmethod
    async def get_all(self) -> List[models.Product]:
        """Return every product."""
        ...

    @abstractmethod
    async def get_by_category(self, category: models.Category) -> List[models.Product]:
        """Return the products of one category."""
        ...

    @abstractmethod
    async def get_active_products(self) -> List[models.Product]:
        """Return the products flagged as active."""
        ...

    @abstractmethod
    async def add(self, product: models.Product) -> models.Product:
        """Persist a new product and return it with its generated id."""
        ...

    @abstractmethod
    async def update(self, product: models.Product) -> models.Product:
        """Persist changes made to an existing product."""
        ...

    @abstractmethod
    async def delete(self, product_id: int) -> bool:
        """Remove a product. Returns False if nothing matched."""
        ...


class SqlAlchemyProductRepository(ProductRepository):
    """ProductRepository backed by a SQLAlchemy session."""

    def __init__(self, db: Session):
        self.db = db

    async def get_by_id(self, product_id: int) -> Optional[models.Product]:
        return self.db.query(models.Product).filter(models.Product.id == product_id).first()

    async def get_all(self) -> List[models.Product]:
        return self.db.query(models.Product).order_by(models.Product.id).all()

    async def get_by_category(self, category: models.Category) -> List[models.Product]:
        return (
            self.db.query(models.Product)
            .filter(models.Product.category == category)
            .order_by(models.Product.id)
            .all()
        )

    async def get_active_products(self) -> List[models.Product]:
        return (
            self.db.query(models.Product)
            .filter(models.Product.active.is_(True))
            .order_by(models.Product.id)
            .all()
        )

    async def add(self, product: models.Product) -> models.Product:
        self.db.add(product)
        self._commit()
        self.db.refresh(product)
        return product

    async def update(self, product: models.Product) -> models.Product:
        db_product = self.db.merge(product)
        self._commit()
        self.db.refresh(db_product)
        return db_product

    async def delete(self, product_id: int) -> bool:
        db_product = await self.get_by_id(product_id)
        if db_product is None:
            return False

        self.db.delete(db_product)
        self._commit()
        return True

    def _commit(self) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise


class InMemoryProductRepository(ProductRepository):
    """Dictionary-backed ProductRepository. Ids are generated from 1."""

    def __init__(self, products: Optional[List[models.Product]] = None):
        self._products: Dict[int, models.Product] = {}
        self._ids = itertools.count(1)
        for product in products or []:
            self._store(product)

    async def get_by_id(self, product_id: int) -> Optional[models.Product]:
        return self._products.get(product_id)

    async def get_all(self) -> List[models.Product]:
        return list(self._products.values())

    async def get_by_category(self, category: models.Category) -> List[models.Product]:
        return [p for p in self._products.values() if p.category == category]

    async def get_active_products(self) -> List[models.Product]:
        return [p for p in self._products.values() if p.active]

    async def add(self, product: models.Product) -> models.Product:
        return self._store(product)

    async def update(self, product: models.Product) -> models.Product:
        if product.id not in self._products:
            raise KeyError(product.id)
        self._products[product.id] = product
        return product

    async def delete(self, product_id: int) -> bool:
        return self._products.pop(product_id, None) is not None

    def _store(self, product: models.Product) -> models.Product:
        if product.id is None:
            product.id = next(self._ids)
        else:
            # keep generated ids clear of explicitly numbered rows
            self._ids = itertools.count(max(product.id, *self._products.keys(), 0) + 1)
        now = datetime.utcnow()
        if product.active is None:
            product.active = True
        if product.created_at is None:
            product.created_at = now
        if product.updated_at is None:
            product.updated_at = now
        self._products[product.id] = product
        return product
