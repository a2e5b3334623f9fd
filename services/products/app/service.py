"""
Business logic for the product catalog.

ProductService validates proposed changes, maps schemas to ORM entities and
back, and delegates persistence to a ProductRepository.
"""
import logging
from datetime import datetime
from typing import List, Optional
from . import errors, models, schemas
from .repository import ProductRepository

logger = logging.getLogger(__name__)


class ProductService:
    """Use cases of the product catalog."""

    def __init__(self, repository: ProductRepository):
        self.repository = repository

    async def get_by_id(self, product_id: int) -> Optional[schemas.Product]:
        """
        Retrieve a single product by ID.

        Returns:
            Product representation or None if not found
        """
        product = await self.repository.get_by_id(product_id)
        if product is None:
            return None
        return schemas.Product.model_validate(product)

    async def get_all(self) -> List[schemas.Product]:
        products = await self.repository.get_all()
        return [schemas.Product.model_validate(p) for p in products]

    async def get_by_category(self, category: models.Category) -> List[schemas.Product]:
        products = await self.repository.get_by_category(category)
        return [schemas.Product.model_validate(p) for p in products]

    async def get_active_products(self) -> List[schemas.Product]:
        products = await self.repository.get_active_products()
        return [schemas.Product.model_validate(p) for p in products]

    async def create(self, product: schemas.ProductCreate) -> schemas.Product:
        """
        Create a new, active product.

        NOTE: no business rules are checked here, unlike update().

        Args:
            product: Product data to create

        Returns:
            Created product representation
        """
        db_product = models.Product(
            name=product.name,
            price=product.price,
            category=product.category,
            description=product.description,
            image_url=product.image_url,
            active=True,
        )
        created = await self.repository.add(db_product)
        logger.info(f"Created product {created.id} ('{created.name}')")
        return schemas.Product.model_validate(created)

    async def update(self, product_id: int, product: schemas.ProductUpdate) -> schemas.Product:
        """
        Replace the editable fields of an existing product.

        Args:
            product_id: ID of the product to update
            product: Proposed field values, all of which are applied

        Returns:
            Updated product representation

        Raises:
            NotFoundError: if no product has this ID
            ValidationError: if the price is negative or the name is blank
        """
        db_product = await self.repository.get_by_id(product_id)
        if db_product is None:
            raise errors.NotFoundError("Product", product_id)

        if product.price < 0:
            logger.warning(f"Rejected update of product {product_id}: negative price {product.price}")
            raise errors.ValidationError("Price may not be negative")

        if not product.name or not product.name.strip():
            logger.warning(f"Rejected update of product {product_id}: blank name")
            raise errors.ValidationError("Name is required")

        db_product.name = product.name
        db_product.price = product.price
        db_product.category = product.category
        db_product.description = product.description
        db_product.active = product.active
        db_product.image_url = product.image_url
        db_product.updated_at = datetime.utcnow()

        updated = await self.repository.update(db_product)
        logger.info(f"Updated product {product_id}")
        return schemas.Product.model_validate(updated)

    async def delete(self, product_id: int) -> bool:
        """
        Delete a product.

        Returns:
            True if the product was deleted, False if not found
        """
        deleted = await self.repository.delete(product_id)
        if deleted:
            logger.info(f"Deleted product {product_id}")
        return deleted
