"""
Products Service API

This module implements a FastAPI-based microservice for the product catalog.
It exposes the ProductService operations over HTTP, with PostgreSQL
persistence through SQLAlchemy.

Endpoints:
    GET /healthz: Health check endpoint for orchestration systems
    GET /: List all products
    GET /active: List products visible in the catalog
    GET /category/{category}: List products of one category
    GET /{product_id}: Get a single product by ID
    POST /: Create a new product
    PUT /{product_id}: Update an existing product
    DELETE /{product_id}: Delete a product

On startup the schema is created and the baseline catalog is seeded.

Attributes:
    app (FastAPI): The FastAPI application instance configured with the title "products-service"
"""
import logging
from contextlib import asynccontextmanager
from typing import List
from fastapi import FastAPI, Depends, HTTPException, status
from sqlalchemy.orm import Session

from . import errors, models, schemas
from .database import SessionLocal, engine, get_db
from .logging_config import setup_logging
from .repository import SqlAlchemyProductRepository
from .seed import DatabaseSeeder
from .service import ProductService

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create database tables and seed the catalog before serving requests."""
    models.Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        await DatabaseSeeder(db).seed()
    finally:
        db.close()
    logger.info("products-service started")
    yield


app = FastAPI(title="products-service", lifespan=lifespan)


def get_product_service(db: Session = Depends(get_db)) -> ProductService:
    """Dependency that builds a ProductService bound to the request session."""
    return ProductService(SqlAlchemyProductRepository(db))


@app.get("/healthz", response_model=dict)
def health():
    """
    Health check endpoint for the products service.

    Returns:
        dict: {"status": "healthy"} when the service is operational.
    """
    return {"status": "healthy"}


@app.get("/", response_model=List[schemas.Product])
async def list_products(service: ProductService = Depends(get_product_service)):
    """List every product of the catalog."""
    return await service.get_all()


@app.get("/active", response_model=List[schemas.Product])
async def list_active_products(service: ProductService = Depends(get_product_service)):
    """List products flagged as active."""
    return await service.get_active_products()


@app.get("/category/{category}", response_model=List[schemas.Product])
async def list_products_by_category(
    category: models.Category,
    service: ProductService = Depends(get_product_service)
):
    """List products of one category. Unknown categories are rejected with 422."""
    return await service.get_by_category(category)


@app.get("/{product_id}", response_model=schemas.Product)
async def get_product(product_id: int, service: ProductService = Depends(get_product_service)):
    """
    Get a single product by ID.

    Raises:
        HTTPException: 404 if product not found
    """
    product = await service.get_by_id(product_id)
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


@app.post("/", response_model=schemas.Product, status_code=status.HTTP_201_CREATED)
async def create_product(
    product: schemas.ProductCreate,
    service: ProductService = Depends(get_product_service)
):
    """
    Create a new product. New products are always active.

    Returns:
        Created product object
    """
    return await service.create(product)


@app.put("/{product_id}", response_model=schemas.Product)
async def update_product(
    product_id: int,
    product: schemas.ProductUpdate,
    service: ProductService = Depends(get_product_service)
):
    """
    Update an existing product.

    Args:
        product_id: ID of the product to update
        product: Replacement values for every editable field

    Returns:
        Updated product object

    Raises:
        HTTPException: 404 if product not found
        HTTPException: 400 if the price is negative or the name is blank
    """
    try:
        return await service.update(product_id, product)
    except errors.NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except errors.ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(product_id: int, service: ProductService = Depends(get_product_service)):
    """
    Delete a product.

    Raises:
        HTTPException: 404 if product not found
    """
    success = await service.delete(product_id)
    if not success:
        raise HTTPException(status_code=404, detail="Product not found")
