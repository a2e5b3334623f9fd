"""
Orders Service API

This module implements a FastAPI-based microservice for managing orders with full CRUD operations.
It exposes the OrderService operations over HTTP, with PostgreSQL database persistence.

Endpoints:
    GET /healthz: Health check endpoint for orchestration systems
    GET /: List all orders
    GET /status/{status}: List orders in one status
    GET /customer/{customer_id}: List orders of one customer
    GET /{order_id}: Get a single order by ID
    GET /{order_id}/items: Get the line items of an order
    POST /: Create a new order
    PUT /{order_id}: Update an existing order
    DELETE /{order_id}: Delete an order and its items

Attributes:
    app (FastAPI): The FastAPI application instance configured with the title "orders-service"
"""
import logging
from contextlib import asynccontextmanager
from typing import List
from fastapi import FastAPI, Depends, HTTPException, status
from sqlalchemy.orm import Session

from . import errors, models, schemas
from .database import engine, get_db
from .logging_config import setup_logging
from .repository import SqlAlchemyOrderRepository
from .service import OrderService

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create database tables before serving requests."""
    models.Base.metadata.create_all(bind=engine)
    logger.info("orders-service started")
    yield


app = FastAPI(title="orders-service", lifespan=lifespan)


def get_order_service(db: Session = Depends(get_db)) -> OrderService:
    """Dependency that builds an OrderService bound to the request session."""
    return OrderService(SqlAlchemyOrderRepository(db))


@app.get("/healthz", response_model=dict)
def health():
    """
    Health check endpoint for the orders service.

    This endpoint is used by orchestration systems (like Kubernetes) to verify
    that the service is running and able to respond to requests.

    Returns:
        dict: {"status": "healthy"} when the service is operational.
    """
    return {"status": "healthy"}


@app.get("/", response_model=List[schemas.Order])
async def list_orders(service: OrderService = Depends(get_order_service)):
    """List all orders."""
    return await service.get_all()


@app.get("/status/{order_status}", response_model=List[schemas.Order])
async def list_orders_by_status(
    order_status: models.OrderStatus,
    service: OrderService = Depends(get_order_service)
):
    """List orders in one status. Unknown statuses are rejected with 422."""
    return await service.get_by_status(order_status)


@app.get("/customer/{customer_id}", response_model=List[schemas.Order])
async def list_orders_by_customer(customer_id: int, service: OrderService = Depends(get_order_service)):
    """List the orders placed by one customer."""
    return await service.get_by_customer(customer_id)


@app.get("/{order_id}", response_model=schemas.Order)
async def get_order(order_id: int, service: OrderService = Depends(get_order_service)):
    """
    Get a single order by ID.

    Raises:
        HTTPException: 404 if order not found
    """
    order = await service.get_by_id(order_id)
    if order is None:
        raise HTTPException(status_code=404, detail="Order not found")
    return order


@app.get("/{order_id}/items", response_model=List[schemas.OrderItem])
async def get_order_items(order_id: int, service: OrderService = Depends(get_order_service)):
    """Get the line items of an order. Unknown orders have no items."""
    return await service.get_items(order_id)


@app.post("/", response_model=schemas.Order, status_code=status.HTTP_201_CREATED)
async def create_order(order: schemas.OrderCreate, service: OrderService = Depends(get_order_service)):
    """
    Create a new order. It starts in status RECEIVED with payment PENDING.

    Args:
        order: Order data to create

    Returns:
        Created order object

    Raises:
        HTTPException: 400 if an item or text field is invalid
        HTTPException: 409 if the order number already exists
    """
    try:
        return await service.create(order)
    except errors.ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except errors.ConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))


@app.put("/{order_id}", response_model=schemas.Order)
async def update_order(
    order_id: int,
    order: schemas.OrderUpdate,
    service: OrderService = Depends(get_order_service)
):
    """
    Update an existing order.

    Args:
        order_id: ID of the order to update
        order: Replacement status, payment data and observation

    Returns:
        Updated order object

    Raises:
        HTTPException: 404 if order not found
        HTTPException: 400 if a text field is invalid
    """
    try:
        return await service.update(order_id, order)
    except errors.NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except errors.ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except errors.ConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))


@app.delete("/{order_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_order(order_id: int, service: OrderService = Depends(get_order_service)):
    """
    Delete an order and all of its items.

    Raises:
        HTTPException: 404 if order not found
    """
    success = await service.delete(order_id)
    if not success:
        raise HTTPException(status_code=404, detail="Order not found")
