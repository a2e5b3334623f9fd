"""Tests for the orders-service startup hook."""

from fastapi.testclient import TestClient
from sqlalchemy import create_engine, inspect
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from services.orders.app import main
from services.orders.app.database import get_db


def test_startup_creates_schema(monkeypatch):
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    session_factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    monkeypatch.setattr(main, "engine", engine)

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    main.app.dependency_overrides[get_db] = override_get_db
    try:
        with TestClient(main.app) as client:
            response = client.get("/")
    finally:
        main.app.dependency_overrides.clear()

    assert response.status_code == 200
    assert response.json() == []
    tables = inspect(engine).get_table_names()
    assert "orders" in tables
    assert "order_items" in tables
    engine.dispose()
