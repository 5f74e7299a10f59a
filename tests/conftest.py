import os

# Keep the module-level engine off the developer database
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["ENVIRONMENT"] = "test"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool
from sqlmodel import SQLModel, create_engine

from app.core.database import get_async_session
from app.main import app
from app.services.product_service import ProductsService, get_products_service


@pytest.fixture
def session_maker(tmp_path):
    db_file = tmp_path / "products.db"

    sync_engine = create_engine(f"sqlite:///{db_file}")
    SQLModel.metadata.create_all(sync_engine)
    sync_engine.dispose()

    engine = create_async_engine(f"sqlite+aiosqlite:///{db_file}", poolclass=NullPool)
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def client(session_maker):
    async def override_get_async_session():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_async_session] = override_get_async_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def use_service(client):
    """Swap the products service for the duration of a test."""
    def _use(service: ProductsService):
        app.dependency_overrides[get_products_service] = lambda: service
        return client
    return _use


