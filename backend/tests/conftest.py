"""Shared pytest fixtures: in-memory database, users, items and an API client."""

from decimal import Decimal
from typing import Any, Callable, Dict

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from rental_market.core.security import create_access_token
from rental_market.db import crud_rental_types, crud_users
from rental_market.db.base import Base
from rental_market.db.models import User
from rental_market.db.session import get_db
from rental_market.main import app
from rental_market.services import rental_items as item_service


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def rental_types(db):
    return await crud_rental_types.seed_default_types(db)


@pytest_asyncio.fixture
async def owner(db) -> User:
    return await crud_users.create_user(
        db, name="Olivia Owner", email="owner@example.com", password="testpass", role="lister"
    )


@pytest_asyncio.fixture
async def renter(db) -> User:
    return await crud_users.create_user(
        db, name="Ravi Renter", email="renter@example.com", password="testpass"
    )


@pytest_asyncio.fixture
async def other_user(db) -> User:
    return await crud_users.create_user(
        db, name="Omar Other", email="other@example.com", password="testpass"
    )


def item_attributes(**overrides: Any) -> Dict[str, Any]:
    attrs = {
        "title": "Pro Camera Kit",
        "description": "Mirrorless camera with two lenses.",
        "rental_type": "equipment",
        "price_per_day": Decimal("45.00"),
        "currency": "USD",
        "location": "Bandung",
        "minimum_rental_days": 1,
    }
    attrs.update(overrides)
    return attrs


@pytest.fixture
def make_item(db, rental_types, owner) -> Callable:
    async def _make(user: User | None = None, **overrides: Any):
        return await item_service.create_item(db, (user or owner).id, item_attributes(**overrides))

    return _make


@pytest_asyncio.fixture
async def item(make_item):
    return await make_item()


def auth_headers(user: User) -> Dict[str, str]:
    token = create_access_token({"user_id": user.id})
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def client(session_factory):
    async def _get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
