"""Shared fixtures: in-memory database, seeded rows, and an API client."""

from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable, Iterator
from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from marketplace.db.models import Article, Base, Product, ProductImage, User
from marketplace.settings import get_settings

BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)

MakeProduct = Callable[..., Awaitable[Product]]


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Iterator[None]:
    """Keep environment tweaks from leaking through the cached settings."""

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest_asyncio.fixture
async def session() -> AsyncIterator[AsyncSession]:
    """Provide an in-memory SQLite session with freshly created tables."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", future=True)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    session_factory = async_sessionmaker(engine, expire_on_commit=False)
    async with session_factory() as db_session:
        yield db_session
        if db_session.in_transaction():
            await db_session.rollback()
    await engine.dispose()


@pytest_asyncio.fixture
async def alice(session: AsyncSession) -> User:
    user = User(id=1, email="alice@example.com", name="Alice")
    session.add(user)
    await session.commit()
    return user


@pytest_asyncio.fixture
async def bob(session: AsyncSession) -> User:
    user = User(id=2, email="bob@example.com", name="Bob")
    session.add(user)
    await session.commit()
    return user


@pytest_asyncio.fixture
async def article(session: AsyncSession, alice: User) -> Article:
    row = Article(
        title="Weekend market",
        content="Anyone selling a bike?",
        writer=alice.name,
        user_id=alice.id,
    )
    session.add(row)
    await session.commit()
    return row


@pytest.fixture
def make_product(session: AsyncSession) -> MakeProduct:
    """Return a factory inserting committed products with predictable timestamps."""

    counter = {"value": 0}

    async def _make(
        owner: User,
        *,
        name: str = "Product",
        description: str = "",
        price: int = 1000,
        favorite_count: int = 0,
        images: list[str] | None = None,
        tags: list[str] | None = None,
    ) -> Product:
        counter["value"] += 1
        created = BASE_TIME + timedelta(minutes=counter["value"])
        product = Product(
            name=name,
            description=description,
            price=price,
            favorite_count=favorite_count,
            writer=owner.name,
            user_id=owner.id,
            tags=tags or [],
            images=[ProductImage(image_path=path) for path in images or []],
            created_at=created,
            updated_at=created,
        )
        session.add(product)
        await session.commit()
        return product

    return _make


@pytest_asyncio.fixture
async def client(session: AsyncSession) -> AsyncIterator[AsyncClient]:
    """HTTP client bound to the app with ``get_db`` pointed at the test session."""

    from marketplace.db.connection import get_db
    from marketplace.main import app

    async def _override_get_db() -> AsyncIterator[AsyncSession]:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise

    app.dependency_overrides[get_db] = _override_get_db
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    try:
        async with AsyncClient(transport=transport, base_url="http://testserver") as http:
            yield http
    finally:
        app.dependency_overrides.clear()
