"""Integration tests for :class:`ProductRepository` against SQLite."""

from __future__ import annotations

import pytest
from sqlalchemy.exc import NoResultFound
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.db.models import User
from marketplace.db.repositories import BEST_PRODUCTS_LIMIT, ProductRepository


@pytest.mark.asyncio
async def test_list_products_recent_first_with_total(
    session: AsyncSession, alice: User, make_product
) -> None:
    for index in range(5):
        await make_product(alice, name=f"Item {index}")

    repo = ProductRepository(session)
    products, total = await repo.list_products(offset=1, limit=2, order_by="recent")

    assert total == 5
    assert [product.name for product in products] == ["Item 3", "Item 2"]


@pytest.mark.asyncio
async def test_list_products_by_favorite_count(
    session: AsyncSession, alice: User, make_product
) -> None:
    await make_product(alice, name="Cold", favorite_count=1)
    await make_product(alice, name="Hot", favorite_count=9)
    await make_product(alice, name="Warm", favorite_count=4)

    repo = ProductRepository(session)
    products, _ = await repo.list_products(offset=0, limit=10, order_by="favorite")

    assert [product.name for product in products] == ["Hot", "Warm", "Cold"]


@pytest.mark.asyncio
async def test_keyword_matches_name_or_description_case_insensitively(
    session: AsyncSession, alice: User, make_product
) -> None:
    await make_product(alice, name="Road Bike", description="lightly used")
    await make_product(alice, name="Helmet", description="fits any BIKE rider")
    await make_product(alice, name="Kettle", description="100% steel")

    repo = ProductRepository(session)
    products, total = await repo.list_products(
        offset=0, limit=10, order_by="recent", keyword="bike"
    )
    percent_only, percent_total = await repo.list_products(
        offset=0, limit=10, order_by="recent", keyword="%"
    )

    assert total == 2
    assert {product.name for product in products} == {"Road Bike", "Helmet"}
    assert percent_total == 1
    assert [product.name for product in percent_only] == ["Kettle"]


@pytest.mark.asyncio
async def test_list_best_products_caps_at_limit(
    session: AsyncSession, alice: User, make_product
) -> None:
    for count in range(6):
        await make_product(alice, name=f"P{count}", favorite_count=count)

    best = await ProductRepository(session).list_best_products()

    assert len(best) == BEST_PRODUCTS_LIMIT
    assert [product.favorite_count for product in best] == [5, 4, 3, 2]


@pytest.mark.asyncio
async def test_adjust_favorite_count_is_relative(
    session: AsyncSession, alice: User, make_product
) -> None:
    product = await make_product(alice, favorite_count=3)
    repo = ProductRepository(session)

    assert await repo.adjust_favorite_count(product.id, delta=1) == 1
    assert await repo.adjust_favorite_count(product.id, delta=1) == 1
    assert await repo.adjust_favorite_count("missing", delta=1) == 0

    refreshed = await repo.get_product(product.id)
    assert refreshed is not None
    assert refreshed.favorite_count == 5


@pytest.mark.asyncio
async def test_set_primary_image_replaces_or_creates(
    session: AsyncSession, alice: User, make_product
) -> None:
    with_images = await make_product(alice, images=["a.png", "b.png"])
    without_images = await make_product(alice)
    repo = ProductRepository(session)

    loaded = await repo.get_product(with_images.id)
    await repo.set_primary_image(loaded, "new.png")
    empty = await repo.get_product(without_images.id)
    await repo.set_primary_image(empty, "first.png")
    await session.commit()

    assert [image.image_path for image in (await repo.get_product(with_images.id)).images] == [
        "new.png",
        "b.png",
    ]
    assert [image.image_path for image in (await repo.get_product(without_images.id)).images] == [
        "first.png"
    ]


@pytest.mark.asyncio
async def test_require_product_raises_no_result_found(session: AsyncSession) -> None:
    with pytest.raises(NoResultFound):
        await ProductRepository(session).require_product("missing")
