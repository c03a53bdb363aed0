"""End-to-end tests for the product and favorite routes."""

from __future__ import annotations

import pytest
from httpx import AsyncClient

from marketplace import messages
from marketplace.db.models import User


def _as(user_id: int) -> dict[str, str]:
    return {"X-User-Id": str(user_id)}


@pytest.mark.asyncio
async def test_create_then_fetch_product(client: AsyncClient, alice: User) -> None:
    alice_id = alice.id

    response = await client.post(
        "/products",
        json={"name": "Tent", "description": "2 person", "price": 80000, "tags": ["camping"]},
        headers=_as(alice_id),
    )

    assert response.status_code == 201
    body = response.json()
    assert body["writer"] == "Alice"
    assert body["favorite_count"] == 0

    fetched = await client.get(f"/products/{body['id']}")
    assert fetched.status_code == 200
    assert fetched.json()["name"] == "Tent"


@pytest.mark.asyncio
async def test_create_requires_caller_identity(client: AsyncClient) -> None:
    response = await client.post("/products", json={"name": "Tent", "price": 1})

    assert response.status_code == 401
    assert response.json()["message"] == messages.AUTHENTICATION_REQUIRED


@pytest.mark.asyncio
async def test_invalid_payload_returns_400_with_errors(client: AsyncClient, alice: User) -> None:
    alice_id = alice.id

    response = await client.post(
        "/products", json={"name": "Tent", "price": -5}, headers=_as(alice_id)
    )

    assert response.status_code == 400
    body = response.json()
    assert body["error_type"] == "validation_error"
    assert body["message"] == body["errors"][0]["message"]
    assert body["errors"][0]["field"] == "price"


@pytest.mark.asyncio
async def test_list_products_orders_and_filters(
    client: AsyncClient, alice: User, make_product
) -> None:
    await make_product(alice, name="Old bike", favorite_count=7)
    await make_product(alice, name="New bike", favorite_count=1)
    await make_product(alice, name="Sofa", favorite_count=3)

    recent = await client.get("/products", params={"keyword": "BIKE"})
    favorite = await client.get("/products", params={"orderBy": "favorite", "limit": 2})

    assert recent.json()["total"] == 2
    assert [item["name"] for item in recent.json()["items"]] == ["New bike", "Old bike"]
    assert favorite.json()["total"] == 3
    assert [item["name"] for item in favorite.json()["items"]] == ["Old bike", "Sofa"]


@pytest.mark.asyncio
async def test_unknown_order_falls_back_to_newest_first(
    client: AsyncClient, alice: User, make_product
) -> None:
    await make_product(alice, name="Older", favorite_count=9)
    await make_product(alice, name="Newer", favorite_count=0)

    response = await client.get("/products", params={"orderBy": "newest"})

    assert response.status_code == 200
    assert [item["name"] for item in response.json()["items"]] == ["Newer", "Older"]


@pytest.mark.asyncio
async def test_best_products_returns_top_four(
    client: AsyncClient, alice: User, make_product
) -> None:
    for count in range(5):
        await make_product(alice, name=f"P{count}", favorite_count=count)

    response = await client.get("/products/best")

    assert [item["favorite_count"] for item in response.json()] == [4, 3, 2, 1]


@pytest.mark.asyncio
async def test_patch_by_non_owner_is_forbidden(
    client: AsyncClient, alice: User, bob: User, make_product
) -> None:
    product = await make_product(alice, name="Chair")
    product_id = product.id
    bob_id = bob.id

    response = await client.patch(
        f"/products/{product_id}", json={"name": "Mine now"}, headers=_as(bob_id)
    )

    assert response.status_code == 403
    assert response.json()["message"] == messages.PRODUCT_UPDATE_FORBIDDEN
    assert (await client.get(f"/products/{product_id}")).json()["name"] == "Chair"


@pytest.mark.asyncio
async def test_owner_patch_and_delete(
    client: AsyncClient, alice: User, make_product
) -> None:
    product = await make_product(alice, name="Chair", images=["old.png"])
    product_id = product.id
    alice_id = alice.id

    patched = await client.patch(
        f"/products/{product_id}",
        json={"price": 1234, "image_url": "new.png"},
        headers=_as(alice_id),
    )
    deleted = await client.delete(f"/products/{product_id}", headers=_as(alice_id))
    missing = await client.get(f"/products/{product_id}")

    assert patched.json()["price"] == 1234
    assert patched.json()["images"] == ["new.png"]
    assert deleted.status_code == 204
    assert missing.status_code == 404
    assert missing.json()["message"] == messages.PRODUCT_NOT_FOUND


@pytest.mark.asyncio
async def test_favorite_toggle_round_trip(
    client: AsyncClient, alice: User, bob: User, make_product
) -> None:
    product = await make_product(alice)
    bob_id = bob.id
    url = f"/products/{product.id}/favorite"

    liked = await client.post(url, headers=_as(bob_id))
    liked_again = await client.post(url, headers=_as(bob_id))
    unliked = await client.delete(url, headers=_as(bob_id))
    unliked_again = await client.delete(url, headers=_as(bob_id))

    assert liked.status_code == 200
    assert liked.json()["favorite_count"] == 1
    assert liked_again.status_code == 409
    assert liked_again.json()["message"] == messages.FAVORITE_ALREADY_EXISTS
    assert unliked.json()["favorite_count"] == 0
    assert unliked_again.status_code == 409
    assert unliked_again.json()["message"] == messages.FAVORITE_NOT_FOUND


@pytest.mark.asyncio
async def test_responses_carry_request_id(client: AsyncClient) -> None:
    response = await client.get("/products/does-not-exist")

    assert response.status_code == 404
    assert response.headers["X-Request-ID"] == response.json()["request_id"]
