"""Tests for the presigned URL route with the image service overridden."""

from __future__ import annotations

import pytest
from httpx import AsyncClient

from marketplace import messages
from marketplace.db.models import User
from marketplace.main import app
from marketplace.services.dependencies import get_image_service
from marketplace.services.image_service import ImageService


class _StubS3Client:
    def generate_presigned_url(self, operation: str, Params: dict, ExpiresIn: int) -> str:  # noqa: N803
        return f"https://uploads.example.com/{Params['Key']}"


@pytest.fixture
def image_service() -> ImageService:
    service = ImageService(
        bucket="market-images", prefix="products", expires_in=60, client=_StubS3Client()
    )
    app.dependency_overrides[get_image_service] = lambda: service
    return service


@pytest.mark.asyncio
async def test_presigned_url_returns_url(
    client: AsyncClient, alice: User, image_service: ImageService
) -> None:
    response = await client.post(
        "/images/presigned-url",
        json={"file_name": "lamp.png", "content_type": "image/png"},
        headers={"X-User-Id": str(alice.id)},
    )

    assert response.status_code == 200
    assert response.json()["url"].startswith("https://uploads.example.com/products/")


@pytest.mark.asyncio
async def test_presigned_url_rejects_non_images(
    client: AsyncClient, alice: User, image_service: ImageService
) -> None:
    response = await client.post(
        "/images/presigned-url",
        json={"file_name": "notes.txt", "content_type": "text/plain"},
        headers={"X-User-Id": str(alice.id)},
    )

    assert response.status_code == 400
    assert response.json()["message"] == messages.IMAGE_CONTENT_TYPE_INVALID
