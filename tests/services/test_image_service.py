"""Tests for presigned upload URL generation with a stubbed S3 client."""

from __future__ import annotations

from typing import Any

import pytest
from botocore.exceptions import ClientError

from marketplace import messages
from marketplace.errors import BadRequestError
from marketplace.schemas.image import PresignedUrlRequest
from marketplace.services.image_service import ImageService
from marketplace.settings import AppSettings


class StubS3Client:
    """Records ``generate_presigned_url`` calls and returns a fixed URL."""

    def __init__(self, error: Exception | None = None) -> None:
        self.calls: list[dict[str, Any]] = []
        self._error = error

    def generate_presigned_url(self, operation: str, Params: dict, ExpiresIn: int) -> str:  # noqa: N803
        self.calls.append({"operation": operation, "params": Params, "expires_in": ExpiresIn})
        if self._error is not None:
            raise self._error
        return f"https://{Params['Bucket']}.s3.amazonaws.com/{Params['Key']}?signature=abc"


def _service(client: StubS3Client, *, bucket: str | None = "market-images") -> ImageService:
    return ImageService(bucket=bucket, prefix="/products/", expires_in=120, client=client)


@pytest.mark.asyncio
async def test_generate_presigned_url_signs_put_object() -> None:
    client = StubS3Client()

    url = await _service(client).generate_presigned_url(
        PresignedUrlRequest(file_name="photos/lamp.png", content_type="image/png")
    )

    call = client.calls[0]
    key = call["params"]["Key"]
    assert call["operation"] == "put_object"
    assert call["expires_in"] == 120
    assert call["params"]["Bucket"] == "market-images"
    assert call["params"]["ContentType"] == "image/png"
    assert key.startswith("products/")
    assert key.endswith("-lamp.png")
    assert url.startswith("https://market-images.s3.amazonaws.com/products/")


def test_build_object_key_is_unique_per_call() -> None:
    service = _service(StubS3Client())

    first = service.build_object_key("lamp.png")
    second = service.build_object_key("lamp.png")

    assert first != second


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("file_name", "content_type", "expected"),
    [
        ("   ", "image/png", messages.IMAGE_FILE_NAME_REQUIRED),
        ("folder/", "image/png", messages.IMAGE_FILE_NAME_REQUIRED),
        ("notes.txt", "text/plain", messages.IMAGE_CONTENT_TYPE_INVALID),
    ],
)
async def test_invalid_requests_are_bad_requests(
    file_name: str, content_type: str, expected: str
) -> None:
    client = StubS3Client()

    with pytest.raises(BadRequestError) as excinfo:
        await _service(client).generate_presigned_url(
            PresignedUrlRequest(file_name=file_name, content_type=content_type)
        )

    assert excinfo.value.message == expected
    assert client.calls == []


@pytest.mark.asyncio
async def test_missing_bucket_is_bad_request() -> None:
    with pytest.raises(BadRequestError) as excinfo:
        await _service(StubS3Client(), bucket=None).generate_presigned_url(
            PresignedUrlRequest(file_name="lamp.png", content_type="image/png")
        )

    assert excinfo.value.message == messages.IMAGE_BUCKET_NOT_CONFIGURED


@pytest.mark.asyncio
async def test_boto_errors_surface_as_bad_request() -> None:
    error = ClientError(
        {"Error": {"Code": "AccessDenied", "Message": "Access Denied"}},
        "PutObject",
    )

    with pytest.raises(BadRequestError) as excinfo:
        await _service(StubS3Client(error=error)).generate_presigned_url(
            PresignedUrlRequest(file_name="lamp.png", content_type="image/png")
        )

    assert "Access Denied" in excinfo.value.message


def test_from_settings_uses_configured_bucket(monkeypatch: pytest.MonkeyPatch) -> None:
    created: dict[str, Any] = {}

    def _fake_client(service_name: str, region_name: str | None = None) -> StubS3Client:
        created.update(service_name=service_name, region_name=region_name)
        return StubS3Client()

    monkeypatch.setattr("marketplace.services.image_service.boto3.client", _fake_client)

    service = ImageService.from_settings(
        AppSettings(image_bucket="market-images", aws_region="ap-northeast-2")
    )

    assert created == {"service_name": "s3", "region_name": "ap-northeast-2"}
    assert service.build_object_key("a.png").startswith("products/")
