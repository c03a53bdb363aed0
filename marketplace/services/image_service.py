"""Presigned upload URLs for product images.

Clients upload straight to object storage: the API only signs a ``PUT``
request for a fresh object key and hands the URL back.  Storing the final
path on a product happens later through the regular create/update payloads.
"""

from __future__ import annotations

import logging
import posixpath
import uuid
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from marketplace import messages
from marketplace.errors import BadRequestError
from marketplace.schemas.image import PresignedUrlRequest
from marketplace.settings import AppSettings

logger = logging.getLogger(__name__)


class ImageService:
    def __init__(
        self,
        *,
        bucket: str | None,
        prefix: str,
        expires_in: int,
        client: Any,
    ) -> None:
        self._bucket = bucket
        self._prefix = prefix.strip("/")
        self._expires_in = expires_in
        self._client = client

    @classmethod
    def from_settings(cls, settings: AppSettings) -> ImageService:
        client = boto3.client("s3", region_name=settings.aws_region)
        return cls(
            bucket=settings.image_bucket,
            prefix=settings.image_upload_prefix,
            expires_in=settings.image_upload_expires_seconds,
            client=client,
        )

    def build_object_key(self, file_name: str) -> str:
        """Return ``<prefix>/<uuid>-<basename>`` so uploads never collide."""

        base_name = posixpath.basename(file_name.replace("\\", "/")).strip()
        key = f"{uuid.uuid4().hex}-{base_name}"
        return f"{self._prefix}/{key}" if self._prefix else key

    async def generate_presigned_url(self, request: PresignedUrlRequest) -> str:
        """Sign a ``put_object`` request for a new image.

        Every failure (bad input, missing bucket configuration, or an error
        raised by boto3) becomes a :class:`BadRequestError` carrying the
        underlying message.
        """

        file_name = request.file_name.strip()
        if not file_name or not posixpath.basename(file_name.replace("\\", "/")).strip():
            raise BadRequestError(messages.IMAGE_FILE_NAME_REQUIRED)
        if not request.content_type.lower().startswith("image/"):
            raise BadRequestError(messages.IMAGE_CONTENT_TYPE_INVALID)
        if not self._bucket:
            raise BadRequestError(messages.IMAGE_BUCKET_NOT_CONFIGURED)

        key = self.build_object_key(file_name)
        params = {
            "Bucket": self._bucket,
            "Key": key,
            "ContentType": request.content_type,
        }

        try:
            url = self._client.generate_presigned_url(
                "put_object",
                Params=params,
                ExpiresIn=self._expires_in,
            )
        except (BotoCoreError, ClientError) as exc:
            logger.warning("Presigned URL generation failed for %s: %s", key, exc)
            raise BadRequestError(str(exc)) from exc

        logger.info("Issued presigned upload URL for %s", key)
        return url
