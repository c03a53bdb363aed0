"""Presigned upload URL endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from marketplace.api.auth import get_current_user_id
from marketplace.schemas.image import PresignedUrlRequest, PresignedUrlResponse
from marketplace.services.dependencies import get_image_service
from marketplace.services.image_service import ImageService

router = APIRouter()


@router.post("/presigned-url", response_model=PresignedUrlResponse)
async def create_presigned_url(
    payload: PresignedUrlRequest,
    _user_id: int = Depends(get_current_user_id),
    service: ImageService = Depends(get_image_service),
) -> PresignedUrlResponse:
    """Return a time-limited URL the client can ``PUT`` an image to."""

    url = await service.generate_presigned_url(payload)
    return PresignedUrlResponse(url=url)
