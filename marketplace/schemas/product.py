"""Pydantic schemas that power the products API surface."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _clean_tags(value: list[str]) -> list[str]:
    cleaned = [token.strip() for token in value]
    if any(not token for token in cleaned):
        raise ValueError("Tags must not be blank once whitespace is removed")
    return cleaned


class ProductCreate(BaseModel):
    """Payload for listing a new product."""

    name: str = Field(..., min_length=1, max_length=100)
    description: str = Field("", max_length=5000)
    price: int = Field(..., ge=0, description="Price in the smallest currency unit")
    tags: list[str] = Field(
        default_factory=list,
        description="Free-form labels displayed under the listing.",
    )
    image_url: str | None = Field(
        None,
        max_length=1024,
        description="Path returned by the presigned upload flow; becomes the first image.",
    )

    @field_validator("tags")
    @classmethod
    def _validate_tags(cls, value: list[str]) -> list[str]:
        return _clean_tags(value)


class ProductUpdate(BaseModel):
    """Partial update payload; omitted fields stay untouched."""

    name: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = Field(None, max_length=5000)
    price: int | None = Field(None, ge=0)
    tags: list[str] | None = None
    image_url: str | None = Field(
        None,
        max_length=1024,
        description="Replaces the first image, or adds one when the product has none.",
    )

    @field_validator("tags")
    @classmethod
    def _validate_tags(cls, value: list[str] | None) -> list[str] | None:
        if value is None:
            return None
        return _clean_tags(value)


class ProductRead(BaseModel):
    """Read model exposed in API responses."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str
    price: int
    favorite_count: int
    writer: str
    user_id: int
    tags: list[str] = Field(default_factory=list)
    images: list[str] = Field(
        default_factory=list, description="Image paths in upload order."
    )
    created_at: datetime
    updated_at: datetime

    @field_validator("images", mode="before")
    @classmethod
    def _image_paths(cls, value: Any) -> list[str]:
        """Flatten ``ProductImage`` rows into their stored paths."""

        return [getattr(image, "image_path", image) for image in value or []]


class ProductListResponse(BaseModel):
    total: int
    items: list[ProductRead]
