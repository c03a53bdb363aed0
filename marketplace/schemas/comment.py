"""Pydantic schemas for product and article comments."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CreateComment(BaseModel):
    content: str = Field(..., min_length=1, max_length=1000)


class PatchComment(BaseModel):
    # Emptiness is checked by the handler so the response carries its own message.
    content: str | None = Field(None, max_length=1000)


class CommentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    content: str
    writer: str
    user_id: int
    product_id: str | None = None
    article_id: str | None = None
    created_at: datetime
    updated_at: datetime


class CommentListResponse(BaseModel):
    total: int
    items: list[CommentRead]
