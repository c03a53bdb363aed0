"""Schemas for the presigned image upload flow."""

from __future__ import annotations

from pydantic import BaseModel, Field


class PresignedUrlRequest(BaseModel):
    file_name: str = Field(..., max_length=255, description="Original file name")
    content_type: str = Field(..., max_length=100, description="MIME type, e.g. image/png")


class PresignedUrlResponse(BaseModel):
    url: str = Field(..., description="Time-limited URL accepting a single PUT upload")
