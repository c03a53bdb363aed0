"""FastAPI dependency wiring for marketplace services.

Keeping the factories here leaves the service modules free of web-layer
concerns, so tests can build services directly around a session.
"""

from __future__ import annotations

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.db.connection import get_db
from marketplace.db.repositories import (
    ArticleRepository,
    CommentRepository,
    FavoriteRepository,
    ProductRepository,
    UserRepository,
)
from marketplace.services.comment_service import CommentService
from marketplace.services.favorite_service import FavoriteService
from marketplace.services.image_service import ImageService
from marketplace.services.product_service import ProductService
from marketplace.settings import get_settings


def get_product_service(session: AsyncSession = Depends(get_db)) -> ProductService:
    return ProductService(ProductRepository(session), UserRepository(session))


def get_favorite_service(session: AsyncSession = Depends(get_db)) -> FavoriteService:
    return FavoriteService(
        session,
        products=ProductRepository(session),
        favorites=FavoriteRepository(session),
    )


def get_comment_service(session: AsyncSession = Depends(get_db)) -> CommentService:
    return CommentService(
        CommentRepository(session),
        products=ProductRepository(session),
        articles=ArticleRepository(session),
        users=UserRepository(session),
    )


@lru_cache(maxsize=1)
def get_image_service() -> ImageService:
    """Build the boto3-backed image service once per process."""

    return ImageService.from_settings(get_settings())


__all__ = [
    "get_comment_service",
    "get_favorite_service",
    "get_image_service",
    "get_product_service",
]
