"""FastAPI router for products and the like/unlike toggle."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response, status

from marketplace.api.auth import get_current_user_id
from marketplace.schemas.product import (
    ProductCreate,
    ProductListResponse,
    ProductRead,
    ProductUpdate,
)
from marketplace.services.dependencies import get_favorite_service, get_product_service
from marketplace.services.favorite_service import FavoriteService
from marketplace.services.product_service import ProductService

router = APIRouter()


@router.get("", response_model=ProductListResponse)
@router.get("/", response_model=ProductListResponse, include_in_schema=False)
async def list_products(
    offset: int = Query(0, ge=0, description="Number of products to skip"),
    limit: int = Query(10, ge=1, le=100, description="Number of products to return"),
    order_by: str = Query(
        "recent", alias="orderBy", description="'favorite' sorts by likes; anything else by newest"
    ),
    keyword: str | None = Query(
        None, max_length=100, description="Case-insensitive match on name or description"
    ),
    service: ProductService = Depends(get_product_service),
) -> ProductListResponse:
    """List products, newest first unless ordered by favorites."""

    return await service.list_products(
        offset=offset,
        limit=limit,
        order_by=order_by,
        keyword=keyword or None,
    )


@router.get("/best", response_model=list[ProductRead])
async def list_best_products(
    service: ProductService = Depends(get_product_service),
) -> list[ProductRead]:
    """Return the most-liked products."""

    return await service.list_best_products()


@router.post("", response_model=ProductRead, status_code=status.HTTP_201_CREATED)
async def create_product(
    payload: ProductCreate,
    user_id: int = Depends(get_current_user_id),
    service: ProductService = Depends(get_product_service),
) -> ProductRead:
    return await service.create_product(user_id=user_id, payload=payload)


@router.get("/{product_id}", response_model=ProductRead)
async def get_product(
    product_id: str,
    service: ProductService = Depends(get_product_service),
) -> ProductRead:
    return await service.get_product(product_id)


@router.patch("/{product_id}", response_model=ProductRead)
async def update_product(
    product_id: str,
    payload: ProductUpdate,
    user_id: int = Depends(get_current_user_id),
    service: ProductService = Depends(get_product_service),
) -> ProductRead:
    """Apply a partial update; only the owner may edit a product."""

    return await service.update_product(
        product_id=product_id, user_id=user_id, payload=payload
    )


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(
    product_id: str,
    user_id: int = Depends(get_current_user_id),
    service: ProductService = Depends(get_product_service),
) -> Response:
    await service.delete_product(product_id=product_id, user_id=user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{product_id}/favorite", response_model=ProductRead)
async def like_product(
    product_id: str,
    user_id: int = Depends(get_current_user_id),
    service: FavoriteService = Depends(get_favorite_service),
) -> ProductRead:
    """Record a like and return the product with its updated counter."""

    return await service.like_product(product_id=product_id, user_id=user_id)


@router.delete("/{product_id}/favorite", response_model=ProductRead)
async def unlike_product(
    product_id: str,
    user_id: int = Depends(get_current_user_id),
    service: FavoriteService = Depends(get_favorite_service),
) -> ProductRead:
    return await service.unlike_product(product_id=product_id, user_id=user_id)
