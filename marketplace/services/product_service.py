"""Business logic behind the product endpoints."""

from __future__ import annotations

import logging

from marketplace import messages
from marketplace.db.repositories import ProductRepository, UserRepository
from marketplace.errors import NotFoundError
from marketplace.schemas.product import (
    ProductCreate,
    ProductListResponse,
    ProductRead,
    ProductUpdate,
)
from marketplace.services.ownership import require_owner

logger = logging.getLogger(__name__)


class ProductService:
    """Coordinates product persistence with ownership checks."""

    def __init__(self, products: ProductRepository, users: UserRepository) -> None:
        self._products = products
        self._users = users

    async def list_products(
        self,
        *,
        offset: int = 0,
        limit: int = 10,
        order_by: str = "recent",
        keyword: str | None = None,
    ) -> ProductListResponse:
        products, total = await self._products.list_products(
            offset=offset,
            limit=limit,
            order_by=order_by,
            keyword=keyword,
        )
        return ProductListResponse(
            total=total,
            items=[ProductRead.model_validate(product) for product in products],
        )

    async def list_best_products(self) -> list[ProductRead]:
        products = await self._products.list_best_products()
        return [ProductRead.model_validate(product) for product in products]

    async def get_product(self, product_id: str) -> ProductRead:
        product = await self._products.get_product(product_id)
        if product is None:
            raise NotFoundError(messages.PRODUCT_NOT_FOUND)
        return ProductRead.model_validate(product)

    async def create_product(self, *, user_id: int, payload: ProductCreate) -> ProductRead:
        writer = await self._users.get_user_name(user_id)
        if writer is None:
            raise NotFoundError(messages.USER_NOT_FOUND)

        product = await self._products.create_product(
            user_id=user_id,
            writer=writer,
            name=payload.name,
            description=payload.description,
            price=payload.price,
            tags=payload.tags,
            image_url=payload.image_url,
        )
        logger.info("Product %s created by user %s", product.id, user_id)
        return ProductRead.model_validate(product)

    async def update_product(
        self,
        *,
        product_id: str,
        user_id: int,
        payload: ProductUpdate,
    ) -> ProductRead:
        product = require_owner(
            await self._products.get_product(product_id),
            user_id,
            not_found=messages.PRODUCT_NOT_FOUND,
            forbidden=messages.PRODUCT_UPDATE_FORBIDDEN,
        )

        changes = payload.model_dump(exclude_unset=True, exclude_none=True, exclude={"image_url"})
        for field, value in changes.items():
            setattr(product, field, value)

        if payload.image_url:
            await self._products.set_primary_image(product, payload.image_url)

        await self._products.save(product)
        logger.info("Product %s updated (%s)", product_id, ", ".join(sorted(changes)) or "images")
        return ProductRead.model_validate(product)

    async def delete_product(self, *, product_id: str, user_id: int) -> None:
        product = require_owner(
            await self._products.get_product(product_id),
            user_id,
            not_found=messages.PRODUCT_NOT_FOUND,
            forbidden=messages.PRODUCT_DELETE_FORBIDDEN,
        )
        await self._products.delete_product(product)
        logger.info("Product %s deleted by user %s", product_id, user_id)
