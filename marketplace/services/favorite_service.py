"""Like/unlike toggling for products.

A ``favorites`` row and ``Product.favorite_count`` always move together:

* ``like_product`` inserts the row and increments the counter.
* ``unlike_product`` deletes the row and decrements the counter.

Both pairs run inside one :class:`UnitOfWork`, so after any sequence of
successful calls the counter equals the number of rows for the product.
Atomicity comes from the database transaction, not from this module.
"""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from marketplace import messages
from marketplace.db.repositories import FavoriteRepository, ProductRepository
from marketplace.db.unit_of_work import UnitOfWork
from marketplace.errors import ConflictError, NotFoundError
from marketplace.schemas.product import ProductRead

logger = logging.getLogger(__name__)


class FavoriteService:
    def __init__(
        self,
        session: AsyncSession,
        *,
        products: ProductRepository,
        favorites: FavoriteRepository,
    ) -> None:
        self._session = session
        self._products = products
        self._favorites = favorites

    async def like_product(self, *, product_id: str, user_id: int) -> ProductRead:
        if await self._products.get_product(product_id) is None:
            raise NotFoundError(messages.PRODUCT_NOT_FOUND)
        if await self._favorites.exists(user_id=user_id, product_id=product_id):
            raise ConflictError(messages.FAVORITE_ALREADY_EXISTS)

        async with UnitOfWork(self._session):
            await self._favorites.add(user_id=user_id, product_id=product_id)
            await self._adjust_counter(product_id, delta=1)

        logger.info("User %s liked product %s", user_id, product_id)
        return await self._reload(product_id)

    async def unlike_product(self, *, product_id: str, user_id: int) -> ProductRead:
        if not await self._favorites.exists(user_id=user_id, product_id=product_id):
            raise ConflictError(messages.FAVORITE_NOT_FOUND)

        async with UnitOfWork(self._session):
            removed = await self._favorites.remove(user_id=user_id, product_id=product_id)
            if removed == 0:
                # Another request removed the row between the check and the delete.
                raise ConflictError(messages.FAVORITE_NOT_FOUND)
            await self._adjust_counter(product_id, delta=-1)

        logger.info("User %s unliked product %s", user_id, product_id)
        return await self._reload(product_id)

    async def _adjust_counter(self, product_id: str, *, delta: int) -> None:
        touched = await self._products.adjust_favorite_count(product_id, delta=delta)
        if touched == 0:
            raise NotFoundError(messages.PRODUCT_NOT_FOUND)

    async def _reload(self, product_id: str) -> ProductRead:
        product = await self._products.require_product(product_id)
        return ProductRead.model_validate(product)
