"""Favorite (like) repository.

Rows are only ever written together with
:meth:`ProductRepository.adjust_favorite_count`; see
:class:`marketplace.services.favorite_service.FavoriteService`.
"""

from __future__ import annotations

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.db.models import Favorite


class FavoriteRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def exists(self, *, user_id: int, product_id: str) -> bool:
        query = select(Favorite.id).where(
            Favorite.user_id == user_id,
            Favorite.product_id == product_id,
        )
        return await self._session.scalar(query) is not None

    async def add(self, *, user_id: int, product_id: str) -> Favorite:
        favorite = Favorite(user_id=user_id, product_id=product_id)
        self._session.add(favorite)
        # Flush so a concurrent duplicate trips the unique constraint here.
        await self._session.flush()
        return favorite

    async def remove(self, *, user_id: int, product_id: str) -> int:
        statement = (
            delete(Favorite)
            .where(
                Favorite.user_id == user_id,
                Favorite.product_id == product_id,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(statement)
        return result.rowcount

    async def count_for_product(self, product_id: str) -> int:
        query = (
            select(func.count())
            .select_from(Favorite)
            .where(Favorite.product_id == product_id)
        )
        return int(await self._session.scalar(query) or 0)

