"""Explicit transaction boundary for multi-statement writes.

Favorites keep ``Product.favorite_count`` in lockstep with the ``favorites``
join table, so inserting/deleting the row and adjusting the counter must land
in the same commit.  :class:`UnitOfWork` makes that boundary visible at the
call site instead of relying on the request-scoped commit in
:func:`marketplace.db.connection.get_db`.
"""

from __future__ import annotations

import logging
from types import TracebackType

from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)


class UnitOfWork:
    """Commit every write issued inside the ``async with`` block, or none.

    Usage::

        async with UnitOfWork(session):
            await favorites.add(user_id=user_id, product_id=product_id)
            await products.adjust_favorite_count(product_id, delta=1)

    A clean exit commits the session.  Any exception raised inside the block,
    or by the commit itself, rolls the session back and propagates unchanged.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @property
    def session(self) -> AsyncSession:
        return self._session

    async def __aenter__(self) -> UnitOfWork:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        if exc_type is not None:
            logger.debug("Rolling back unit of work after %s", exc_type.__name__)
            await self._session.rollback()
            return False

        try:
            await self._session.commit()
        except Exception:
            await self._session.rollback()
            raise
        return False


__all__ = ["UnitOfWork"]
