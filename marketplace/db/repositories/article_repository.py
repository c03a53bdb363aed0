"""Article lookups needed by the comment service."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.db.models import Article


class ArticleRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def exists(self, article_id: str) -> bool:
        query = select(Article.id).where(Article.id == article_id)
        return await self._session.scalar(query) is not None
