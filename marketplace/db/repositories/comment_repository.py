"""Comment repository; comments hang off either a product or an article."""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.db.models import Comment


class CommentRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_comments(
        self,
        *,
        product_id: str | None = None,
        article_id: str | None = None,
        offset: int = 0,
        limit: int = 20,
    ) -> tuple[list[Comment], int]:
        """Return comments for one parent, newest first, plus the total count."""
        if (product_id is None) == (article_id is None):
            raise ValueError("Exactly one of product_id or article_id is required")

        if product_id is not None:
            condition = Comment.product_id == product_id
        else:
            condition = Comment.article_id == article_id

        query = (
            select(Comment)
            .where(condition)
            .order_by(Comment.created_at.desc(), Comment.id)
            .offset(offset)
            .limit(limit)
        )
        count_query = select(func.count()).select_from(Comment).where(condition)

        total = await self._session.scalar(count_query)
        result = await self._session.execute(query)
        return list(result.scalars().all()), int(total or 0)

    async def get_comment(self, comment_id: str) -> Comment | None:
        return await self._session.get(Comment, comment_id)

    async def create_comment(
        self,
        *,
        content: str,
        writer: str,
        user_id: int,
        product_id: str | None = None,
        article_id: str | None = None,
    ) -> Comment:
        comment = Comment(
            content=content,
            writer=writer,
            user_id=user_id,
            product_id=product_id,
            article_id=article_id,
        )
        self._session.add(comment)
        await self._session.flush()
        return comment

    async def update_content(self, comment: Comment, content: str) -> Comment:
        comment.content = content
        await self._session.flush()
        return comment

    async def delete_comment(self, comment: Comment) -> None:
        await self._session.delete(comment)
        await self._session.flush()
