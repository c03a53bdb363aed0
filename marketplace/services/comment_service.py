"""Business logic behind the comment endpoints."""

from __future__ import annotations

import logging

from marketplace import messages
from marketplace.db.repositories import (
    ArticleRepository,
    CommentRepository,
    ProductRepository,
    UserRepository,
)
from marketplace.errors import BadRequestError, NotFoundError
from marketplace.schemas.comment import CommentListResponse, CommentRead
from marketplace.services.ownership import require_owner

logger = logging.getLogger(__name__)


class CommentService:
    def __init__(
        self,
        comments: CommentRepository,
        *,
        products: ProductRepository,
        articles: ArticleRepository,
        users: UserRepository,
    ) -> None:
        self._comments = comments
        self._products = products
        self._articles = articles
        self._users = users

    async def list_product_comments(
        self, product_id: str, *, offset: int = 0, limit: int = 20
    ) -> CommentListResponse:
        await self._require_product(product_id)
        comments, total = await self._comments.list_comments(
            product_id=product_id, offset=offset, limit=limit
        )
        return CommentListResponse(
            total=total,
            items=[CommentRead.model_validate(comment) for comment in comments],
        )

    async def list_article_comments(
        self, article_id: str, *, offset: int = 0, limit: int = 20
    ) -> CommentListResponse:
        await self._require_article(article_id)
        comments, total = await self._comments.list_comments(
            article_id=article_id, offset=offset, limit=limit
        )
        return CommentListResponse(
            total=total,
            items=[CommentRead.model_validate(comment) for comment in comments],
        )

    async def create_comment(
        self,
        *,
        content: str,
        user_id: int,
        product_id: str | None = None,
        article_id: str | None = None,
    ) -> CommentRead:
        """Attach a comment to exactly one parent (product or article)."""

        if (product_id is None) == (article_id is None):
            raise BadRequestError(messages.COMMENT_PARENT_REQUIRED)

        if product_id is not None:
            await self._require_product(product_id)
        else:
            await self._require_article(article_id)

        writer = await self._users.get_user_name(user_id)
        if writer is None:
            raise NotFoundError(messages.USER_NOT_FOUND)

        comment = await self._comments.create_comment(
            content=content,
            writer=writer,
            user_id=user_id,
            product_id=product_id,
            article_id=article_id,
        )
        logger.info("Comment %s created by user %s", comment.id, user_id)
        return CommentRead.model_validate(comment)

    async def update_comment(self, comment_id: str, user_id: int, content: str) -> CommentRead:
        comment = require_owner(
            await self._comments.get_comment(comment_id),
            user_id,
            not_found=messages.COMMENT_NOT_FOUND,
            forbidden=messages.COMMENT_UPDATE_FORBIDDEN,
        )
        await self._comments.update_content(comment, content)
        return CommentRead.model_validate(comment)

    async def delete_comment(self, comment_id: str, user_id: int) -> None:
        comment = require_owner(
            await self._comments.get_comment(comment_id),
            user_id,
            not_found=messages.COMMENT_NOT_FOUND,
            forbidden=messages.COMMENT_DELETE_FORBIDDEN,
        )
        await self._comments.delete_comment(comment)
        logger.info("Comment %s deleted by user %s", comment_id, user_id)

    async def _require_product(self, product_id: str) -> None:
        if await self._products.get_product(product_id) is None:
            raise NotFoundError(messages.PRODUCT_NOT_FOUND)

    async def _require_article(self, article_id: str) -> None:
        if not await self._articles.exists(article_id):
            raise NotFoundError(messages.ARTICLE_NOT_FOUND)
