"""Comment routes.

Comments hang off either a product or an article, so the list/create routes
live under both parents while edits address the comment directly.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response, status

from marketplace import messages
from marketplace.api.auth import get_current_user_id
from marketplace.errors import BadRequestError
from marketplace.schemas.comment import (
    CommentListResponse,
    CommentRead,
    CreateComment,
    PatchComment,
)
from marketplace.services.comment_service import CommentService
from marketplace.services.dependencies import get_comment_service

router = APIRouter()


@router.get("/products/{product_id}/comments", response_model=CommentListResponse)
async def list_product_comments(
    product_id: str,
    offset: int = Query(0, ge=0),
    limit: int = Query(20, ge=1, le=100),
    service: CommentService = Depends(get_comment_service),
) -> CommentListResponse:
    return await service.list_product_comments(product_id, offset=offset, limit=limit)


@router.post(
    "/products/{product_id}/comments",
    response_model=CommentRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_product_comment(
    product_id: str,
    payload: CreateComment,
    user_id: int = Depends(get_current_user_id),
    service: CommentService = Depends(get_comment_service),
) -> CommentRead:
    return await service.create_comment(
        content=payload.content, user_id=user_id, product_id=product_id
    )


@router.get("/articles/{article_id}/comments", response_model=CommentListResponse)
async def list_article_comments(
    article_id: str,
    offset: int = Query(0, ge=0),
    limit: int = Query(20, ge=1, le=100),
    service: CommentService = Depends(get_comment_service),
) -> CommentListResponse:
    return await service.list_article_comments(article_id, offset=offset, limit=limit)


@router.post(
    "/articles/{article_id}/comments",
    response_model=CommentRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_article_comment(
    article_id: str,
    payload: CreateComment,
    user_id: int = Depends(get_current_user_id),
    service: CommentService = Depends(get_comment_service),
) -> CommentRead:
    return await service.create_comment(
        content=payload.content, user_id=user_id, article_id=article_id
    )


@router.patch("/comments/{comment_id}", response_model=CommentRead)
async def update_comment(
    comment_id: str,
    payload: PatchComment,
    user_id: int = Depends(get_current_user_id),
    service: CommentService = Depends(get_comment_service),
) -> CommentRead:
    """Edit a comment's content; only its writer may do so."""

    if not comment_id.strip():
        raise BadRequestError(messages.COMMENT_NOT_FOUND)
    if payload.content is None or not payload.content.strip():
        raise BadRequestError(messages.COMMENT_CONTENT_REQUIRED)

    return await service.update_comment(comment_id, user_id, payload.content)


@router.delete("/comments/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_comment(
    comment_id: str,
    user_id: int = Depends(get_current_user_id),
    service: CommentService = Depends(get_comment_service),
) -> Response:
    if not comment_id.strip():
        raise BadRequestError(messages.COMMENT_NOT_FOUND)

    await service.delete_comment(comment_id, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
