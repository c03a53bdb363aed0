"""Repository layer translating domain operations into SQLAlchemy statements."""

from .article_repository import ArticleRepository
from .comment_repository import CommentRepository
from .favorite_repository import FavoriteRepository
from .product_repository import BEST_PRODUCTS_LIMIT, ProductRepository
from .user_repository import UserRepository

__all__ = [
    "BEST_PRODUCTS_LIMIT",
    "ArticleRepository",
    "CommentRepository",
    "FavoriteRepository",
    "ProductRepository",
    "UserRepository",
]
