"""Product repository backed by the async SQLAlchemy session."""

from __future__ import annotations

from sqlalchemy import func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.sql import Select

from marketplace.db.models import Product, ProductImage

BEST_PRODUCTS_LIMIT = 4


class ProductRepository:
    """Queries and writes for :class:`Product` rows and their images."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    def _with_images(self) -> Select:
        return select(Product).options(selectinload(Product.images))

    @staticmethod
    def _keyword_filters(keyword: str | None) -> list:
        if not keyword:
            return []
        return [
            or_(
                Product.name.icontains(keyword, autoescape=True),
                Product.description.icontains(keyword, autoescape=True),
            )
        ]

    async def list_products(
        self,
        *,
        offset: int,
        limit: int,
        order_by: str,
        keyword: str | None = None,
    ) -> tuple[list[Product], int]:
        """Return one page of products plus the total matching ``keyword``.

        ``order_by == "favorite"`` sorts by the cached favorite counter,
        anything else by creation time, newest first.
        """
        filters = self._keyword_filters(keyword)

        if order_by == "favorite":
            ordering = (Product.favorite_count.desc(), Product.created_at.desc())
        else:
            ordering = (Product.created_at.desc(),)

        query = (
            self._with_images()
            .where(*filters)
            .order_by(*ordering, Product.id)
            .offset(offset)
            .limit(limit)
        )
        count_query = select(func.count()).select_from(Product).where(*filters)

        total = await self._session.scalar(count_query)
        result = await self._session.execute(query)
        return list(result.scalars().all()), int(total or 0)

    async def list_best_products(self, limit: int = BEST_PRODUCTS_LIMIT) -> list[Product]:
        query = (
            self._with_images()
            .order_by(Product.favorite_count.desc(), Product.created_at.desc())
            .limit(limit)
        )
        result = await self._session.execute(query)
        return list(result.scalars().all())

    async def get_product(self, product_id: str) -> Product | None:
        """Load a product with images, overwriting any stale identity-map state.

        Counter updates are issued as bulk ``UPDATE`` statements, so a product
        already sitting in the session may hold an outdated ``favorite_count``.
        """
        query = (
            self._with_images()
            .where(Product.id == product_id)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(query)
        return result.scalars().unique().one_or_none()

    async def require_product(self, product_id: str) -> Product:
        """Like :meth:`get_product` but raises ``NoResultFound`` when missing."""
        query = (
            self._with_images()
            .where(Product.id == product_id)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(query)
        return result.scalars().unique().one()

    async def create_product(
        self,
        *,
        user_id: int,
        writer: str,
        name: str,
        description: str,
        price: int,
        tags: list[str],
        image_url: str | None = None,
    ) -> Product:
        product = Product(
            user_id=user_id,
            writer=writer,
            name=name,
            description=description,
            price=price,
            tags=list(tags),
            favorite_count=0,
            images=[ProductImage(image_path=image_url)] if image_url else [],
        )
        self._session.add(product)
        await self._session.flush()
        return product

    async def set_primary_image(self, product: Product, image_path: str) -> None:
        """Replace the first image's path, or attach one when none exist."""
        if product.images:
            product.images[0].image_path = image_path
        else:
            product.images.append(ProductImage(image_path=image_path))
        await self._session.flush()

    async def save(self, product: Product) -> Product:
        await self._session.flush()
        return product

    async def delete_product(self, product: Product) -> None:
        """Remove a product; images, favorites, and comments cascade."""
        await self._session.delete(product)
        await self._session.flush()

    async def adjust_favorite_count(self, product_id: str, *, delta: int) -> int:
        """Shift ``favorite_count`` by ``delta`` in a single statement.

        The arithmetic happens in SQL so concurrent adjustments never overwrite
        each other.  Returns the number of rows touched (0 when the product no
        longer exists).
        """
        statement = (
            update(Product)
            .where(Product.id == product_id)
            .values(favorite_count=Product.favorite_count + delta)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(statement)
        return result.rowcount


__all__ = ["BEST_PRODUCTS_LIMIT", "ProductRepository"]
