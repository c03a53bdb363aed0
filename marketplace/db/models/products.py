"""SQLAlchemy ORM models for products, their images, and favorites.

``Product.favorite_count`` is a denormalized copy of the number of
``favorites`` rows referencing the product.  Only
:class:`marketplace.services.favorite_service.FavoriteService` writes either
side, and always inside a single :class:`~marketplace.db.unit_of_work.UnitOfWork`.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    JSON,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from . import Base, User, new_uuid, utcnow


class Product(Base):
    """A listing created and owned by a single user."""

    __tablename__ = "products"
    __table_args__ = (
        Index("ix_products_favorite_count", "favorite_count"),
        Index("ix_products_created_at", "created_at"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_uuid)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    price: Mapped[int] = mapped_column(Integer, nullable=False)
    favorite_count: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default="0",
        doc="Cached count of favorites rows; never written outside a unit of work.",
    )
    writer: Mapped[str] = mapped_column(String(50), nullable=False)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    tags: Mapped[list[str]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
        doc="Free-form labels supplied by the seller.",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    user: Mapped[User] = relationship("User", back_populates="products")
    images: Mapped[list["ProductImage"]] = relationship(
        "ProductImage",
        back_populates="product",
        cascade="all, delete-orphan",
        order_by="ProductImage.id",
    )
    favorites: Mapped[list["Favorite"]] = relationship(
        "Favorite",
        back_populates="product",
        cascade="all, delete-orphan",
    )
    comments: Mapped[list["Comment"]] = relationship(  # noqa: F821
        "Comment",
        back_populates="product",
        cascade="all, delete-orphan",
    )


class ProductImage(Base):
    __tablename__ = "product_images"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    image_path: Mapped[str] = mapped_column(String(1024), nullable=False)
    product_id: Mapped[str] = mapped_column(
        ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True
    )

    product: Mapped[Product] = relationship("Product", back_populates="images")


class Favorite(Base):
    """Join row meaning "user likes product"; at most one per pair."""

    __tablename__ = "favorites"
    __table_args__ = (
        UniqueConstraint(
            "user_id",
            "product_id",
            name="uq_favorites_user_product",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    product_id: Mapped[str] = mapped_column(
        ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    product: Mapped[Product] = relationship("Product", back_populates="favorites")
