"""Shared "fetch, then assert ownership" gate for mutating operations."""

from __future__ import annotations

from typing import Protocol, TypeVar

from marketplace.errors import ForbiddenError, NotFoundError


class OwnedEntity(Protocol):
    user_id: int


EntityT = TypeVar("EntityT", bound=OwnedEntity)


def require_owner(
    entity: EntityT | None,
    user_id: int,
    *,
    not_found: str,
    forbidden: str,
) -> EntityT:
    """Return ``entity`` when ``user_id`` owns it.

    Raises :class:`NotFoundError` with ``not_found`` when the lookup came back
    empty and :class:`ForbiddenError` with ``forbidden`` when another user owns
    the row.  Callers pass entity-specific messages; the comparison itself is
    identical for products and comments.
    """

    if entity is None:
        raise NotFoundError(not_found)
    if entity.user_id != user_id:
        raise ForbiddenError(forbidden)
    return entity


__all__ = ["OwnedEntity", "require_owner"]
