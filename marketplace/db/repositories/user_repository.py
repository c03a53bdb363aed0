"""Lookups for the users whose names are copied into ``writer`` columns."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.db.models import User


class UserRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_user_name(self, user_id: int) -> str | None:
        return await self._session.scalar(select(User.name).where(User.id == user_id))
