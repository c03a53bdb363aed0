"""Caller identity for authenticated endpoints.

Authentication happens upstream: the gateway verifies the session and
forwards the numeric user id in ``X-User-Id``.  Handlers only need that id
to copy writer names and to run ownership checks.
"""

from __future__ import annotations

from fastapi import Header

from marketplace import messages
from marketplace.errors import UnauthorizedError

USER_ID_HEADER = "X-User-Id"


async def get_current_user_id(
    x_user_id: str | None = Header(default=None, alias=USER_ID_HEADER),
) -> int:
    if x_user_id is None or not x_user_id.strip().isdigit():
        raise UnauthorizedError(messages.AUTHENTICATION_REQUIRED)
    return int(x_user_id.strip())
