"""Startup warmup so the first request does not pay for cold connections."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine

logger = logging.getLogger(__name__)


async def warmup_database(
    resolve_db_type: Callable[[], str] | None = None,
    resolve_engine: Callable[[], AsyncEngine] | None = None,
) -> None:
    """Open a connection and run ``SELECT 1``.

    Failures are logged and swallowed: a database that is down at boot should
    surface through request errors, not keep the process from starting.
    """
    try:
        if resolve_db_type is None:
            from marketplace.db.connection import get_database_type as resolve_db_type

        if resolve_engine is None:
            from marketplace.db.connection import get_engine as resolve_engine

        start = time.time()
        db_type = resolve_db_type()
        logger.debug("Database warmup target detected as %s", db_type)

        engine = resolve_engine()
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

        elapsed = (time.time() - start) * 1000
        logger.info("Database connection warmed up (%s, %.0fms)", db_type, elapsed)
    except Exception as exc:
        logger.warning("Database warmup failed: %s", exc)


async def warmup_repository_queries() -> None:
    """Run one product listing to prime mapper configuration and loaders."""

    from marketplace.db.connection import get_session_factory
    from marketplace.db.repositories import ProductRepository

    try:
        start = time.time()
        async with get_session_factory()() as session:
            await ProductRepository(session).list_products(
                offset=0, limit=1, order_by="recent"
            )
        elapsed = (time.time() - start) * 1000
        logger.info("Repository warmup executed (%.0fms)", elapsed)
    except Exception as exc:
        logger.warning("Repository warmup failed: %s", exc)


async def warmup_all(
    resolve_db_type: Callable[[], str] | None = None,
    resolve_engine: Callable[[], AsyncEngine] | None = None,
) -> None:
    logger.info("Warming up backend connections...")
    start = time.time()

    await warmup_database(
        resolve_db_type=resolve_db_type,
        resolve_engine=resolve_engine,
    )
    await warmup_repository_queries()

    total_elapsed = (time.time() - start) * 1000
    logger.info("Backend warmup complete (%.0fms)", total_elapsed)
