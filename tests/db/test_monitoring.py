"""Slow-query logging hooks."""

from __future__ import annotations

import logging

import pytest
from sqlalchemy import text
from sqlalchemy.ext.asyncio import create_async_engine

from marketplace.monitoring import _truncate_statement, setup_query_monitoring


@pytest.mark.asyncio
async def test_queries_over_threshold_are_logged(caplog: pytest.LogCaptureFixture) -> None:
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", future=True)
    setup_query_monitoring(engine, slow_query_threshold=0.0)

    with caplog.at_level(logging.WARNING, logger="marketplace.monitoring"):
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 42"))
    await engine.dispose()

    assert "Slow query detected" in caplog.text
    assert "SELECT 42" in caplog.text


def test_long_statements_are_truncated() -> None:
    statement = "SELECT " + "x, " * 400

    truncated = _truncate_statement(statement)

    assert len(truncated) == 503
    assert truncated.endswith("...")
