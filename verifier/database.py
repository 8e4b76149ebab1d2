from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import declarative_base

from verifier.config import ConnectionConfig

# =========================================================
# DATABASE SETUP
# =========================================================

def build_engine(config: ConnectionConfig) -> AsyncEngine:
    """
    Connection pool for one verification run.
    AUTOCOMMIT keeps a failed statement from aborting the ones after it.
    """
    return create_async_engine(
        config.url,
        pool_size=1,         # one connection is checked out per run
        max_overflow=0,
        isolation_level="AUTOCOMMIT",
    )


@asynccontextmanager
async def open_pool(config: ConnectionConfig) -> AsyncIterator[AsyncEngine]:
    """Yield the pool and dispose of it exactly once, however the block exits."""
    engine = build_engine(config)
    try:
        yield engine
    finally:
        await engine.dispose()


Base = declarative_base()
