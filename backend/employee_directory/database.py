"""Database handle shared by every request for the lifetime of the process."""
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from .models import Base


class Database:
    """Owns the async engine and hands out one session per operation."""

    def __init__(self, url: str, echo: bool = False) -> None:
        self.url = url
        connect_args = {"check_same_thread": False} if url.startswith("sqlite+") else {}
        engine_kwargs = {}
        if url.startswith("sqlite+") and ":memory:" in url:
            # every session must see the same in-memory database
            engine_kwargs["poolclass"] = StaticPool
        self.engine = create_async_engine(
            url, future=True, echo=echo, connect_args=connect_args, **engine_kwargs
        )
        self._sessionmaker = async_sessionmaker(self.engine, expire_on_commit=False)

    async def create_all(self) -> None:
        """Create any missing tables."""

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide an AsyncSession that is closed when the block exits."""

        async with self._sessionmaker() as session:
            yield session

    async def dispose(self) -> None:
        await self.engine.dispose()
