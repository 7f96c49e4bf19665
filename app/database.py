"""Database Connection and Session Management"""

import asyncio
import re
import ssl
from collections import defaultdict
from typing import Any, AsyncGenerator, Dict, Tuple

from fastapi import Request
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

from app.config import settings

# Base class for declarative models
Base = declarative_base()


def normalize_database_url(url: str) -> Tuple[str, Dict[str, Any]]:
    """
    Rewrite a database URL for the async drivers and derive connect_args.

    postgresql:// becomes postgresql+asyncpg://. asyncpg takes ssl=SSLContext
    rather than sslmode, so sslmode is stripped from the URL and replaced by a
    context that encrypts but does not verify the server certificate.
    """
    database_url = url.replace("postgresql://", "postgresql+asyncpg://")
    connect_args: Dict[str, Any] = {}
    if not re.search(r"[?&]sslmode=", database_url, re.I):
        return database_url, connect_args

    parsed = make_url(database_url)
    query = {k: v for k, v in parsed.query.items() if k.lower() != "sslmode"}
    sslmode = next(v for k, v in parsed.query.items() if k.lower() == "sslmode")
    if str(sslmode).lower() in ("require", "required", "verify-full"):
        ssl_ctx = ssl.create_default_context()
        ssl_ctx.check_hostname = False
        ssl_ctx.verify_mode = ssl.CERT_NONE
        connect_args["ssl"] = ssl_ctx
    database_url = parsed.set(query=query).render_as_string(hide_password=False)
    return database_url, connect_args


class Database:
    """
    Process-wide storage handle.

    Owns the async engine (and its connection pool), the session factory and
    one asyncio.Lock per table. Created once in the application lifespan and
    disposed on shutdown.
    """

    def __init__(self, url: str, echo: bool = False):
        database_url, connect_args = normalize_database_url(url)

        engine_kwargs: Dict[str, Any] = {"echo": echo, "future": True}
        if database_url.startswith("sqlite"):
            if ":memory:" in database_url:
                # One shared connection, otherwise every checkout sees an empty database
                engine_kwargs["poolclass"] = StaticPool
        else:
            engine_kwargs.update(
                pool_pre_ping=True,
                pool_size=settings.DB_POOL_SIZE,
                max_overflow=settings.DB_MAX_OVERFLOW,
                pool_timeout=settings.DB_POOL_TIMEOUT,
                pool_recycle=settings.DB_POOL_RECYCLE,
            )

        self.url = database_url
        self.engine = create_async_engine(
            database_url,
            connect_args=connect_args,
            **engine_kwargs,
        )
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autocommit=False,
            autoflush=False,
        )
        self._table_locks: Dict[str, asyncio.Lock] = defaultdict(asyncio.Lock)

    def lock_for(self, table_name: str) -> asyncio.Lock:
        """Writer lock guarding identifier assignment and renumbering of a table"""
        return self._table_locks[table_name]

    async def create_all(self) -> None:
        """Create tables that do not exist yet (development and tests)"""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        """Close all pooled connections"""
        await self.engine.dispose()


def get_database(request: Request) -> Database:
    """Storage handle installed on app.state by the lifespan"""
    return request.app.state.database


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency function to get database session.

    Yields:
        AsyncSession: Database session

    Example:
        ```python
        @router.get("/student")
        async def list_students(db: AsyncSession = Depends(get_db)):
            # Use db session here
            pass
        ```
    """
    database = get_database(request)
    async with database.session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
