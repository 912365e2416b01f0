"""Database Session Manager - async connection pool with rollback and health checks.

Invariants:
    - Every session auto-rolls-back on exception (no partial commits leak)
    - All SQLAlchemy exceptions mapped to DatabaseError (core/errors.py)
    - TLS settings are read once, when the pool is constructed
    - The manager is constructed in the app lifespan, stored on app.state and
      disposed at shutdown; there is no module-level instance

Design Decisions:
    - expire_on_commit=False: rows returned by RETURNING stay readable after commit
    - Pool sizing only applies to server databases; SQLite keeps its default pool
"""

import logging
import ssl
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker,
)

from freezefit.config import Settings
from freezefit.core.errors import DatabaseError

logger = logging.getLogger(__name__)


def build_ssl_context(verify: bool) -> ssl.SSLContext:
    """TLS context for asyncpg. verify=False accepts any server certificate."""
    context = ssl.create_default_context()
    if not verify:
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
    return context


def build_connect_args(
    database_url: str,
    use_ssl: bool = True,
    ssl_verify: bool = False,
    connect_timeout: float | None = None,
) -> dict:
    """Driver-level connect arguments for the given URL."""
    backend = make_url(database_url).get_backend_name()
    if backend != "postgresql":
        return {}
    args: dict = {"ssl": build_ssl_context(ssl_verify) if use_ssl else False}
    if connect_timeout is not None:
        args["timeout"] = connect_timeout
    return args


class DatabaseSessionManager:
    """Owns the engine and hands out sessions with rollback on failure."""

    def __init__(
        self,
        database_url: str,
        pool_size: int = 5,
        max_overflow: int = 5,
        use_ssl: bool = True,
        ssl_verify: bool = False,
        connect_timeout: float | None = 2.0,
        pool_recycle: int = 30,
    ):
        engine_kwargs: dict = {
            "connect_args": build_connect_args(
                database_url, use_ssl, ssl_verify, connect_timeout,
            ),
        }
        if make_url(database_url).get_backend_name() != "sqlite":
            engine_kwargs.update(
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_pre_ping=True,
                pool_recycle=pool_recycle,
            )
        self._bind(create_async_engine(database_url, **engine_kwargs))

    @classmethod
    def from_settings(cls, settings: Settings) -> "DatabaseSessionManager":
        return cls(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
            use_ssl=settings.database_ssl,
            ssl_verify=settings.database_ssl_verify,
            connect_timeout=settings.database_connect_timeout_seconds,
            pool_recycle=settings.database_pool_recycle_seconds,
        )

    @classmethod
    def from_engine(cls, engine: AsyncEngine) -> "DatabaseSessionManager":
        """Wrap an existing engine (used by test fixtures)."""
        manager = cls.__new__(cls)
        manager._bind(engine)
        return manager

    def _bind(self, engine: AsyncEngine) -> None:
        self.engine = engine
        self._session_factory = async_sessionmaker(
            engine, class_=AsyncSession, expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            yield session
        except IntegrityError as e:
            await session.rollback()
            logger.error(f"DB integrity error: {e}", exc_info=True)
            raise DatabaseError(str(e), "commit")
        except OperationalError as e:
            await session.rollback()
            logger.error(f"DB operational error: {e}", exc_info=True)
            raise DatabaseError(str(e), "execute")
        except DBAPIError as e:
            await session.rollback()
            logger.error(f"DB driver error: {e}", exc_info=True)
            raise DatabaseError(str(e), "query")
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"SQLAlchemy error: {e}", exc_info=True)
            raise DatabaseError(str(e), "unknown")
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness checks)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


def get_db_manager(request: Request) -> DatabaseSessionManager:
    """FastAPI dependency: the manager the lifespan attached to app.state."""
    manager = getattr(request.app.state, "db", None)
    if manager is None:
        raise RuntimeError("Database not initialized")
    return manager


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    async with get_db_manager(request).session() as session:
        yield session
