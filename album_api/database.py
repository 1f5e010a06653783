"""
Relational store configuration and session management.
Uses async SQLAlchemy for non-blocking database operations.

로깅:
- SQL echo 비활성화
- 느린 쿼리 로깅 (1초 이상)
"""
import logging
import time
from typing import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool

from album_api.config import get_settings

_logger = logging.getLogger("app.db")

settings = get_settings()

# 느린 쿼리 임계값 (초)
SLOW_QUERY_THRESHOLD = 1.0


def build_engine(database_url: str) -> AsyncEngine:
    """
    Create an async engine for ``database_url``.

    SQLite gets no pool; other backends get a pre-pinged connection pool
    sized from settings.
    """
    if "sqlite" in database_url:
        engine = create_async_engine(
            database_url,
            echo=False,
            poolclass=NullPool,
        )
    else:
        engine = create_async_engine(
            database_url,
            echo=False,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_timeout=settings.db_pool_timeout,
            pool_recycle=settings.db_pool_recycle,
            pool_pre_ping=True,
        )
    _attach_slow_query_logging(engine)
    return engine


def _attach_slow_query_logging(engine: AsyncEngine) -> None:
    @event.listens_for(engine.sync_engine, "before_cursor_execute")
    def _before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        conn.info.setdefault("query_start_time", []).append(time.perf_counter())

    @event.listens_for(engine.sync_engine, "after_cursor_execute")
    def _after_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        start_times = conn.info.get("query_start_time")
        if start_times:
            elapsed = time.perf_counter() - start_times.pop()
            if elapsed >= SLOW_QUERY_THRESHOLD:
                short_stmt = statement[:100] + "..." if len(statement) > 100 else statement
                _logger.warning(
                    "Slow query",
                    extra={"event": "db", "ms": round(elapsed * 1000), "query": short_stmt},
                )


def build_session_maker(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


engine = build_engine(settings.database_url)
async_session_maker = build_session_maker(engine)


class Base(DeclarativeBase):
    """Base class for all database models."""
    pass


async def init_db(bind: AsyncEngine = None) -> None:
    """Create all tables on ``bind`` (the application engine by default)."""
    # 모델 모듈을 import 해야 metadata에 테이블이 등록됨
    import album_api.models  # noqa: F401

    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db() -> None:
    """Close database connections properly."""
    await engine.dispose()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency that provides a database session.
    Ensures proper cleanup of connections after each request.

    Usage:
        @router.get("/items")
        async def get_items(db: AsyncSession = Depends(get_db)):
            ...
    """
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except SQLAlchemyError as e:
            _logger.error(
                "DB session error",
                extra={
                    "event": "db",
                    "error_type": type(e).__name__,
                    "error": str(e)[:200],
                },
            )
            await session.rollback()
            raise
        except Exception:
            await session.rollback()
            raise
