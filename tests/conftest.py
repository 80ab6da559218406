"""Pytest bootstrap configuration.

Environment variables are set before any module that reads application
settings is imported.
"""
import os

import pytest
import pytest_asyncio
import structlog

os.environ.setdefault("DATABASE__URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ADMIN_API_TOKEN", "test-admin-token")
os.environ.setdefault("STORE__LOCATION", "https://shop.example.com/")
os.environ.setdefault("STORE__PRIMARY_CURRENCY_CODE", "USD")


@pytest.fixture(autouse=True)
def _uncached_loggers():
    # capture_logs only sees loggers that are not cached on first use
    structlog.configure(cache_logger_on_first_use=False)
    yield


@pytest_asyncio.fixture
async def session_factory():
    """Fresh in-memory database shared by every session of one test."""
    from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
    from sqlalchemy.pool import StaticPool

    from infrastructure.models import Base

    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield async_sessionmaker(bind=engine, expire_on_commit=False)
    finally:
        await engine.dispose()


@pytest.fixture
def uow_factory(session_factory):
    from infrastructure.unit_of_work import SQLAlchemyUnitOfWork

    def _factory(**kwargs):
        return SQLAlchemyUnitOfWork(session_factory=session_factory, **kwargs)

    return _factory
