"""Pytest configuration for all tests."""

from typing import AsyncGenerator, Awaitable, Callable

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from filegate.core.config import get_settings
from filegate.core.context import clear_current_context
from filegate.domain.entities.storage_permission import FileOperatorType
from filegate.infrastructure.persistence import models  # noqa: F401
from filegate.infrastructure.persistence.database import Base, create_engine_for
from filegate.infrastructure.persistence.models import StorageSourceModel


class StubPermissionChecker:
    """Permission checker answering every question with a fixed value."""

    def __init__(self, allowed: bool = False) -> None:
        self.allowed = allowed
        self.calls: list[tuple[int | None, FileOperatorType]] = []

    async def has_current_user_permission(
        self, storage_id: int | None, operator: FileOperatorType
    ) -> bool:
        self.calls.append((storage_id, operator))
        return self.allowed


@pytest.fixture(autouse=True)
def _reset_global_state():
    """Drop cached settings and request context between tests."""
    get_settings.cache_clear()
    clear_current_context()
    yield
    get_settings.cache_clear()
    clear_current_context()


@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create an in-memory SQLite engine with all tables.

    StaticPool keeps every session on the same connection, so the data
    survives between sessions of one test.
    """
    engine = create_engine_for("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session, rolled back after the test."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def create_storage_source(
    session_factory: async_sessionmaker[AsyncSession],
) -> Callable[..., Awaitable[int]]:
    """Factory inserting a storage source row and returning its ID."""

    async def _create(key: str = "docs", name: str = "Docs", type: str = "local") -> int:
        async with session_factory() as session:
            async with session.begin():
                model = StorageSourceModel(name=name, key=key, type=type, enable=True, order_num=0)
                session.add(model)
                await session.flush()
                return model.id

    return _create


@pytest_asyncio.fixture
async def storage_id(create_storage_source: Callable[..., Awaitable[int]]) -> int:
    return await create_storage_source()


@pytest.fixture
def permission_checker() -> StubPermissionChecker:
    return StubPermissionChecker()
