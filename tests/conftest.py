"""
Root Pytest Fixtures.

Shared fixtures available to all test types.

Test Database Configuration:
    Tests use an in-memory SQLite database (aiosqlite) with a StaticPool so
    every session in a test shares one connection. Each test gets a fresh
    database.
"""

from collections.abc import AsyncGenerator, Generator

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

import notevault.backend.core.concurrency as concurrency_module
from notevault.backend.core.concurrency import TracedThreadPoolExecutor
from notevault.backend.models.base import Base
from notevault.backend.models.storage_entry import StorageEntry  # noqa: F401
from notevault.backend.repositories.note import NoteRepository
from notevault.backend.services.note import NoteService

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
TEST_PASSPHRASE = "correct horse battery staple"


# =============================================================================
# Thread Pool Fixture
# =============================================================================


@pytest.fixture(autouse=True)
def _io_pool() -> Generator[None, None, None]:
    """Install a small thread pool so tests never read concurrency.yaml."""
    pool = TracedThreadPoolExecutor(max_workers=2)
    concurrency_module._io_pool = pool
    yield
    concurrency_module._io_pool = None
    pool.shutdown(wait=True)


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh in-memory database with all tables."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def db_session_factory(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create a session factory bound to the test engine."""
    return async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


# =============================================================================
# Note Store Fixtures
# =============================================================================


@pytest.fixture
def test_passphrase() -> str:
    """Passphrase the note_service fixture encrypts with."""
    return TEST_PASSPHRASE


@pytest.fixture
def note_repository(
    db_session_factory: async_sessionmaker[AsyncSession],
) -> NoteRepository:
    """Repository over the test database."""
    return NoteRepository(db_session_factory)


@pytest.fixture
def note_service(note_repository: NoteRepository) -> NoteService:
    """Note store over the test database, using TEST_PASSPHRASE."""
    return NoteService(note_repository, TEST_PASSPHRASE)
