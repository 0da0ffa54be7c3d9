"""
Integration Test Fixtures.

Fixtures for integration tests - uses real databases and services.
These fixtures build on the root conftest.py database fixtures.
"""

from collections.abc import AsyncGenerator, Awaitable, Callable
from pathlib import Path

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from notevault.backend.models.base import Base
from notevault.backend.repositories.note import NoteRepository
from notevault.backend.services.note import NoteService


# =============================================================================
# File-backed Store Fixtures
# =============================================================================


@pytest.fixture
def db_file(tmp_path: Path) -> Path:
    """Path of a SQLite file that outlives individual engines."""
    return tmp_path / "notes.db"


@pytest.fixture
async def open_store(
    db_file: Path,
    test_passphrase: str,
) -> AsyncGenerator[Callable[..., Awaitable[NoteService]], None]:
    """
    Factory for NoteService instances over the same database file.

    Each call opens a fresh engine, so a second service sees only what the
    first one actually wrote to disk.

    Usage:
        async def test_reload(open_store):
            first = await open_store()
            note = await first.create_note()
            second = await open_store()
            assert (await second.get_note(note.id)).id == note.id
    """
    engines: list[AsyncEngine] = []

    async def _open(passphrase: str | None = None) -> NoteService:
        engine = create_async_engine(f"sqlite+aiosqlite:///{db_file}")
        engines.append(engine)
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
        return NoteService(NoteRepository(factory), passphrase or test_passphrase)

    yield _open

    for engine in engines:
        await engine.dispose()
