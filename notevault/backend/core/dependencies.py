"""
Service Dependencies.

Builders that wire configuration, storage and services together for the
presentation layer.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.exc import SQLAlchemyError

from notevault.backend.core.concurrency import shutdown_pools
from notevault.backend.core.config import get_app_config
from notevault.backend.core.database import dispose_engine, get_session_factory, init_storage
from notevault.backend.core.exceptions import PersistenceError
from notevault.backend.core.logging import get_logger
from notevault.backend.repositories.note import NoteRepository
from notevault.backend.services.note import NoteService

logger = get_logger(__name__)


@asynccontextmanager
async def note_service_scope(passphrase: str) -> AsyncIterator[NoteService]:
    """
    Provide a NoteService bound to the configured backing store.

    Creates the storage tables on first use and releases the engine and
    thread pool on exit.

    Usage:
        async with note_service_scope(passphrase) as service:
            note = await service.create_note(encrypted=True)
    """
    try:
        try:
            await init_storage()
        except (SQLAlchemyError, OSError) as e:
            logger.error("Storage initialization failed", extra={"error": str(e)})
            raise PersistenceError("Backing store is unavailable") from e
        repo = NoteRepository(
            get_session_factory(),
            storage_key=get_app_config().storage.storage_key,
        )
        yield NoteService(repo, passphrase)
    finally:
        await dispose_engine()
        await shutdown_pools()
