"""
Note Repository.

Data access layer for the note collection. The collection is read and
written as a whole: one JSON array stored under one storage key, replaced
in a single transaction on every write.
"""

from collections.abc import Sequence

from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from notevault.backend.core.exceptions import PersistenceError
from notevault.backend.core.logging import get_logger
from notevault.backend.models.storage_entry import StorageEntry
from notevault.backend.schemas.note import Note, NoteCollection

logger = get_logger(__name__)

DEFAULT_STORAGE_KEY = "dashboard_notes"


def serialize_notes(notes: Sequence[Note]) -> str:
    """Serialize a collection to its stored JSON form (deterministic)."""
    return NoteCollection.dump_json(list(notes), by_alias=True).decode("utf-8")


def deserialize_notes(payload: str) -> list[Note]:
    """
    Parse a stored JSON collection.

    Raises:
        PersistenceError: If the payload is not a list of well-formed notes,
            including records with unknown or missing fields and records whose
            flag or timestamps are not a JSON boolean and integers
    """
    try:
        notes = NoteCollection.validate_json(payload)
    except ValidationError as e:
        logger.error(
            "Stored note collection is malformed",
            extra={"error_count": e.error_count()},
        )
        raise PersistenceError("Stored note collection is malformed") from e

    seen: set[str] = set()
    for note in notes:
        if note.id in seen:
            raise PersistenceError(f"Stored note collection has duplicate id {note.id}")
        seen.add(note.id)
    return notes


class NoteRepository:
    """
    Repository for the note collection.

    SQLAlchemy errors propagate unchanged; the service layer converts them
    to PersistenceError.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        storage_key: str = DEFAULT_STORAGE_KEY,
    ) -> None:
        self._session_factory = session_factory
        self.storage_key = storage_key

    async def read_raw(self) -> str | None:
        """Return the stored JSON payload, or None if nothing was stored yet."""
        async with self._session_factory() as session:
            entry = await session.get(StorageEntry, self.storage_key)
            return entry.value if entry is not None else None

    async def load_all(self) -> list[Note]:
        """
        Load the whole collection.

        Returns:
            Notes in stored order; empty when nothing was stored yet
        """
        payload = await self.read_raw()
        if payload is None:
            return []
        return deserialize_notes(payload)

    async def persist_all(self, notes: Sequence[Note]) -> None:
        """Replace the stored collection with ``notes`` in one transaction."""
        payload = serialize_notes(notes)
        async with self._session_factory() as session:
            async with session.begin():
                entry = await session.get(StorageEntry, self.storage_key)
                if entry is None:
                    session.add(StorageEntry(key=self.storage_key, value=payload))
                elif entry.value != payload:
                    entry.value = payload
        logger.debug(
            "Note collection persisted",
            extra={"storage_key": self.storage_key, "count": len(notes)},
        )
