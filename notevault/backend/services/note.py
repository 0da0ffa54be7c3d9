"""
Note Service.

Business logic layer for notes: the note store. Owns the in-memory
collection, decides per note whether content is sealed, and persists the
whole collection through NoteRepository after every mutation.
"""

import asyncio
from collections.abc import Iterable
from uuid import uuid4

from notevault.backend.core.concurrency import run_blocking
from notevault.backend.core.exceptions import DecryptionError, NotFoundError
from notevault.backend.core.utils import now_millis
from notevault.backend.crypto.envelope import decrypt_with_key, encrypt_with_key
from notevault.backend.crypto.key_derivation import derive_key
from notevault.backend.repositories.note import NoteRepository
from notevault.backend.schemas.note import Note
from notevault.backend.services.base import BaseService

DEFAULT_TITLE = "New Note"
UNTITLED = "Untitled"


class NoteService(BaseService):
    """
    Service for note business logic.

    One instance is one logical actor: every public operation holds the
    instance lock, so operations issued concurrently run one at a time.
    The passphrase-derived key is computed on first use and cached.

    The in-memory collection is only replaced after the repository
    confirms a write, so a PersistenceError leaves it unchanged.
    """

    def __init__(self, repo: NoteRepository, passphrase: str) -> None:
        super().__init__()
        self.repo = repo
        self._passphrase = passphrase
        self._key: bytes | None = None
        self._notes: list[Note] | None = None
        self._lock = asyncio.Lock()

    # -------------------------------------------------------------------------
    # Bulk load / persist
    # -------------------------------------------------------------------------

    async def load_all(self) -> list[Note]:
        """
        Reload the whole collection from the backing store.

        Raises:
            PersistenceError: If the store cannot be read or holds malformed data
        """
        async with self._lock:
            notes = await self._execute_db_operation("load_all", self.repo.load_all())
            self._notes = notes
            self._log_debug("Note collection loaded", count=len(notes))
            return list(notes)

    async def persist_all(self) -> None:
        """
        Write the whole collection to the backing store.

        Raises:
            PersistenceError: If the store cannot be written
        """
        async with self._lock:
            await self._persist("persist_all", await self._collection())

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    async def list_notes(self) -> list[Note]:
        """Return all notes, most recently created first."""
        async with self._lock:
            return list(await self._collection())

    async def get_note(self, note_id: str) -> Note:
        """
        Get a note by ID.

        Raises:
            NotFoundError: If note not found
        """
        async with self._lock:
            notes = await self._collection()
            return notes[self._index_of(notes, note_id)]

    async def search_notes(self, query: str, tag: str | None = None) -> list[Note]:
        """
        Search notes by title.

        Matching is a case-insensitive substring test against the title only;
        content may be ciphertext and is never searched.

        Args:
            query: Search query
            tag: Optional tag the note must carry (case-insensitive)

        Returns:
            Matching notes in collection order
        """
        self._log_debug("Searching notes", has_tag=tag is not None)
        needle = query.casefold()
        wanted_tag = tag.casefold() if tag is not None else None

        async with self._lock:
            notes = await self._collection()

        return [
            note
            for note in notes
            if needle in note.title.casefold()
            and (wanted_tag is None or wanted_tag in {t.casefold() for t in note.tags})
        ]

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    async def create_note(self, encrypted: bool = True) -> Note:
        """
        Create a new empty note and persist it.

        An encrypted note stores the sealed empty string, so its content is
        a well-formed blob from the start.

        Args:
            encrypted: Whether the note's content is sealed

        Returns:
            Created note, now first in the collection
        """
        async with self._lock:
            notes = await self._collection()
            content = await self._seal("") if encrypted else ""
            now = now_millis()
            note = Note(
                id=str(uuid4()),
                title=DEFAULT_TITLE,
                content=content,
                encrypted=encrypted,
                created_at=now,
                updated_at=now,
                tags=(),
            )
            await self._persist("create_note", [note, *notes])

        self._log_operation("Note created", note_id=note.id, encrypted=encrypted)
        return note

    async def save_note(
        self,
        note_id: str,
        title: str,
        plaintext: str,
        encrypted: bool,
        tags: Iterable[str] | None = None,
    ) -> Note:
        """
        Save an edited note.

        Args:
            note_id: Note ID to update
            title: New title; empty becomes "Untitled"
            plaintext: Edited body
            encrypted: Whether to seal the body for this revision
            tags: Replacement tags (duplicates dropped), or None to keep

        Returns:
            Updated note

        Raises:
            NotFoundError: If note not found
            PersistenceError: If the store cannot be written
        """
        async with self._lock:
            notes = await self._collection()
            index = self._index_of(notes, note_id)
            existing = notes[index]

            content = await self._seal(plaintext) if encrypted else plaintext
            updated = existing.model_copy(
                update={
                    "title": title or UNTITLED,
                    "content": content,
                    "encrypted": encrypted,
                    "updated_at": max(now_millis(), existing.created_at),
                    "tags": (
                        tuple(dict.fromkeys(tags)) if tags is not None else existing.tags
                    ),
                },
            )

            new_notes = list(notes)
            new_notes[index] = updated
            await self._persist("save_note", new_notes)

        self._log_operation("Note saved", note_id=note_id, encrypted=encrypted)
        return updated

    async def reveal_note(self, note_id: str) -> str:
        """
        Return a note's plaintext.

        Raises:
            NotFoundError: If note not found
            BlobFormatError: If stored content is not a valid blob
            AuthenticationFailedError: If the blob does not verify under the key
        """
        async with self._lock:
            notes = await self._collection()
            note = notes[self._index_of(notes, note_id)]
            if not note.encrypted:
                return note.content

            key = await self._get_key()
            try:
                return await run_blocking(decrypt_with_key, note.content, key)
            except DecryptionError as e:
                self._logger.warning(
                    "Note could not be decrypted",
                    extra={"note_id": note_id, "code": e.code},
                )
                raise

    async def remove_note(self, note_id: str) -> bool:
        """
        Delete a note.

        Returns:
            True if a note was removed, False if no note had that ID

        Raises:
            PersistenceError: If the store cannot be written
        """
        async with self._lock:
            notes = await self._collection()
            remaining = [note for note in notes if note.id != note_id]
            if len(remaining) == len(notes):
                return False
            await self._persist("remove_note", remaining)

        self._log_operation("Note removed", note_id=note_id)
        return True

    # -------------------------------------------------------------------------
    # Internals (callers hold the lock)
    # -------------------------------------------------------------------------

    async def _collection(self) -> list[Note]:
        if self._notes is None:
            self._notes = await self._execute_db_operation(
                "load_all", self.repo.load_all()
            )
        return self._notes

    async def _persist(self, operation: str, notes: list[Note]) -> None:
        await self._execute_db_operation(operation, self.repo.persist_all(notes))
        self._notes = notes

    async def _get_key(self) -> bytes:
        if self._key is None:
            self._key = await run_blocking(derive_key, self._passphrase)
        return self._key

    async def _seal(self, plaintext: str) -> str:
        key = await self._get_key()
        return await run_blocking(encrypt_with_key, plaintext, key)

    @staticmethod
    def _index_of(notes: list[Note], note_id: str) -> int:
        for index, note in enumerate(notes):
            if note.id == note_id:
                return index
        raise NotFoundError(f"Note {note_id} not found")
