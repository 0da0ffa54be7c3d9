# Pydantic schemas package
from notevault.backend.schemas.note import Note, NoteCollection

__all__ = [
    "Note",
    "NoteCollection",
]
