"""
Note Schemas.

Pydantic schema for note records as they are held in memory and persisted.
Field names are camelCase on the wire (createdAt, updatedAt) and
snake_case in Python.
"""

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel


class Note(BaseModel):
    """
    A unit of user content.

    When ``encrypted`` is true, ``content`` holds an encoded blob and must
    go through the note store's reveal operation to be read.

    Instances are fully immutable, tags included.
    """

    id: str = Field(min_length=1, description="Note unique identifier")
    title: str = Field(description="Note title, never encrypted")
    content: str = Field(description="Plaintext or encoded ciphertext blob")
    encrypted: bool = Field(strict=True, description="How content must be interpreted")
    created_at: int = Field(ge=0, strict=True, description="Creation time, epoch milliseconds")
    updated_at: int = Field(ge=0, strict=True, description="Last save time, epoch milliseconds")
    tags: tuple[str, ...] = Field(default=(), description="Display-ordered tags")

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        frozen=True,
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title={self.title!r}, encrypted={self.encrypted})>"


NoteCollection = TypeAdapter(list[Note])
"""Adapter for (de)serializing a whole note collection as one JSON array."""
