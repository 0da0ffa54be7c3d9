"""
Storage Entry Model.

Key/value table holding whole serialized collections. The note store
writes its entire collection as one value under one well-known key.
"""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from notevault.backend.models.base import Base, TimestampMixin


class StorageEntry(TimestampMixin, Base):
    """
    One serialized value under a storage key.

    The value is overwritten wholesale on every write; there is no
    partial or incremental update of its contents.
    """

    __tablename__ = "storage_entries"

    key: Mapped[str] = mapped_column(
        String(255),
        primary_key=True,
    )
    value: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<StorageEntry(key={self.key!r}, size={len(self.value)})>"
