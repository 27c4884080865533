"""SQLAlchemy model for the items table."""

from typing import Any

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from collectionstore.infrastructure.persistence.database import Base


class ItemModel(Base):
    """SQLAlchemy model for the items table.

    ``collection_id`` is indexed but deliberately not a foreign key: deleting
    a collection leaves its items in place.
    """

    __tablename__ = "items"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    collection_id: Mapped[str] = mapped_column(
        String(36),
        nullable=False,
        index=True,
        comment="Owning collection ID (not enforced)",
    )
    data: Mapped[Any] = mapped_column(
        JSON,
        nullable=True,
        comment="Opaque item payload",
    )
    created_at: Mapped[str] = mapped_column(String(32), nullable=False)
    updated_at: Mapped[str] = mapped_column(String(32), nullable=False)

    def __repr__(self) -> str:
        return f"<Item(id={self.id}, collection_id={self.collection_id})>"
