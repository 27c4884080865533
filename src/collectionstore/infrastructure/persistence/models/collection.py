"""SQLAlchemy model for the collections table."""

from typing import Any

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from collectionstore.infrastructure.persistence.database import Base


class CollectionModel(Base):
    """SQLAlchemy model for the collections table.

    Attributes:
        id: Primary key (time-prefixed ID string).
        name: Collection name.
        schema: JSON schema description supplied by the caller.
        created_at: ISO-8601 timestamp when the collection was created.
        updated_at: ISO-8601 timestamp when the collection was last updated.
    """

    __tablename__ = "collections"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        comment="Collection ID",
    )
    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Collection name",
    )
    schema: Mapped[dict[str, Any]] = mapped_column(
        JSON,
        nullable=False,
        default=dict,
        comment="Caller-supplied schema description",
    )
    created_at: Mapped[str] = mapped_column(String(32), nullable=False)
    updated_at: Mapped[str] = mapped_column(String(32), nullable=False)

    def __repr__(self) -> str:
        return f"<Collection(id={self.id}, name={self.name})>"
