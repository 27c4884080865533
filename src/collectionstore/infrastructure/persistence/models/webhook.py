"""SQLAlchemy model for the webhooks table."""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from collectionstore.infrastructure.persistence.database import Base


class WebhookModel(Base):
    """SQLAlchemy model for the webhooks table.

    Attributes:
        id: Primary key.
        collection_id: Collection the webhook listens to (not enforced).
        url: Target URL.
        events: JSON-encoded list of event names.
        created_at: ISO-8601 creation timestamp.
        updated_at: ISO-8601 last update timestamp.
    """

    __tablename__ = "webhooks"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    collection_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    url: Mapped[str] = mapped_column(Text, nullable=False)
    events: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        comment="JSON-encoded list of event names",
    )
    created_at: Mapped[str] = mapped_column(String(32), nullable=False)
    updated_at: Mapped[str] = mapped_column(String(32), nullable=False)

    def __repr__(self) -> str:
        return f"<Webhook(id={self.id}, url={self.url})>"
