"""Infrastructure layer - database engine, models, repositories and migrations."""

from collectionstore.infrastructure.persistence.database import (
    Base,
    DatabaseManager,
    close_database,
    get_db_manager,
    init_database,
)

__all__ = [
    "Base",
    "DatabaseManager",
    "get_db_manager",
    "init_database",
    "close_database",
]
