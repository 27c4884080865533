"""Exceptions raised by the collection store."""


class CollectionStoreError(Exception):
    """Base class for collection store errors."""


class StorageUnavailableError(CollectionStoreError):
    """Raised when the database cannot be reached or an operation times out.

    Attributes:
        operation: Name of the store operation that failed.
        reason: Short description of the failure.
    """

    def __init__(self, operation: str, reason: str) -> None:
        self.operation = operation
        self.reason = reason
        super().__init__(f"Storage unavailable during {operation}: {reason}")


class SchemaNotInitializedError(CollectionStoreError):
    """Raised when the store tables are missing, e.g. before migrations ran.

    Attributes:
        operation: Name of the store operation that failed.
        reason: Database error text.
    """

    def __init__(self, operation: str, reason: str) -> None:
        self.operation = operation
        self.reason = reason
        super().__init__(f"Storage schema missing during {operation}: {reason}")
