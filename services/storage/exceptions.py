"""
Storage-specific exceptions for better error handling.

Provides specific exception types for the collection and diagram
gateway, so routers and the desktop command surface can map them to
VALIDATION (400), NOT_FOUND (404) and INTERNAL (500) outcomes.
"""

from typing import Optional


class StorageError(Exception):
    """Base exception for storage-related errors."""

    def __init__(self, message: str, error_code: Optional[str] = None, context: Optional[dict] = None):
        """
        Initialize storage error.

        Args:
            message: Human-readable error message
            error_code: Machine-readable error code
            context: Additional context (collection_id, diagram_id, etc.)
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}


class StorageValidationError(StorageError):
    """Raised when required fields are missing or malformed."""

    def __init__(self, message: str, fields: Optional[list] = None):
        super().__init__(
            message,
            error_code="VALIDATION",
            context={"fields": fields or []}
        )
        self.fields = fields or []


class CollectionNotFoundError(StorageError):
    """Raised when an operation needs a collection that does not exist."""

    def __init__(self, collection_id: int, message: Optional[str] = None):
        super().__init__(
            message or "Collection not found",
            error_code="NOT_FOUND",
            context={"collection_id": collection_id}
        )
        self.collection_id = collection_id


class DiagramNotFoundError(StorageError):
    """Raised when an operation needs a diagram that does not exist."""

    def __init__(self, diagram_id: int, message: Optional[str] = None):
        super().__init__(
            message or "Diagram not found",
            error_code="NOT_FOUND",
            context={"diagram_id": diagram_id}
        )
        self.diagram_id = diagram_id


class StorageInternalError(StorageError):
    """Raised when the underlying store fails."""

    def __init__(self, operation: str, cause: Optional[Exception] = None):
        super().__init__(
            f"Storage operation '{operation}' failed",
            error_code="INTERNAL",
            context={"operation": operation, "cause": str(cause) if cause else None}
        )
        self.operation = operation
        self.cause = cause
