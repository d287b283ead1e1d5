"""
Exception hierarchy for the study retrieval application.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class StudyRagException(Exception):
    """Base exception for all studyrag application errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging

        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(StudyRagException):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class DocumentNotFoundError(StudyRagException):
    """Raised when a document cannot be found."""

    def __init__(self, document_id: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize document not found error.

        Args:
            document_id: ID of the missing document
            details: Additional context
        """
        details = details or {}
        details["document_id"] = str(document_id)
        super().__init__(f"Document not found: {document_id}", details)


class DocumentProcessingError(StudyRagException):
    """Base exception for document processing errors."""

    def __init__(
        self,
        message: str,
        document_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize document processing error.

        Args:
            message: Error message
            document_id: ID of the document that failed
            details: Additional context
        """
        details = details or {}
        if document_id:
            details["document_id"] = str(document_id)
        super().__init__(message, details)


class ExtractionError(DocumentProcessingError):
    """Raised when text cannot be extracted from an unreadable or corrupt source."""

    def __init__(
        self,
        message: str,
        file_path: str | None = None,
        document_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize extraction error.

        Args:
            message: Error message
            file_path: Path of the file that failed extraction
            document_id: ID of the document
            details: Additional context
        """
        details = details or {}
        if file_path:
            details["file_path"] = str(file_path)
        self.file_path = file_path
        super().__init__(message, document_id, details)


class ChunkingError(DocumentProcessingError):
    """Raised when chunking fails unexpectedly."""

    pass


class InvalidStatusTransitionError(StudyRagException):
    """Raised when a document status change is not allowed."""

    def __init__(self, current: str, target: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize transition error.

        Args:
            current: Current document status
            target: Requested document status
            details: Additional context
        """
        details = details or {}
        details.update({"current": str(current), "target": str(target)})
        super().__init__(f"Cannot transition document from {current} to {target}", details)


class NotReadyError(StudyRagException):
    """Raised when retrieval is attempted against a document that is not ready."""

    def __init__(
        self,
        document_id: str,
        status: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize not ready error.

        Args:
            document_id: ID of the document
            status: Current document status
            details: Additional context
        """
        details = details or {}
        details["document_id"] = str(document_id)
        if status:
            details["status"] = str(status)
        self.status = status
        super().__init__(f"Document not found or not ready: {document_id}", details)


class RetrievalError(StudyRagException):
    """Raised when chunks cannot be loaded for retrieval."""

    def __init__(
        self,
        message: str,
        document_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize retrieval error.

        Args:
            message: Error message
            document_id: Document ID for the failed retrieval
            details: Additional context
        """
        details = details or {}
        if document_id:
            details["document_id"] = str(document_id)
        super().__init__(message, details)
