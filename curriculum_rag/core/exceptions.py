"""
Exception hierarchy for the curriculum RAG core.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class CurriculumRAGException(Exception):
    """Base exception for all curriculum RAG errors."""

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


class ValidationError(CurriculumRAGException):
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


class InvalidChunkParameters(ValidationError):
    """Raised when chunk_size/chunk_overlap cannot produce a terminating split."""

    def __init__(self, chunk_size: int, chunk_overlap: int) -> None:
        super().__init__(
            "chunk_size must be positive and chunk_overlap must be in [0, chunk_size)",
            details={"chunk_size": chunk_size, "chunk_overlap": chunk_overlap},
        )


class DocumentProcessingError(CurriculumRAGException):
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
            details["document_id"] = document_id
        self.document_id = document_id
        super().__init__(message, details)


class DocumentNotFoundError(DocumentProcessingError):
    """Raised when a document id does not exist."""

    def __init__(self, document_id: str) -> None:
        super().__init__(f"Document not found: {document_id}", document_id)


class IngestionInProgressError(DocumentProcessingError):
    """Raised when a document is already being ingested by another caller."""

    def __init__(self, document_id: str) -> None:
        super().__init__(f"Document is already processing: {document_id}", document_id)


class ClaimLostError(DocumentProcessingError):
    """Raised when a run finishes after its PROCESSING claim was recovered or re-taken."""

    def __init__(self, document_id: str) -> None:
        super().__init__(f"Document is no longer claimed by this run: {document_id}", document_id)


class BlobFetchError(DocumentProcessingError):
    """Raised when raw document bytes cannot be fetched."""

    def __init__(
        self,
        message: str,
        locator: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if locator:
            details["locator"] = locator
        super().__init__(message, details=details)


class ExtractionError(DocumentProcessingError):
    """Raised when text extraction from a document fails."""

    def __init__(
        self,
        message: str,
        document_id: str | None = None,
        mime_type: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize extraction error.

        Args:
            message: Error message
            document_id: ID of the document
            mime_type: MIME type of the file that failed extraction
            details: Additional context
        """
        details = details or {}
        if mime_type:
            details["mime_type"] = mime_type
        super().__init__(message, document_id, details)


class EmptyDocumentError(ExtractionError):
    """Raised when extraction succeeds but yields no usable text."""

    pass


class EmbeddingProviderError(CurriculumRAGException):
    """Raised when the upstream embedding call fails, times out or is malformed."""

    pass


class IndexWriteError(CurriculumRAGException):
    """Raised when chunk rows cannot be written to the datastore."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize index write error.

        Args:
            message: Error message
            operation: Operation that failed (insert, delete)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class IngestionFailedError(DocumentProcessingError):
    """Summary error raised by the pipeline after a document was moved to error."""

    def __init__(self, document_id: str, stage: str, cause: BaseException) -> None:
        self.stage = stage
        self.cause = cause
        super().__init__(
            f"Ingestion failed during {stage}: {cause}",
            document_id,
            {"stage": stage, "error_type": type(cause).__name__},
        )
