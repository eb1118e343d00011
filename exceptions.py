"""Custom exception classes for table cell reconstruction errors."""

from __future__ import annotations


class TableCellsException(Exception):
    """Base exception for table cell reconstruction errors."""
    pass


class EmptyArgumentError(TableCellsException, ValueError):
    """Raised when a required operand is missing, empty or malformed.

    Signals a caller bug; never retried.
    """
    pass


class TableExtractionError(TableCellsException):
    """Raised by the extraction pipeline when upstream geometry is unusable."""
    pass


class PDFValidationError(TableExtractionError):
    """Raised when PDF path validation fails."""
    pass


class PDFReadError(TableExtractionError):
    """Raised when PDF cannot be opened or its content cannot be read."""
    pass


class PDFAnnotationError(TableCellsException):
    """Raised when debug drawing operations fail."""
    pass


class JSONExportError(TableCellsException):
    """Raised when JSON export fails."""
    pass
