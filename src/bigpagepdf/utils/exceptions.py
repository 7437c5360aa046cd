"""
BigPagePdf - Custom Exceptions Module

This module defines custom exception classes for specific error cases
in the BigPagePdf application.
"""


class BigPagePdfError(Exception):
    """Base exception for all BigPagePdf errors.

    All custom exceptions should inherit from this class to allow
    catching any BigPagePdf-specific error.
    """

    def __init__(self, message: str, details: str | None = None) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional technical details for debugging
        """
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} ({self.details})"
        return self.message


class PageNotFoundError(BigPagePdfError, KeyError):
    """Raised when an operation references a page identity that is not in the document.

    Also a KeyError so callers treating the page sequence as a mapping
    can catch it the usual way.
    """

    def __init__(self, identity: int, context: str | None = None) -> None:
        """Initialize the exception.

        Args:
            identity: The page identity that could not be found
            context: Optional description of where the lookup happened
        """
        self.identity = identity
        msg = f"Page {identity} not found"
        if context:
            msg += f" in {context}"
        super().__init__(msg, details=f"identity={identity}")


class InvalidRotationError(BigPagePdfError, ValueError):
    """Raised when a rotation is not a multiple of 90 degrees."""

    def __init__(self, degrees: int) -> None:
        self.degrees = degrees
        super().__init__(
            f"Invalid rotation: {degrees}° (must be a multiple of 90)",
            details=f"degrees={degrees}",
        )


class EmptyResultError(BigPagePdfError):
    """Raised when saving would produce a document without pages."""

    def __init__(self, source_path: str | None = None) -> None:
        """Initialize the exception.

        Args:
            source_path: Optional path of the document being saved
        """
        self.source_path = source_path
        details = f"path={source_path}" if source_path else None
        super().__init__("Cannot save a document with no pages", details=details)


class InvalidPdfError(BigPagePdfError):
    """Raised when a PDF file is invalid or corrupted."""

    def __init__(self, file_path: str, reason: str | None = None) -> None:
        """Initialize the exception.

        Args:
            file_path: Path to the invalid PDF file
            reason: Optional reason why the PDF is invalid
        """
        self.file_path = file_path
        self.reason = reason
        msg = f"Invalid PDF file: {file_path}"
        if reason:
            msg += f" - {reason}"
        super().__init__(msg, details=f"path={file_path}")


class ConfigurationError(BigPagePdfError):
    """Raised when there's a configuration-related error."""

    def __init__(self, setting_name: str | None = None, reason: str | None = None) -> None:
        """Initialize the exception.

        Args:
            setting_name: Optional name of the problematic setting
            reason: Optional reason for the error
        """
        self.setting_name = setting_name
        self.reason = reason

        if setting_name:
            msg = f"Configuration error for '{setting_name}'"
        else:
            msg = "Configuration error"

        if reason:
            msg += f": {reason}"

        super().__init__(msg)
