"""
Custom exceptions for share ingestion.

Classification and gate errors are raised before an upload starts.
Errors that happen during an upload never leave the coordinator; they are
turned into a failed UploadOutcome instead.
"""
from typing import Optional


class ClipboarderException(Exception):
    """Base exception for all clipboarder errors."""

    def __init__(self, message: str, error_code: Optional[int] = None) -> None:
        """
        Initialize the exception.

        Args:
            message: Error message
            error_code: Numeric error code (if available)
        """
        self.message = message
        self.error_code = error_code
        super().__init__(message)


class ClassificationError(ClipboarderException):
    """Raised when a share request cannot be turned into a payload."""
    pass


class UnsupportedShareError(ClassificationError):
    """Raised for action/MIME/reference combinations that are not handled."""

    def __init__(
        self,
        message: str,
        action: Optional[str] = None,
        mime_type: Optional[str] = None
    ) -> None:
        self.action = action
        self.mime_type = mime_type
        super().__init__(message)


class EmptyContentError(ClassificationError):
    """Raised when shared text is empty after trimming whitespace."""
    pass


class UnreadableSourceError(ClipboarderException):
    """Raised when a byte source cannot be opened or fully read."""

    def __init__(self, message: str, uri: Optional[str] = None) -> None:
        """
        Initialize the exception.

        Args:
            message: Error message
            uri: URI of the source that failed
        """
        self.uri = uri
        super().__init__(message)


class AuthenticationRequiredError(ClipboarderException):
    """Raised when no access token is available for the backend."""
    pass


class InvalidStateTransition(ClipboarderException):
    """Raised when an upload attempt is moved along an illegal edge."""
    pass
